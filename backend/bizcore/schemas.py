"""Pydantic schemas for API."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Literal, Optional
from datetime import datetime

TaskStatus = Literal["pending", "completed", "revised", "canceled"]
SalesRole = Literal["EXEC", "COORDINATOR", "CRM", "TELECALLER"]


# Attendance: telegram users
class TelegramUserCreate(BaseModel):
    name: str = Field(max_length=255)
    chat_id: Optional[int] = None


class TelegramUserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=255)
    chat_id: Optional[int] = None


class TelegramUserResponse(BaseModel):
    id: int
    name: str
    chat_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# Sales pipeline users
class UserCreate(BaseModel):
    role: Optional[SalesRole] = None
    name: Optional[str] = Field(default=None, max_length=128)
    email: Optional[str] = Field(default=None, max_length=128)


class UserUpdate(UserCreate):
    pass


class UserResponse(BaseModel):
    id: int
    role: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# Task bot
class TaskCreate(BaseModel):
    task: str = Field(max_length=255)
    doer: str = Field(max_length=255)
    urgency: Optional[str] = None
    due_date: Optional[datetime] = None
    department: Optional[str] = None
    status: Optional[TaskStatus] = None
    cancellation_requested: Optional[bool] = None
    cancellation_reason: Optional[str] = None
    extension_requested_date: Optional[datetime] = None


class TaskUpdate(BaseModel):
    """Partial update; only fields present in the payload are written."""
    task: Optional[str] = Field(default=None, max_length=255)
    doer: Optional[str] = Field(default=None, max_length=255)
    urgency: Optional[str] = None
    due_date: Optional[datetime] = None
    department: Optional[str] = None
    status: Optional[TaskStatus] = None
    cancellation_requested: Optional[bool] = None
    cancellation_reason: Optional[str] = None
    extension_requested_date: Optional[datetime] = None


class TaskResponse(BaseModel):
    id: int
    task: str
    doer: str
    urgency: Optional[str] = None
    due_date: Optional[datetime] = None
    cancellation_requested: bool = False
    cancellation_reason: Optional[str] = None
    status: TaskStatus
    extension_requested_date: Optional[datetime] = None
    department: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class TaskListResponse(BaseModel):
    rows: list[TaskResponse]
    count: int
    page: int
    total_pages: int


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class CancellationRequest(BaseModel):
    reason: Optional[str] = None


class ExtensionRequest(BaseModel):
    requested_date: datetime


class WorkflowDecision(BaseModel):
    approved: bool


class DoerSummary(BaseModel):
    doer: str
    total: int
    completed: int
    pending: int
    revised: int
    canceled: int
    completion_rate: float
    benchmark_rating: str


# jobFms masters
class PaperBase(BaseModel):
    paper_name: str = Field(max_length=255)
    gsm: Optional[int] = None
    size_name: str = Field(max_length=255)
    width: float
    height: float
    unit: Optional[str] = None
    size_category: Optional[str] = None
    rate_per_kg: Optional[float] = None
    rate_per_sheet: Optional[float] = None
    category: Optional[str] = None


class PaperCreate(PaperBase):
    pass


class PaperUpdate(BaseModel):
    paper_name: Optional[str] = Field(default=None, max_length=255)
    gsm: Optional[int] = None
    size_name: Optional[str] = Field(default=None, max_length=255)
    width: Optional[float] = None
    height: Optional[float] = None
    unit: Optional[str] = None
    size_category: Optional[str] = None
    rate_per_kg: Optional[float] = None
    rate_per_sheet: Optional[float] = None
    category: Optional[str] = None


class PaperBrief(BaseModel):
    """Brief paper info for nested responses."""
    id: int
    paper_name: str
    size_name: str
    width: float
    height: float
    unit: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class PaperCalculationBrief(BaseModel):
    id: int
    wastage_sheets: Optional[int] = None
    cutting_pattern: Optional[str] = None
    notes: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class PaperResponse(PaperBase):
    id: int
    calculations: list[PaperCalculationBrief] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class PaperCalculationCreate(BaseModel):
    paper_id: int = Field(ge=0)
    wastage_sheets: Optional[int] = None
    cutting_pattern: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None, max_length=255)


class PaperCalculationUpdate(BaseModel):
    paper_id: Optional[int] = Field(default=None, ge=0)
    wastage_sheets: Optional[int] = None
    cutting_pattern: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None, max_length=255)


class PaperCalculationResponse(BaseModel):
    id: int
    paper_id: int
    wastage_sheets: Optional[int] = None
    cutting_pattern: Optional[str] = None
    notes: Optional[str] = None
    paper: Optional[PaperBrief] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UPSCreate(BaseModel):
    item_size_id: int = Field(ge=0)
    ups: int
    paper_size_id: Optional[int] = Field(default=None, ge=0)


class UPSUpdate(BaseModel):
    item_size_id: Optional[int] = Field(default=None, ge=0)
    ups: Optional[int] = None
    paper_size_id: Optional[int] = Field(default=None, ge=0)


class UPSResponse(BaseModel):
    id: int
    item_size_id: int
    ups: int
    paper_size_id: Optional[int] = None
    paper_size: Optional[PaperBrief] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EnquiryItemCreate(BaseModel):
    item: str = Field(max_length=255)


class EnquiryItemUpdate(EnquiryItemCreate):
    pass


class EnquiryItemResponse(BaseModel):
    id: int
    item: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

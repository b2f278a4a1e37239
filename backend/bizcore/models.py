"""SQLAlchemy models for the attendance bot, sales pipeline, task bot and jobFms masters.

Tables without an explicit name in the legacy schema keep the pluralized model
name and camelCase columns (``TelegramUsers``, ``Tasks``); jobFms and sales
tables are snake_case. References between masters are plain key columns with
no database foreign key; see ``relations`` for how they are resolved.
"""
from sqlalchemy import (
    BigInteger, Boolean, Column, DateTime, Enum, Float, Integer, String, Text,
)
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import validates
from sqlalchemy.sql import func

from .database import Base
from .domain_errors import ConstraintError
from .validation import (
    UINT64_MAX,
    INT32_MAX,
    INT32_MIN,
    ensure_bool,
    ensure_choice,
    ensure_datetime,
    ensure_float,
    ensure_int,
    ensure_str,
    install_write_hooks,
)

# BIGINT UNSIGNED on MySQL; SQLite only autoincrements INTEGER PRIMARY KEY.
UnsignedBigInt = (
    BigInteger()
    .with_variant(mysql.BIGINT(unsigned=True), "mysql")
    .with_variant(Integer(), "sqlite")
)
SignedBigInt = BigInteger().with_variant(Integer(), "sqlite")

TASK_STATUSES = ("pending", "completed", "revised", "canceled")
SALES_ROLES = ("EXEC", "COORDINATOR", "CRM", "TELECALLER")


# ---------------------------------------------------------------------------
# Attendance
# ---------------------------------------------------------------------------

class TelegramUser(Base):
    """Attendance bot registry: display name -> Telegram chat."""
    __tablename__ = "TelegramUsers"
    __required_fields__ = ("name",)

    id = Column(SignedBigInt, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    chat_id = Column(BigInteger, unique=True, nullable=True)
    created_at = Column("createdAt", DateTime(timezone=True), server_default=func.now())
    updated_at = Column("updatedAt", DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @validates("name")
    def _validate_name(self, key, value):
        return ensure_str("TelegramUser", key, value, max_length=255)

    @validates("chat_id")
    def _validate_chat_id(self, key, value):
        return ensure_int("TelegramUser", key, value)


# ---------------------------------------------------------------------------
# Sales pipeline
# ---------------------------------------------------------------------------

class User(Base):
    """Sales pipeline actor."""
    __tablename__ = "users"

    id = Column(UnsignedBigInt, primary_key=True, autoincrement=True)
    role = Column(String(32), nullable=True)
    name = Column(String(128), nullable=True)
    email = Column(String(128), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @validates("id")
    def _validate_id(self, key, value):
        value = ensure_int("User", key, value, minimum=1, maximum=UINT64_MAX)
        if self.id is not None and value != self.id:
            raise ConstraintError(
                "User.id cannot be changed once assigned",
                details={"entity": "User", "field": "id"},
            )
        return value

    @validates("role")
    def _validate_role(self, key, value):
        ensure_str("User", key, value, max_length=32)
        return ensure_choice("User", key, value, SALES_ROLES)

    @validates("name", "email")
    def _validate_text(self, key, value):
        return ensure_str("User", key, value, max_length=128)


# ---------------------------------------------------------------------------
# Task bot
# ---------------------------------------------------------------------------

class Task(Base):
    """Task assigned to a doer through the task bot."""
    __tablename__ = "Tasks"
    __required_fields__ = ("task", "doer", "status")

    id = Column(SignedBigInt, primary_key=True, autoincrement=True)
    task = Column(String(255), nullable=False)
    doer = Column(String(255), nullable=False)
    urgency = Column(String(255), nullable=True)
    due_date = Column("dueDate", DateTime(timezone=True), nullable=True)
    cancellation_requested = Column("cancellationRequested", Boolean, default=False)
    cancellation_reason = Column("cancellationReason", Text, nullable=True)
    status = Column(
        Enum(*TASK_STATUSES, name="task_status", validate_strings=True),
        nullable=False,
        default="pending",
    )
    extension_requested_date = Column("extensionRequestedDate", DateTime(timezone=True), nullable=True)
    department = Column(String(255), nullable=True)  # filtering / reporting only
    created_at = Column("createdAt", DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column("updatedAt", DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __init__(self, **kwargs):
        kwargs.setdefault("status", "pending")
        kwargs.setdefault("cancellation_requested", False)
        super().__init__(**kwargs)

    @validates("task", "doer", "urgency", "department")
    def _validate_text(self, key, value):
        return ensure_str("Task", key, value, max_length=255)

    @validates("cancellation_reason")
    def _validate_reason(self, key, value):
        return ensure_str("Task", key, value)

    @validates("status")
    def _validate_status(self, key, value):
        return ensure_choice("Task", key, value, TASK_STATUSES)

    @validates("cancellation_requested")
    def _validate_flag(self, key, value):
        return ensure_bool("Task", key, value)

    @validates("due_date", "extension_requested_date")
    def _validate_dates(self, key, value):
        return ensure_datetime("Task", key, value)


# ---------------------------------------------------------------------------
# jobFms accounts masters
# ---------------------------------------------------------------------------

class PaperMaster(Base):
    """Paper stock with size and rates."""
    __tablename__ = "jobfms_paper_master"
    __required_fields__ = ("paper_name", "size_name", "width", "height")

    id = Column(UnsignedBigInt, primary_key=True, autoincrement=True)
    paper_name = Column(String(255), nullable=False)
    gsm = Column(Integer, nullable=True)
    size_name = Column(String(255), nullable=False)
    width = Column(Float, nullable=False)
    height = Column(Float, nullable=False)
    unit = Column(String(255), default="inches")
    size_category = Column(String(255), nullable=True)
    rate_per_kg = Column(Float, nullable=True)
    rate_per_sheet = Column(Float, nullable=True)
    category = Column(String(255), nullable=True)  # Art, Maplitho, Chromo, Sticker, PVC, Flex...
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __init__(self, **kwargs):
        kwargs.setdefault("unit", "inches")
        super().__init__(**kwargs)

    @validates("paper_name", "size_name", "unit", "size_category", "category")
    def _validate_text(self, key, value):
        return ensure_str("PaperMaster", key, value, max_length=255)

    @validates("gsm")
    def _validate_gsm(self, key, value):
        return ensure_int("PaperMaster", key, value, minimum=INT32_MIN, maximum=INT32_MAX)

    @validates("width", "height", "rate_per_kg", "rate_per_sheet")
    def _validate_numbers(self, key, value):
        return ensure_float("PaperMaster", key, value)


class PaperCalculationMaster(Base):
    """Per-paper costing configuration."""
    __tablename__ = "jobfms_paper_calculation_master"
    __required_fields__ = ("paper_id",)

    id = Column(UnsignedBigInt, primary_key=True, autoincrement=True)
    paper_id = Column(UnsignedBigInt, nullable=False, index=True)
    wastage_sheets = Column(Integer, default=20)
    cutting_pattern = Column(String(255), nullable=True)
    notes = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __init__(self, **kwargs):
        kwargs.setdefault("wastage_sheets", 20)
        super().__init__(**kwargs)

    @validates("paper_id")
    def _validate_paper_id(self, key, value):
        return ensure_int("PaperCalculationMaster", key, value, minimum=0, maximum=UINT64_MAX)

    @validates("wastage_sheets")
    def _validate_wastage(self, key, value):
        return ensure_int("PaperCalculationMaster", key, value, minimum=INT32_MIN, maximum=INT32_MAX)

    @validates("cutting_pattern", "notes")
    def _validate_text(self, key, value):
        return ensure_str("PaperCalculationMaster", key, value, max_length=255)


class UPSMaster(Base):
    """Units-per-sheet lookup.

    ``item_size_id`` is the declared, required key and has no association.
    The ``paperSize`` association is keyed by the separate ``paper_size_id``
    column. ``ups`` carries no positivity rule.
    """
    __tablename__ = "jobfms_ups_master"
    __required_fields__ = ("item_size_id", "ups")

    id = Column(UnsignedBigInt, primary_key=True, autoincrement=True)
    item_size_id = Column(UnsignedBigInt, nullable=False)
    ups = Column(Integer, nullable=False)
    paper_size_id = Column(UnsignedBigInt, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @validates("item_size_id", "paper_size_id")
    def _validate_keys(self, key, value):
        return ensure_int("UPSMaster", key, value, minimum=0, maximum=UINT64_MAX)

    @validates("ups")
    def _validate_ups(self, key, value):
        return ensure_int("UPSMaster", key, value, minimum=INT32_MIN, maximum=INT32_MAX)


class EnquiryForItems(Base):
    """Catalog of enquiry item names, stored lowercase and unique."""
    __tablename__ = "jobfms_enquiry_for_items"
    __required_fields__ = ("item",)

    id = Column(SignedBigInt, primary_key=True, autoincrement=True)
    item = Column(String(255), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @validates("item")
    def _normalize_item(self, key, value):
        value = ensure_str("EnquiryForItems", key, value)
        # lower() can lengthen some characters, so measure the stored form
        return ensure_str("EnquiryForItems", key, value.lower(), max_length=255) if value else None


install_write_hooks(Base)

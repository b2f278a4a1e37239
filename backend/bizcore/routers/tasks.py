"""Task bot endpoints."""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ..config import Settings
from ..database import get_db
from ..dependencies import get_app_settings
from ..models import Task
from ..schemas import (
    CancellationRequest,
    DoerSummary,
    ExtensionRequest,
    TaskCreate,
    TaskListResponse,
    TaskResponse,
    TaskStatusUpdate,
    TaskUpdate,
    WorkflowDecision,
)
from ..use_cases.records import delete_record, get_or_404
from ..use_cases.task_reports import task_summary_use_case
from ..use_cases.tasks import (
    TaskFilters,
    create_task_use_case,
    decide_cancellation_use_case,
    decide_extension_use_case,
    list_tasks_use_case,
    parse_status_list,
    request_cancellation_use_case,
    request_extension_use_case,
    set_task_status_use_case,
    update_task_use_case,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=TaskListResponse)
def get_tasks(
    q: str = "",
    status: str = "",
    urgency: str = "",
    due_from: Optional[date] = None,
    due_to: Optional[date] = None,
    due_from_legacy: Optional[date] = Query(None, alias="dueFrom", include_in_schema=False),
    due_to_legacy: Optional[date] = Query(None, alias="dueTo", include_in_schema=False),
    page: str = "1",
    limit: Optional[str] = None,
    sort: str = "dueDate",
    dir: str = Query("asc"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    List tasks.

    - q: case-insensitive search in task, doer, department
    - status: comma list (pending,revised,completed,canceled)
    - urgency: exact match
    - due_from / due_to: YYYY-MM-DD, inclusive (dueFrom / dueTo also accepted)
    - page, limit: pagination (limit clamped to TASK_PAGE_LIMIT_MAX)
    - sort, dir: dueDate|createdAt|urgency|status, asc|desc
    """
    filters = TaskFilters(
        q=q,
        statuses=parse_status_list(status),
        urgency=urgency,
        due_from=due_from or due_from_legacy,
        due_to=due_to or due_to_legacy,
    )
    result = list_tasks_use_case(
        db=db,
        filters=filters,
        page=page,
        limit=limit if limit is not None else settings.TASK_PAGE_LIMIT_DEFAULT,
        sort=sort,
        direction=dir,
        max_limit=settings.TASK_PAGE_LIMIT_MAX,
    )
    return TaskListResponse(
        rows=[TaskResponse.model_validate(task) for task in result.rows],
        count=result.count,
        page=result.page,
        total_pages=result.total_pages,
    )


@router.get("/reports/summary", response_model=list[DoerSummary])
def get_task_summary(db: Session = Depends(get_db)):
    """Per-doer totals, completion rate and benchmark rating."""
    return [DoerSummary(**summary.as_dict()) for summary in task_summary_use_case(db=db)]


@router.post("", response_model=TaskResponse, status_code=201)
def post_task(data: TaskCreate, db: Session = Depends(get_db)):
    return create_task_use_case(db=db, data=data.model_dump(exclude_unset=True))


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, Task, task_id)


@router.patch("/{task_id}", response_model=TaskResponse)
def patch_task(task_id: int, data: TaskUpdate, db: Session = Depends(get_db)):
    return update_task_use_case(db=db, task_id=task_id, changes=data.model_dump(exclude_unset=True))


@router.delete("/{task_id}", status_code=204)
def delete_task(task_id: int, db: Session = Depends(get_db)):
    delete_record(db, get_or_404(db, Task, task_id))
    return Response(status_code=204)


@router.put("/{task_id}/status", response_model=TaskResponse)
def put_task_status(task_id: int, data: TaskStatusUpdate, db: Session = Depends(get_db)):
    return set_task_status_use_case(db=db, task_id=task_id, status=data.status)


@router.post("/{task_id}/cancellation-request", response_model=TaskResponse)
def post_cancellation_request(task_id: int, data: CancellationRequest, db: Session = Depends(get_db)):
    return request_cancellation_use_case(db=db, task_id=task_id, reason=data.reason)


@router.post("/{task_id}/cancellation-decision", response_model=TaskResponse)
def post_cancellation_decision(task_id: int, data: WorkflowDecision, db: Session = Depends(get_db)):
    return decide_cancellation_use_case(db=db, task_id=task_id, approved=data.approved)


@router.post("/{task_id}/extension-request", response_model=TaskResponse)
def post_extension_request(task_id: int, data: ExtensionRequest, db: Session = Depends(get_db)):
    return request_extension_use_case(db=db, task_id=task_id, requested_date=data.requested_date)


@router.post("/{task_id}/extension-decision", response_model=TaskResponse)
def post_extension_decision(task_id: int, data: WorkflowDecision, db: Session = Depends(get_db)):
    return decide_extension_use_case(db=db, task_id=task_id, approved=data.approved)

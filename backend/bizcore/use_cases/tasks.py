"""Task bot use-cases: CRUD, listing and the cancellation / extension workflow.

Status changes are not guarded here: any status in the enumeration may follow
any other. Only the workflow decisions check that a request is pending.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any

from sqlalchemy import false, func, or_
from sqlalchemy.orm import Session

from ..domain_errors import DomainError
from ..models import TASK_STATUSES, Task
from .records import get_or_404, insert_record, update_record

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "dueDate": Task.due_date,
    "createdAt": Task.created_at,
    "urgency": Task.urgency,
    "status": Task.status,
}
DEFAULT_SORT = "dueDate"
DEFAULT_LIMIT = 50
MAX_LIMIT = 200


@dataclass
class TaskFilters:
    q: str = ""
    statuses: list[str] = field(default_factory=list)
    urgency: str = ""
    due_from: date | None = None
    due_to: date | None = None


@dataclass
class TaskPage:
    rows: list[Task]
    count: int
    page: int
    total_pages: int


def parse_status_list(raw: str | None) -> list[str]:
    """``"pending, revised,,"`` -> ``["pending", "revised"]``."""
    if not raw:
        return []
    return [part.strip() for part in str(raw).split(",") if part.strip()]


def normalize_paging(page: Any, limit: Any, *, max_limit: int = MAX_LIMIT) -> tuple[int, int]:
    """Clamp page to >= 1 and limit to 1..max_limit; unparsable values fall back to defaults."""
    try:
        page_num = int(page)
    except (TypeError, ValueError):
        page_num = 1
    try:
        limit_num = int(limit)
    except (TypeError, ValueError):
        limit_num = DEFAULT_LIMIT
    if limit_num == 0:
        limit_num = DEFAULT_LIMIT
    return max(1, page_num), min(max_limit, max(1, limit_num))


def apply_task_filters(query, filters: TaskFilters):
    if filters.q:
        like = f"%{filters.q.lower()}%"
        query = query.filter(
            or_(
                func.lower(Task.task).like(like),
                func.lower(Task.doer).like(like),
                func.lower(Task.department).like(like),
            )
        )
    if filters.statuses:
        # unknown values match nothing; the enum type rejects them as bind params
        statuses = [status for status in filters.statuses if status in TASK_STATUSES]
        query = query.filter(Task.status.in_(statuses) if statuses else false())
    if filters.urgency:
        query = query.filter(Task.urgency == filters.urgency)
    if filters.due_from:
        query = query.filter(Task.due_date >= datetime.combine(filters.due_from, time.min, tzinfo=timezone.utc))
    if filters.due_to:
        query = query.filter(Task.due_date <= datetime.combine(filters.due_to, time.max, tzinfo=timezone.utc))
    return query


def list_tasks_use_case(
    *,
    db: Session,
    filters: TaskFilters,
    page: Any = 1,
    limit: Any = DEFAULT_LIMIT,
    sort: str = DEFAULT_SORT,
    direction: str = "asc",
    max_limit: int = MAX_LIMIT,
) -> TaskPage:
    """Filtered, sorted, paginated task listing."""
    page_num, limit_num = normalize_paging(page, limit, max_limit=max_limit)
    sort_column = SORT_COLUMNS.get(str(sort), SORT_COLUMNS[DEFAULT_SORT])
    order = sort_column.desc() if str(direction).lower() == "desc" else sort_column.asc()

    query = apply_task_filters(db.query(Task), filters)
    count = query.count()
    rows = (
        query.order_by(order, Task.id)
        .offset((page_num - 1) * limit_num)
        .limit(limit_num)
        .all()
    )
    return TaskPage(
        rows=rows,
        count=count,
        page=page_num,
        total_pages=math.ceil(count / limit_num),
    )


def create_task_use_case(*, db: Session, data: Mapping[str, Any]) -> Task:
    """Insert a task; unset status / cancellation flag take the model defaults."""
    values = {key: value for key, value in data.items() if value is not None}
    return insert_record(db, Task(**values))


def update_task_use_case(*, db: Session, task_id: int, changes: Mapping[str, Any]) -> Task:
    task = get_or_404(db, Task, task_id)
    return update_record(db, task, changes)


def set_task_status_use_case(*, db: Session, task_id: int, status: str) -> Task:
    task = get_or_404(db, Task, task_id)
    old_status = task.status
    update_record(db, task, {"status": status})
    logger.info("Task %s status %s -> %s", task.id, old_status, task.status)
    return task


def request_cancellation_use_case(*, db: Session, task_id: int, reason: str | None) -> Task:
    task = get_or_404(db, Task, task_id)
    return update_record(
        db,
        task,
        {"cancellation_requested": True, "cancellation_reason": reason},
    )


def decide_cancellation_use_case(*, db: Session, task_id: int, approved: bool) -> Task:
    """Approve (task becomes canceled) or reject a pending cancellation request."""
    task = get_or_404(db, Task, task_id)
    if not task.cancellation_requested:
        raise DomainError(
            code="TASK_NO_CANCELLATION_REQUEST",
            http_status=409,
            message="Task has no pending cancellation request",
        )
    changes: dict[str, Any] = {"cancellation_requested": False}
    if approved:
        changes["status"] = "canceled"
    else:
        changes["cancellation_reason"] = None
    update_record(db, task, changes)
    logger.info("Task %s cancellation %s", task.id, "approved" if approved else "rejected")
    return task


def request_extension_use_case(*, db: Session, task_id: int, requested_date: datetime) -> Task:
    task = get_or_404(db, Task, task_id)
    return update_record(db, task, {"extension_requested_date": requested_date})


def decide_extension_use_case(*, db: Session, task_id: int, approved: bool) -> Task:
    """Approve (due date moves, task becomes revised) or reject a pending extension request."""
    task = get_or_404(db, Task, task_id)
    if task.extension_requested_date is None:
        raise DomainError(
            code="TASK_NO_EXTENSION_REQUEST",
            http_status=409,
            message="Task has no pending extension request",
        )
    changes: dict[str, Any] = {"extension_requested_date": None}
    if approved:
        changes["due_date"] = task.extension_requested_date
        changes["status"] = "revised"
    update_record(db, task, changes)
    logger.info("Task %s extension %s", task.id, "approved" if approved else "rejected")
    return task

"""Per-doer task performance summary."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models import TASK_STATUSES, Task


@dataclass
class DoerTaskSummary:
    doer: str
    total: int = 0
    completed: int = 0
    pending: int = 0
    revised: int = 0
    canceled: int = 0

    @property
    def completion_rate(self) -> float:
        if not self.total:
            return 0.0
        return round(self.completed / self.total * 100, 1)

    @property
    def benchmark_rating(self) -> str:
        return benchmark_rating(self.completion_rate)

    def as_dict(self) -> dict:
        data = asdict(self)
        data["completion_rate"] = self.completion_rate
        data["benchmark_rating"] = self.benchmark_rating
        return data


def benchmark_rating(completion_rate: float) -> str:
    if completion_rate >= 90:
        return "Excellent"
    if completion_rate >= 75:
        return "Good"
    if completion_rate >= 50:
        return "Average"
    return "Poor"


def summarize_counts(rows: Iterable[tuple[str, str, int]]) -> list[DoerTaskSummary]:
    """Fold ``(doer, status, count)`` rows into one summary per doer, sorted by doer."""
    summaries: dict[str, DoerTaskSummary] = {}
    for doer, status, count in rows:
        summary = summaries.setdefault(doer, DoerTaskSummary(doer=doer))
        summary.total += count
        if status in TASK_STATUSES:
            setattr(summary, status, getattr(summary, status) + count)
    return [summaries[doer] for doer in sorted(summaries)]


def task_summary_use_case(*, db: Session) -> list[DoerTaskSummary]:
    rows = (
        db.query(Task.doer, Task.status, func.count(Task.id))
        .group_by(Task.doer, Task.status)
        .all()
    )
    return summarize_counts(rows)

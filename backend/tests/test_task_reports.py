from __future__ import annotations

import pytest

from bizcore.models import Task
from bizcore.use_cases.task_reports import (
    benchmark_rating,
    summarize_counts,
    task_summary_use_case,
)


@pytest.mark.parametrize(
    ("rate", "rating"),
    [(100.0, "Excellent"), (90.0, "Excellent"), (89.9, "Good"), (75.0, "Good"),
     (50.0, "Average"), (49.9, "Poor"), (0.0, "Poor")],
)
def test_benchmark_rating_thresholds(rate, rating) -> None:
    assert benchmark_rating(rate) == rating


def test_summarize_counts_folds_rows_per_doer() -> None:
    summaries = summarize_counts(
        [
            ("RAHUL", "completed", 2),
            ("AMIT", "pending", 1),
            ("RAHUL", "pending", 1),
            ("AMIT", "canceled", 1),
        ]
    )

    assert [summary.doer for summary in summaries] == ["AMIT", "RAHUL"]
    rahul = summaries[1].as_dict()
    assert rahul["total"] == 3
    assert rahul["completed"] == 2
    assert rahul["completion_rate"] == 66.7
    assert rahul["benchmark_rating"] == "Average"
    assert summaries[0].completion_rate == 0.0


def test_task_summary_reads_grouped_counts(db) -> None:
    for status in ("completed", "completed", "completed", "revised"):
        db.add(Task(task="Deliver order", doer="PRIYA", status=status))
    db.commit()

    (summary,) = task_summary_use_case(db=db)

    assert summary.doer == "PRIYA"
    assert (summary.total, summary.completed, summary.revised) == (4, 3, 1)
    assert summary.benchmark_rating == "Good"

from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace

import pytest

from bizcore.domain_errors import DomainError
from bizcore.models import Task
from bizcore.use_cases.tasks import (
    decide_cancellation_use_case,
    decide_extension_use_case,
    normalize_paging,
    parse_status_list,
    request_cancellation_use_case,
    request_extension_use_case,
    set_task_status_use_case,
)


class _SessionStub:
    def __init__(self, *, task):
        self._task = task
        self.commit_calls = 0
        self.rollback_calls = 0
        self.refreshed = []

    def get(self, model, record_id):
        if model is not Task:
            raise AssertionError(f"Unexpected model: {model}")
        if self._task is not None and self._task.id == record_id:
            return self._task
        return None

    def commit(self):
        self.commit_calls += 1

    def rollback(self):
        self.rollback_calls += 1

    def refresh(self, obj):
        self.refreshed.append(obj)


def _task(**overrides):
    values = dict(
        id=11,
        task="Prepare quotation",
        doer="RAHUL",
        status="pending",
        due_date=datetime(2026, 3, 1, 18, 0),
        cancellation_requested=False,
        cancellation_reason=None,
        extension_requested_date=None,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def test_request_cancellation_sets_flag_and_reason() -> None:
    task = _task()
    db = _SessionStub(task=task)

    result = request_cancellation_use_case(db=db, task_id=11, reason="client dropped")

    assert result is task
    assert task.cancellation_requested is True
    assert task.cancellation_reason == "client dropped"
    assert task.status == "pending"
    assert db.commit_calls == 1


def test_approving_cancellation_cancels_task_and_keeps_reason() -> None:
    task = _task(cancellation_requested=True, cancellation_reason="duplicate")
    db = _SessionStub(task=task)

    decide_cancellation_use_case(db=db, task_id=11, approved=True)

    assert task.status == "canceled"
    assert task.cancellation_requested is False
    assert task.cancellation_reason == "duplicate"
    assert db.commit_calls == 1


def test_rejecting_cancellation_clears_request() -> None:
    task = _task(cancellation_requested=True, cancellation_reason="duplicate")
    db = _SessionStub(task=task)

    decide_cancellation_use_case(db=db, task_id=11, approved=False)

    assert task.status == "pending"
    assert task.cancellation_requested is False
    assert task.cancellation_reason is None


def test_cancellation_decision_requires_pending_request() -> None:
    db = _SessionStub(task=_task())

    with pytest.raises(DomainError, match="no pending cancellation request") as exc:
        decide_cancellation_use_case(db=db, task_id=11, approved=True)

    assert exc.value.http_status == 409
    assert exc.value.code == "TASK_NO_CANCELLATION_REQUEST"
    assert db.commit_calls == 0


def test_approving_extension_moves_due_date_and_revises() -> None:
    new_date = datetime(2026, 3, 10, 18, 0)
    task = _task()
    db = _SessionStub(task=task)

    request_extension_use_case(db=db, task_id=11, requested_date=new_date)
    assert task.extension_requested_date == new_date

    decide_extension_use_case(db=db, task_id=11, approved=True)

    assert task.due_date == new_date
    assert task.status == "revised"
    assert task.extension_requested_date is None
    assert db.commit_calls == 2


def test_rejecting_extension_keeps_due_date() -> None:
    task = _task(extension_requested_date=datetime(2026, 4, 1))
    db = _SessionStub(task=task)

    decide_extension_use_case(db=db, task_id=11, approved=False)

    assert task.due_date == datetime(2026, 3, 1, 18, 0)
    assert task.status == "pending"
    assert task.extension_requested_date is None


def test_extension_decision_requires_pending_request() -> None:
    db = _SessionStub(task=_task())

    with pytest.raises(DomainError) as exc:
        decide_extension_use_case(db=db, task_id=11, approved=True)

    assert exc.value.code == "TASK_NO_EXTENSION_REQUEST"


def test_status_change_is_unguarded_from_canceled_back_to_pending() -> None:
    task = _task(status="canceled")
    db = _SessionStub(task=task)

    set_task_status_use_case(db=db, task_id=11, status="pending")

    assert task.status == "pending"


def test_same_status_is_a_no_op() -> None:
    task = _task(status="completed")
    db = _SessionStub(task=task)

    set_task_status_use_case(db=db, task_id=11, status="completed")

    assert db.commit_calls == 0


def test_missing_task_is_404_with_stable_code() -> None:
    db = _SessionStub(task=None)

    with pytest.raises(DomainError) as exc:
        request_cancellation_use_case(db=db, task_id=404, reason=None)

    assert exc.value.http_status == 404
    assert exc.value.code == "TASK_NOT_FOUND"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", []),
        (None, []),
        ("pending", ["pending"]),
        (" pending, revised ,,canceled ", ["pending", "revised", "canceled"]),
    ],
)
def test_parse_status_list(raw, expected) -> None:
    assert parse_status_list(raw) == expected


@pytest.mark.parametrize(
    ("page", "limit", "expected"),
    [
        ("1", "50", (1, 50)),
        ("0", "10", (1, 10)),
        ("-3", "500", (1, 200)),
        ("abc", "xyz", (1, 50)),
        ("4", "0", (4, 50)),
        (2, -5, (2, 1)),
    ],
)
def test_normalize_paging_clamps(page, limit, expected) -> None:
    assert normalize_paging(page, limit) == expected

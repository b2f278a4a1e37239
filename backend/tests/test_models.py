from __future__ import annotations

from datetime import date, datetime

import pytest
from sqlalchemy.exc import IntegrityError

from bizcore.domain_errors import ConstraintError, FieldTypeError, ValidationError
from bizcore.models import (
    EnquiryForItems,
    PaperCalculationMaster,
    PaperMaster,
    Task,
    TelegramUser,
    UPSMaster,
    User,
)
from bizcore.persistence import commit_or_raise


@pytest.mark.parametrize(
    ("raw", "stored"),
    [
        ("Paper", "paper"),
        ("VISITING CARDS", "visiting cards"),
        ("letter heads", "letter heads"),
        ("", None),
        (None, None),
    ],
)
def test_enquiry_item_is_lowercased_or_null(raw, stored) -> None:
    assert EnquiryForItems(item=raw).item == stored


def test_enquiry_item_is_normalized_on_update_too() -> None:
    record = EnquiryForItems(item="brochure")
    record.item = "BroChure A4"
    assert record.item == "brochure a4"


def test_task_defaults_are_applied_at_construction() -> None:
    task = Task(task="Send invoice", doer="PRIYA")
    assert task.status == "pending"
    assert task.cancellation_requested is False
    assert task.cancellation_reason is None


def test_task_rejects_status_outside_enumeration() -> None:
    with pytest.raises(ValidationError) as exc:
        Task(task="Send invoice", doer="PRIYA", status="archived")

    assert isinstance(exc.value, ConstraintError)
    assert exc.value.details["allowed"] == ["pending", "completed", "revised", "canceled"]


def test_task_status_transitions_are_unguarded() -> None:
    task = Task(task="t", doer="d", status="canceled")
    task.status = "pending"
    task.status = "completed"
    task.status = "revised"
    assert task.status == "revised"


def test_task_date_fields_require_dates() -> None:
    with pytest.raises(FieldTypeError):
        Task(task="t", doer="d", due_date="tomorrow")
    task = Task(task="t", doer="d", due_date=date(2026, 3, 1))
    assert task.due_date == datetime(2026, 3, 1)


def test_task_cancellation_flag_must_be_boolean() -> None:
    with pytest.raises(FieldTypeError):
        Task(task="t", doer="d", cancellation_requested="yes")


def test_integer_columns_reject_other_types() -> None:
    with pytest.raises(FieldTypeError) as exc:
        TelegramUser(name="A", chat_id="12345")
    assert isinstance(exc.value, TypeError)

    with pytest.raises(FieldTypeError):
        UPSMaster(item_size_id=1, ups=2.5)
    with pytest.raises(FieldTypeError):
        PaperCalculationMaster(paper_id=True)


def test_chat_id_accepts_full_signed_64_bit_range() -> None:
    assert TelegramUser(name="A", chat_id=-(2**63)).chat_id == -(2**63)
    assert TelegramUser(name="A", chat_id=2**63 - 1).chat_id == 2**63 - 1
    with pytest.raises(ValidationError) as exc:
        TelegramUser(name="A", chat_id=2**63)
    assert exc.value.code == "FIELD_OUT_OF_RANGE"


def test_string_length_is_checked() -> None:
    with pytest.raises(ValidationError) as exc:
        User(name="x" * 129)
    assert exc.value.code == "FIELD_TOO_LONG"


def test_user_role_is_a_closed_set() -> None:
    assert User(role="TELECALLER").role == "TELECALLER"
    assert User(role=None).role is None
    with pytest.raises(ConstraintError):
        User(role="MANAGER")


def test_user_id_cannot_change_once_assigned() -> None:
    user = User(id=7, name="Exec")
    user.id = 7
    with pytest.raises(ConstraintError):
        user.id = 8
    assert user.id == 7


def test_paper_calculation_defaults_wastage_to_twenty(db) -> None:
    calc = PaperCalculationMaster(paper_id=1)
    db.add(calc)
    db.commit()
    db.refresh(calc)

    assert calc.wastage_sheets == 20


def test_task_reads_back_defaults_after_insert(db) -> None:
    task = Task(task="Call vendor", doer="AMIT")
    db.add(task)
    db.commit()

    stored = db.get(Task, task.id)
    db.refresh(stored)
    assert stored.status == "pending"
    assert stored.cancellation_requested is False


def test_ups_zero_is_accepted(db) -> None:
    row = UPSMaster(item_size_id=3, ups=0)
    db.add(row)
    db.commit()

    assert db.get(UPSMaster, row.id).ups == 0


@pytest.mark.parametrize(
    "record",
    [
        TelegramUser(),
        Task(doer="AMIT"),
        Task(task="Call vendor"),
        PaperCalculationMaster(),
        UPSMaster(ups=4),
        UPSMaster(item_size_id=4),
        EnquiryForItems(item=""),
        PaperMaster(paper_name="Art", size_name="A4", width=8.3),
    ],
    ids=lambda record: type(record).__name__,
)
def test_missing_required_field_fails_on_write(db, record) -> None:
    db.add(record)
    with pytest.raises(ValidationError) as exc:
        commit_or_raise(db, entity=type(record).__name__)

    assert exc.value.code == "FIELD_REQUIRED"


def test_update_nulling_required_field_fails(db) -> None:
    task = Task(task="Call vendor", doer="AMIT")
    db.add(task)
    db.commit()

    task.doer = None
    with pytest.raises(ValidationError) as exc:
        commit_or_raise(db, entity="Task")
    assert exc.value.details["fields"] == ["doer"]


def test_database_still_enforces_unique_normalized_item(db) -> None:
    db.add(EnquiryForItems(item="Paper"))
    db.commit()

    db.add(EnquiryForItems(item="paper"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()

from __future__ import annotations

import pytest

from bizcore.domain_errors import UniquenessError, ValidationError
from bizcore.models import EnquiryForItems
from bizcore.persistence import commit_or_raise
from bizcore.use_cases.enquiry_items import add_enquiry_item, list_enquiry_items, update_enquiry_item


def test_items_are_stored_lowercased_and_listed_in_order(db) -> None:
    add_enquiry_item(db=db, item="Visiting Cards")
    add_enquiry_item(db=db, item="BROCHURE")

    assert [row.item for row in list_enquiry_items(db=db)] == ["brochure", "visiting cards"]


def test_case_insensitive_duplicate_is_rejected(db) -> None:
    add_enquiry_item(db=db, item="Paper")

    with pytest.raises(UniquenessError) as exc:
        add_enquiry_item(db=db, item="paper")

    assert exc.value.details["value"] == "paper"
    assert len(list_enquiry_items(db=db)) == 1


def test_database_uniqueness_is_translated_on_commit(db) -> None:
    db.add(EnquiryForItems(item="Paper"))
    db.commit()

    db.add(EnquiryForItems(item="PAPER"))
    with pytest.raises(UniquenessError):
        commit_or_raise(db, entity="EnquiryForItems")

    assert db.query(EnquiryForItems).count() == 1


def test_empty_item_fails_required_check(db) -> None:
    with pytest.raises(ValidationError) as exc:
        add_enquiry_item(db=db, item="")

    assert exc.value.code == "FIELD_REQUIRED"
    assert exc.value.details["fields"] == ["item"]


def test_rename_is_lowercased(db) -> None:
    record = add_enquiry_item(db=db, item="flyer")

    renamed = update_enquiry_item(db=db, item_id=record.id, item="Flyer A5")

    assert renamed.item == "flyer a5"


def test_rename_to_case_variant_of_existing_item_is_rejected(db) -> None:
    add_enquiry_item(db=db, item="paper")
    other = add_enquiry_item(db=db, item="board")

    with pytest.raises(UniquenessError):
        update_enquiry_item(db=db, item_id=other.id, item="PAPER")

    assert db.get(EnquiryForItems, other.id).item == "board"


def test_rename_to_own_name_in_other_case_is_allowed(db) -> None:
    record = add_enquiry_item(db=db, item="paper")

    assert update_enquiry_item(db=db, item_id=record.id, item="PAPER").item == "paper"


def test_length_is_checked_after_lowercasing() -> None:
    # "İ" lowercases to two code points
    assert len(EnquiryForItems(item="İ" * 127).item) == 254
    with pytest.raises(ValidationError) as exc:
        EnquiryForItems(item="İ" * 128)

    assert exc.value.code == "FIELD_TOO_LONG"

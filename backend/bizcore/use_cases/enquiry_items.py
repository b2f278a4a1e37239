"""Enquiry item catalog use-cases."""
from __future__ import annotations

from sqlalchemy.orm import Session

from ..domain_errors import UniquenessError
from ..models import EnquiryForItems
from .records import get_or_404, insert_record, update_record


def _ensure_item_free(db: Session, item: str | None, *, exclude_id: int | None = None) -> None:
    if item is None:
        return
    query = db.query(EnquiryForItems).filter(EnquiryForItems.item == item)
    if exclude_id is not None:
        query = query.filter(EnquiryForItems.id != exclude_id)
    if query.first() is not None:
        raise UniquenessError(
            f"Enquiry item {item!r} already exists",
            details={"entity": "EnquiryForItems", "field": "item", "value": item},
        )


def list_enquiry_items(*, db: Session) -> list[EnquiryForItems]:
    return db.query(EnquiryForItems).order_by(EnquiryForItems.item).all()


def add_enquiry_item(*, db: Session, item: str | None) -> EnquiryForItems:
    """Insert ``item`` lowercased; a case-insensitive duplicate raises UniquenessError."""
    record = EnquiryForItems(item=item)
    _ensure_item_free(db, record.item)
    return insert_record(db, record)


def update_enquiry_item(*, db: Session, item_id: int, item: str | None) -> EnquiryForItems:
    """Rename an item; the new name is lowercased before the duplicate check."""
    record = get_or_404(db, EnquiryForItems, item_id)
    normalized = EnquiryForItems(item=item).item
    _ensure_item_free(db, normalized, exclude_id=record.id)
    return update_record(db, record, {"item": normalized})

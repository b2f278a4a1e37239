"""Generic load / patch / delete helpers shared by the entity use-cases."""
from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, TypeVar

from sqlalchemy.orm import Session

from ..database import Base
from ..domain_errors import DomainError
from ..persistence import commit_or_raise

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def _error_prefix(model: type[Base]) -> str:
    return re.sub(r"(?<!^)(?=[A-Z][a-z])", "_", model.__name__).upper()


def get_or_404(db: Session, model: type[ModelT], record_id: int) -> ModelT:
    record = db.get(model, record_id)
    if record is None:
        raise DomainError(
            code=f"{_error_prefix(model)}_NOT_FOUND",
            http_status=404,
            message=f"{model.__name__} not found",
            details={"id": record_id},
        )
    return record


def insert_record(db: Session, record: ModelT) -> ModelT:
    db.add(record)
    commit_or_raise(db, entity=type(record).__name__, refresh=record)
    logger.info("Created %s id=%s", type(record).__name__, record.id)
    return record


def apply_changes(record: Any, changes: Mapping[str, Any]) -> list[str]:
    """Assign each changed attribute; model validators run on every assignment."""
    changed = []
    for field, value in changes.items():
        if getattr(record, field) != value:
            setattr(record, field, value)
            changed.append(field)
    return changed


def update_record(db: Session, record: ModelT, changes: Mapping[str, Any]) -> ModelT:
    try:
        changed = apply_changes(record, changes)
    except DomainError:
        db.rollback()
        raise
    if not changed:
        return record
    commit_or_raise(db, entity=type(record).__name__, refresh=record)
    logger.info("Updated %s id=%s fields=%s", type(record).__name__, record.id, ",".join(changed))
    return record


def delete_record(db: Session, record: Base) -> None:
    db.delete(record)
    db.commit()
    logger.info("Deleted %s id=%s", type(record).__name__, record.id)

"""Commit helpers translating storage-engine constraint failures into domain errors."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .domain_errors import DomainError, UniquenessError, ValidationError

logger = logging.getLogger(__name__)

_UNIQUE_MARKERS = ("unique", "duplicate")
_NOT_NULL_MARKERS = ("not null", "null value", "cannot be null")


def translate_integrity_error(exc: IntegrityError, *, entity: str) -> DomainError | None:
    """Map a driver IntegrityError to UniquenessError / ValidationError when recognizable."""
    message = str(exc.orig if exc.orig is not None else exc).lower()
    if any(marker in message for marker in _UNIQUE_MARKERS):
        return UniquenessError(
            f"{entity} violates a uniqueness constraint",
            details={"entity": entity},
        )
    if any(marker in message for marker in _NOT_NULL_MARKERS):
        return ValidationError(
            f"{entity} is missing a required field",
            code="FIELD_REQUIRED",
            details={"entity": entity},
        )
    return None


def commit_or_raise(db: Session, *, entity: str, refresh: Any = None) -> None:
    """Commit the session; on failure roll back and re-raise as a domain error where possible."""
    try:
        db.commit()
    except DomainError:
        # raised by the before_insert/before_update hooks during flush
        db.rollback()
        raise
    except IntegrityError as exc:
        db.rollback()
        translated = translate_integrity_error(exc, entity=entity)
        if translated is None:
            raise
        logger.warning("%s write rejected by database: %s", entity, translated.code)
        raise translated from exc
    if refresh is not None:
        db.refresh(refresh)

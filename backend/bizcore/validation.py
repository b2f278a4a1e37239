"""Field-level write rules shared by the ORM models.

Models call these from ``@validates`` hooks, so every assignment (constructor,
partial update, API or script) goes through the same checks. Required fields
are checked once more right before INSERT/UPDATE because omission cannot be
observed at assignment time.
"""
from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from sqlalchemy import event

from .domain_errors import ConstraintError, FieldTypeError, ValidationError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def _type_error(entity: str, field: str, expected: str, value: Any) -> FieldTypeError:
    return FieldTypeError(
        f"{entity}.{field} expects {expected}, got {type(value).__name__}",
        details={"entity": entity, "field": field, "expected": expected},
    )


def ensure_int(
    entity: str,
    field: str,
    value: Any,
    *,
    minimum: int = INT64_MIN,
    maximum: int = INT64_MAX,
) -> int | None:
    if value is None:
        return None
    # bool is an int subclass but never a valid column value here
    if isinstance(value, bool) or not isinstance(value, int):
        raise _type_error(entity, field, "integer", value)
    if not minimum <= value <= maximum:
        raise ValidationError(
            f"{entity}.{field} is out of range",
            code="FIELD_OUT_OF_RANGE",
            details={"entity": entity, "field": field, "min": minimum, "max": maximum},
        )
    return value


def ensure_float(entity: str, field: str, value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _type_error(entity, field, "number", value)
    return float(value)


def ensure_bool(entity: str, field: str, value: Any) -> bool | None:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise _type_error(entity, field, "boolean", value)
    return value


def ensure_datetime(entity: str, field: str, value: Any) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise _type_error(entity, field, "datetime", value)


def ensure_str(entity: str, field: str, value: Any, *, max_length: int | None = None) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise _type_error(entity, field, "string", value)
    if max_length is not None and len(value) > max_length:
        raise ValidationError(
            f"{entity}.{field} exceeds {max_length} characters",
            code="FIELD_TOO_LONG",
            details={"entity": entity, "field": field, "max_length": max_length},
        )
    return value


def ensure_choice(entity: str, field: str, value: Any, choices: Iterable[str]) -> str | None:
    if value is None:
        return None
    allowed = tuple(choices)
    if value not in allowed:
        raise ConstraintError(
            f"{entity}.{field} must be one of: {', '.join(allowed)}",
            details={"entity": entity, "field": field, "value": value, "allowed": list(allowed)},
        )
    return value


def missing_required_fields(instance: Any) -> list[str]:
    """Names listed in ``__required_fields__`` whose current value is None."""
    return [
        field
        for field in getattr(instance, "__required_fields__", ())
        if getattr(instance, field, None) is None
    ]


def check_required_fields(instance: Any) -> None:
    missing = missing_required_fields(instance)
    if missing:
        entity = type(instance).__name__
        raise ValidationError(
            f"{entity} is missing required field(s): {', '.join(missing)}",
            code="FIELD_REQUIRED",
            details={"entity": entity, "fields": missing},
        )


def _before_write(_mapper, _connection, target) -> None:
    check_required_fields(target)


def install_write_hooks(base: type) -> None:
    """Run the required-field check on every INSERT/UPDATE of ``base`` subclasses."""
    event.listen(base, "before_insert", _before_write, propagate=True)
    event.listen(base, "before_update", _before_write, propagate=True)


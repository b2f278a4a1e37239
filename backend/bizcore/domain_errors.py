"""Domain-level exception primitives with stable machine-readable codes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(eq=False)
class DomainError(Exception):
    """Use-case level error with stable code and HTTP mapping."""

    code: str
    http_status: int
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        return self.message


class ValidationError(DomainError):
    """Required field missing or value rejected by a field rule."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "VALIDATION_FAILED",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(code=code, http_status=422, message=message, details=details)


class ConstraintError(ValidationError):
    """Value outside an enumerated set, or a write to an immutable field."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, code="CONSTRAINT_VIOLATION", details=details)


class FieldTypeError(ValidationError, TypeError):
    """Value does not match the declared storage type of its column."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, code="FIELD_TYPE_MISMATCH", details=details)


class UniquenessError(DomainError):
    """A unique key is already taken."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            code="UNIQUENESS_VIOLATION",
            http_status=409,
            message=message,
            details=details,
        )

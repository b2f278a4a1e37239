"""Sales pipeline user use-cases."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from ..domain_errors import ConstraintError
from ..models import User
from .records import get_or_404, insert_record, update_record


def list_users(*, db: Session, role: str | None = None) -> list[User]:
    query = db.query(User)
    if role:
        query = query.filter(User.role == role)
    return query.order_by(User.id).all()


def create_user(
    *,
    db: Session,
    role: str | None = None,
    name: str | None = None,
    email: str | None = None,
) -> User:
    return insert_record(db, User(role=role, name=name, email=email))


def update_user(*, db: Session, user_id: int, changes: Mapping[str, Any]) -> User:
    if "id" in changes and changes["id"] != user_id:
        raise ConstraintError(
            "User.id cannot be changed once assigned",
            details={"entity": "User", "field": "id"},
        )
    user = get_or_404(db, User, user_id)
    return update_record(db, user, {k: v for k, v in changes.items() if k != "id"})

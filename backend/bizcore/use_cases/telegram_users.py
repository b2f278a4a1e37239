"""Attendance bot registry use-cases."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, Optional

from sqlalchemy.orm import Session

from ..domain_errors import UniquenessError
from ..models import TelegramUser
from .records import get_or_404, insert_record, update_record

logger = logging.getLogger(__name__)

RegistrationOutcome = Literal["registered", "already_registered", "not_found"]


@dataclass(frozen=True)
class RegistrationResult:
    outcome: RegistrationOutcome
    full_name: str
    user: Optional[TelegramUser] = None


def _ensure_chat_id_free(db: Session, chat_id: int | None, *, exclude_id: int | None = None) -> None:
    if chat_id is None:
        return
    query = db.query(TelegramUser).filter(TelegramUser.chat_id == chat_id)
    if exclude_id is not None:
        query = query.filter(TelegramUser.id != exclude_id)
    if query.first() is not None:
        raise UniquenessError(
            "chat_id is already registered to another user",
            details={"entity": "TelegramUser", "field": "chat_id"},
        )


def list_telegram_users(*, db: Session) -> list[TelegramUser]:
    return db.query(TelegramUser).order_by(TelegramUser.name, TelegramUser.id).all()


def create_telegram_user(*, db: Session, name: str | None, chat_id: int | None = None) -> TelegramUser:
    user = TelegramUser(name=name, chat_id=chat_id)
    _ensure_chat_id_free(db, user.chat_id)
    return insert_record(db, user)


def update_telegram_user(*, db: Session, user_id: int, changes: Mapping[str, Any]) -> TelegramUser:
    user = get_or_404(db, TelegramUser, user_id)
    if "chat_id" in changes:
        _ensure_chat_id_free(db, changes["chat_id"], exclude_id=user.id)
    return update_record(db, user, changes)


def registration_name(first_name: str | None, last_name: str | None) -> str:
    """Name the bot looks up: "FIRST LAST", upper-cased."""
    return f"{first_name or ''} {last_name or ''}".strip().upper()


def register_chat(
    *,
    db: Session,
    first_name: str | None,
    last_name: str | None,
    chat_id: int,
) -> RegistrationResult:
    """Attach ``chat_id`` to the pre-created TelegramUser matching the sender's name."""
    full_name = registration_name(first_name, last_name)
    user = db.query(TelegramUser).filter(TelegramUser.name == full_name).first()
    if user is None:
        logger.info("Telegram registration: no user named %r", full_name)
        return RegistrationResult(outcome="not_found", full_name=full_name)
    if user.chat_id is not None:
        return RegistrationResult(outcome="already_registered", full_name=full_name, user=user)

    _ensure_chat_id_free(db, chat_id, exclude_id=user.id)
    update_record(db, user, {"chat_id": chat_id})
    logger.info("Telegram registration: linked chat %s to user %s", chat_id, user.id)
    return RegistrationResult(outcome="registered", full_name=full_name, user=user)

"""
Attendance bot routes.
- Telegram user registry (name <-> chat_id)
- Webhook handler for the /register command
"""
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session
import logging

from ..config import Settings
from ..database import get_db
from ..dependencies import get_app_settings
from ..domain_errors import UniquenessError
from ..models import TelegramUser
from ..schemas import TelegramUserCreate, TelegramUserResponse, TelegramUserUpdate
from ..use_cases.records import delete_record, get_or_404
from ..use_cases.telegram_users import (
    create_telegram_user,
    list_telegram_users,
    register_chat,
    update_telegram_user,
)

router = APIRouter(tags=["telegram"])
logger = logging.getLogger(__name__)

REGISTRATION_REPLIES = {
    "not_found": '❌ Your name "{name}" is not found in the system. Please contact admin to add you.',
    "already_registered": "✅ You are already registered.",
    "registered": "✅ {name}, you are now registered with Telegram ID.",
}
REGISTRATION_FAILED_REPLY = "⚠️ Registration failed. Please try again or contact support."


@router.get("/telegram-users", response_model=list[TelegramUserResponse])
def get_telegram_users(db: Session = Depends(get_db)):
    """List registered attendance users."""
    return list_telegram_users(db=db)


@router.post("/telegram-users", response_model=TelegramUserResponse, status_code=201)
def post_telegram_user(data: TelegramUserCreate, db: Session = Depends(get_db)):
    """Pre-create a user so they can /register from the bot."""
    return create_telegram_user(db=db, name=data.name, chat_id=data.chat_id)


@router.get("/telegram-users/{user_id}", response_model=TelegramUserResponse)
def get_telegram_user(user_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, TelegramUser, user_id)


@router.patch("/telegram-users/{user_id}", response_model=TelegramUserResponse)
def patch_telegram_user(user_id: int, data: TelegramUserUpdate, db: Session = Depends(get_db)):
    return update_telegram_user(db=db, user_id=user_id, changes=data.model_dump(exclude_unset=True))


@router.delete("/telegram-users/{user_id}", status_code=204)
def delete_telegram_user(user_id: int, db: Session = Depends(get_db)):
    delete_record(db, get_or_404(db, TelegramUser, user_id))
    return Response(status_code=204)


def _reply(chat_id: int, text: str) -> dict:
    return {"ok": True, "method": "sendMessage", "chat_id": chat_id, "text": text}


@router.post("/telegram/webhook")
async def telegram_webhook(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Telegram bot webhook handler.

    Handles ``/register``: the sender's "FIRST LAST" name (upper-cased) must
    match a pre-created TelegramUser, whose chat_id is then stored.

    Always answers 200 (Telegram retries on non-2xx); replies are sent back
    in the webhook response body.
    """
    if settings.TELEGRAM_WEBHOOK_SECRET:
        token = request.headers.get("X-Telegram-Bot-Api-Secret-Token")
        if token != settings.TELEGRAM_WEBHOOK_SECRET:
            logger.warning("Rejected webhook call with invalid secret token")
            return {"ok": False, "error": "Invalid secret"}

    body = await request.json()
    message = body.get("message")
    if not message:
        # edited_message, callback_query, ...
        return {"ok": True}

    text = (message.get("text") or "").strip()
    command = text.split(maxsplit=1)[0].split("@", 1)[0] if text else ""
    if command != "/register":
        return {"ok": True}

    chat_id = message["chat"]["id"]
    sender = message.get("from") or {}
    logger.info("register is called from chat %s", chat_id)

    try:
        result = register_chat(
            db=db,
            first_name=sender.get("first_name"),
            last_name=sender.get("last_name"),
            chat_id=chat_id,
        )
    except UniquenessError:
        logger.warning("Chat %s is already linked to another user", chat_id)
        return _reply(chat_id, REGISTRATION_FAILED_REPLY)
    except Exception:
        # Telegram retries non-2xx updates, so failures still get a reply
        db.rollback()
        logger.exception("Register error")
        return _reply(chat_id, REGISTRATION_FAILED_REPLY)

    return _reply(chat_id, REGISTRATION_REPLIES[result.outcome].format(name=result.full_name))

from __future__ import annotations

import pytest

from bizcore.domain_errors import UniquenessError
from bizcore.models import TelegramUser
from bizcore.use_cases.telegram_users import (
    create_telegram_user,
    list_telegram_users,
    register_chat,
    registration_name,
    update_telegram_user,
)


def test_chat_id_is_unique_across_users(db) -> None:
    create_telegram_user(db=db, name="ASHA RAO", chat_id=555001)

    with pytest.raises(UniquenessError) as exc:
        create_telegram_user(db=db, name="VIKRAM SETH", chat_id=555001)

    assert exc.value.details["field"] == "chat_id"
    assert [user.name for user in list_telegram_users(db=db)] == ["ASHA RAO"]


def test_users_without_chat_id_can_coexist(db) -> None:
    create_telegram_user(db=db, name="ASHA RAO")
    create_telegram_user(db=db, name="VIKRAM SETH")

    assert len(list_telegram_users(db=db)) == 2


def test_update_may_keep_own_chat_id_but_not_take_another(db) -> None:
    asha = create_telegram_user(db=db, name="ASHA RAO", chat_id=1)
    vikram = create_telegram_user(db=db, name="VIKRAM SETH", chat_id=2)

    update_telegram_user(db=db, user_id=asha.id, changes={"chat_id": 1, "name": "ASHA R"})
    assert db.get(TelegramUser, asha.id).name == "ASHA R"

    with pytest.raises(UniquenessError):
        update_telegram_user(db=db, user_id=vikram.id, changes={"chat_id": 1})
    assert db.get(TelegramUser, vikram.id).chat_id == 2


@pytest.mark.parametrize(
    ("first", "last", "expected"),
    [
        ("Asha", "Rao", "ASHA RAO"),
        ("asha", None, "ASHA"),
        (None, None, ""),
        (" Asha ", "", "ASHA"),
    ],
)
def test_registration_name(first, last, expected) -> None:
    assert registration_name(first, last) == expected


def test_register_links_chat_to_precreated_user(db) -> None:
    user = create_telegram_user(db=db, name="ASHA RAO")

    result = register_chat(db=db, first_name="Asha", last_name="Rao", chat_id=9001)

    assert result.outcome == "registered"
    assert result.full_name == "ASHA RAO"
    assert db.get(TelegramUser, user.id).chat_id == 9001


def test_register_reports_already_registered(db) -> None:
    create_telegram_user(db=db, name="ASHA RAO", chat_id=9001)

    result = register_chat(db=db, first_name="Asha", last_name="Rao", chat_id=1234)

    assert result.outcome == "already_registered"
    assert result.user.chat_id == 9001


def test_register_unknown_name(db) -> None:
    result = register_chat(db=db, first_name="Nobody", last_name=None, chat_id=1)

    assert result.outcome == "not_found"
    assert result.user is None


def test_register_refuses_chat_linked_to_someone_else(db) -> None:
    create_telegram_user(db=db, name="ASHA RAO", chat_id=9001)
    create_telegram_user(db=db, name="VIKRAM SETH")

    with pytest.raises(UniquenessError):
        register_chat(db=db, first_name="Vikram", last_name="Seth", chat_id=9001)

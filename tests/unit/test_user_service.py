from __future__ import annotations

import uuid

import pytest

from booktalk_service.application.dto.principal import Principal
from booktalk_service.application.exceptions import NotFoundError, ValidationError
from booktalk_service.services import user_service
from tests.conftest import FakeUoW, make_user


@pytest.fixture
def uow_with_user():
    uow = FakeUoW()
    user = uow.add_user(make_user(first_name="Jane", last_name="Doe"))
    return uow, user, Principal(user_id=user.id)


@pytest.mark.asyncio
async def test_search_is_case_insensitive(uow_with_user):
    uow, user, _ = uow_with_user
    uow.add_user(make_user(first_name="Mark", last_name="Twain"))

    found = await user_service.search_users("jAn", uow)

    assert [u.id for u in found] == [user.id]


@pytest.mark.asyncio
async def test_empty_search_lists_everyone(uow_with_user):
    uow, _, _ = uow_with_user
    uow.add_user(make_user(first_name="Mark", last_name="Twain"))

    assert len(await user_service.search_users("  ", uow)) == 2


@pytest.mark.asyncio
async def test_update_profile_picture_stores_path(uow_with_user):
    uow, _, principal = uow_with_user

    user = await user_service.update_profile_picture(principal, "uploads/jane.png", uow)

    assert user.image == "uploads/jane.png"
    assert uow._committed is True


@pytest.mark.asyncio
async def test_update_profile_picture_requires_path(uow_with_user):
    uow, _, principal = uow_with_user

    with pytest.raises(ValidationError, match="No image provided"):
        await user_service.update_profile_picture(principal, "", uow)


@pytest.mark.asyncio
async def test_update_profile_picture_unknown_user():
    with pytest.raises(NotFoundError):
        await user_service.update_profile_picture(
            Principal(user_id=uuid.uuid4()), "uploads/x.png", FakeUoW(),
        )


@pytest.mark.asyncio
async def test_remove_profile_picture(uow_with_user):
    uow, user, principal = uow_with_user
    await user_service.update_profile_picture(principal, "uploads/jane.png", uow)

    await user_service.remove_profile_picture(principal, uow)

    assert uow.users._users[user.id].image is None


@pytest.mark.asyncio
async def test_update_username(uow_with_user):
    uow, _, principal = uow_with_user

    user = await user_service.update_username(principal, " reader42 ", uow)

    assert user.username == "reader42"


@pytest.mark.asyncio
async def test_update_username_rejects_blank(uow_with_user):
    uow, _, principal = uow_with_user

    with pytest.raises(ValidationError):
        await user_service.update_username(principal, " ", uow)


@pytest.mark.asyncio
async def test_created_event_upserts_profile_with_default_username():
    uow = FakeUoW()
    user_id = uuid.uuid4()

    user = await user_service.apply_user_event(
        "user.created",
        {"user_id": str(user_id), "first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"},
        uow,
    )

    assert user is not None
    assert user.id == user_id
    assert user.username == "Ada L"
    assert uow.users._users[user_id].email == "ada@example.com"


@pytest.mark.asyncio
async def test_updated_event_overwrites_profile(uow_with_user):
    uow, user, _ = uow_with_user

    await user_service.apply_user_event(
        "user.updated",
        {
            "user_id": str(user.id),
            "first_name": "Janet",
            "last_name": "Doe",
            "username": "janet",
            "email": user.email,
        },
        uow,
    )

    assert uow.users._users[user.id].first_name == "Janet"
    assert uow.users._users[user.id].username == "janet"


@pytest.mark.asyncio
async def test_event_missing_fields_is_rejected():
    with pytest.raises(ValidationError):
        await user_service.apply_user_event("user.created", {"user_id": "nope"}, FakeUoW())


@pytest.mark.asyncio
async def test_deleted_and_unknown_events_change_nothing(uow_with_user):
    uow, user, _ = uow_with_user

    assert await user_service.apply_user_event("user.deleted", {"user_id": str(user.id)}, uow) is None
    assert await user_service.apply_user_event("user.renamed", {}, uow) is None
    assert user.id in uow.users._users
    assert uow._committed is False

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from booktalk_service.application.dto.principal import Principal
from booktalk_service.application.dto.user import UserProfileDTO
from booktalk_service.application.exceptions import NotFoundError, ValidationError
from booktalk_service.application.uow import UnitOfWork
from booktalk_service.domain.entities.user import User
from booktalk_service.domain.value_objects.enums import UserEventType
from booktalk_service.domain.value_objects.ids import parse_id

logger = logging.getLogger(__name__)


async def list_users(uow: UnitOfWork) -> list[User]:
    return await uow.users.list_all()


async def search_users(query: str | None, uow: UnitOfWork) -> list[User]:
    q = (query or "").strip()
    if not q:
        return await uow.users.list_all()
    return await uow.users.search(q)


async def _require_user(user_id: UUID, uow: UnitOfWork) -> User:
    user = await uow.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("No user found.")
    return user


async def update_profile_picture(
    principal: Principal,
    image_path: str | None,
    uow: UnitOfWork,
) -> User:
    """Store the path handed over by the upload component. The path is opaque here."""
    if not image_path or not image_path.strip():
        raise ValidationError("No image provided.")
    await _require_user(principal.user_id, uow)
    await uow.users_w.set_image(principal.user_id, image_path.strip())
    await uow.commit()
    return await _require_user(principal.user_id, uow)


async def remove_profile_picture(principal: Principal, uow: UnitOfWork) -> None:
    await _require_user(principal.user_id, uow)
    await uow.users_w.set_image(principal.user_id, None)
    await uow.commit()


async def update_username(
    principal: Principal,
    username: str | None,
    uow: UnitOfWork,
) -> User:
    if not username or not username.strip():
        raise ValidationError("Username must not be empty.")
    await _require_user(principal.user_id, uow)
    await uow.users_w.set_username(principal.user_id, username.strip())
    await uow.commit()
    return await _require_user(principal.user_id, uow)


def _profile_from_fields(fields: dict[str, Any]) -> UserProfileDTO:
    user_id = parse_id(fields.get("user_id"))
    first_name = (fields.get("first_name") or "").strip()
    last_name = (fields.get("last_name") or "").strip()
    email = (fields.get("email") or "").strip()
    if user_id is None or not first_name or not last_name or not email:
        raise ValidationError("User event is missing profile fields")
    # Same default display handle the signup flow hands out: "Jane D".
    username = (fields.get("username") or "").strip() or f"{first_name} {last_name[:1]}"
    return UserProfileDTO(
        id=user_id,
        first_name=first_name,
        last_name=last_name,
        username=username,
        email=email,
        image=fields.get("image") or None,
    )


async def apply_user_event(
    event_type: str,
    fields: dict[str, Any],
    uow: UnitOfWork,
) -> User | None:
    """Mirror a profile change published by the identity service."""
    if event_type in (UserEventType.CREATED, UserEventType.UPDATED):
        user = await uow.users_w.upsert(_profile_from_fields(fields))
        await uow.commit()
        logger.info("Profile %s synced from %s", user.id, event_type)
        return user

    if event_type == UserEventType.DELETED:
        # Messages and books keep their references; the chat list shows no name.
        logger.info("User %s deleted upstream, keeping local records", fields.get("user_id"))
        return None

    logger.debug("Ignoring unknown user event: %s", event_type)
    return None

from __future__ import annotations

import logging
import uuid
from uuid import UUID

from booktalk_service.application.dto.principal import Principal
from booktalk_service.application.exceptions import ValidationError
from booktalk_service.application.policies.permissions import assert_self
from booktalk_service.application.ports.clock import Clock, utc_clock
from booktalk_service.application.uow import UnitOfWork
from booktalk_service.domain.entities.message import Message
from booktalk_service.domain.value_objects.ids import parse_id

logger = logging.getLogger(__name__)


async def create_message(
    sender_id: UUID | str,
    receiver_id: UUID | str,
    text: str | None,
    uow: UnitOfWork,
    *,
    clock: Clock = utc_clock,
) -> Message:
    """Persist a new unread message and return the stored record.

    This is the only write path for messages; the HTTP endpoint and the
    WebSocket ``sendMessage`` handler both go through it.
    """
    sender = parse_id(sender_id)
    receiver = parse_id(receiver_id)
    if sender is None or receiver is None:
        raise ValidationError("Invalid user id")
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Message text must not be empty")

    msg = Message(
        id=uuid.uuid4(),
        sender_id=sender,
        receiver_id=receiver,
        text=text,
        read=False,
        read_at=None,
        created_at=clock.now(),
    )
    msg = await uow.messages_w.create(msg)
    await uow.commit()

    logger.info("Message %s stored (%s -> %s)", msg.id, sender, receiver)
    return msg


async def list_messages_for_user(
    principal: Principal,
    uow: UnitOfWork,
    *,
    user_id: UUID | None = None,
) -> list[Message]:
    """Full history of the caller, oldest first.

    ``user_id`` is accepted for the ``/messages/{userId}`` route and must
    match the caller.
    """
    if user_id is not None:
        assert_self(principal, user_id)
    return await uow.messages.list_for_user(principal.user_id)


async def list_conversation(
    principal: Principal,
    other_user_id: UUID | str,
    uow: UnitOfWork,
    *,
    clock: Clock = utc_clock,
) -> list[Message]:
    """Mark the other side's messages read, then return the whole thread.

    A message created concurrently between the two steps may come back
    unread; the next call picks it up.
    """
    other = parse_id(other_user_id)
    if other is None:
        raise ValidationError("Invalid user id")

    marked = await uow.messages_w.mark_read(other, principal.user_id, clock.now())
    messages = await uow.messages.list_between(principal.user_id, other)
    await uow.commit()

    if marked:
        logger.debug("Marked %d messages from %s read for %s", marked, other, principal.user_id)
    return messages

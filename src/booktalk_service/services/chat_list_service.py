from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable
from uuid import UUID

from booktalk_service.application.dto.principal import Principal
from booktalk_service.application.uow import UnitOfWork
from booktalk_service.domain.entities.chat import ChatSummary
from booktalk_service.domain.entities.message import Message
from booktalk_service.domain.entities.user import User


@dataclass(slots=True)
class _Group:
    latest: Message
    unread: int = 0


def _newer(candidate: Message, current: Message) -> bool:
    # Equal timestamps fall back to the id so the pick is stable.
    return (candidate.created_at, candidate.id) > (current.created_at, current.id)


def summarize_chats(
    user_id: UUID,
    messages: Iterable[Message],
    profiles: dict[UUID, User],
) -> list[ChatSummary]:
    """Group a user's messages by counterparty, most recent conversation first."""
    groups: dict[UUID, _Group] = {}
    for msg in messages:
        if user_id not in (msg.sender_id, msg.receiver_id):
            continue
        other = msg.counterparty(user_id)
        group = groups.get(other)
        if group is None:
            group = groups[other] = _Group(latest=msg)
        elif _newer(msg, group.latest):
            group.latest = msg
        if msg.receiver_id == user_id and not msg.read:
            group.unread += 1

    summaries = []
    for other, group in groups.items():
        profile = profiles.get(other)
        summaries.append(
            ChatSummary(
                other_user_id=other,
                first_name=profile.first_name if profile else None,
                last_name=profile.last_name if profile else None,
                last_message=group.latest.text,
                last_message_time=group.latest.created_at,
                unread_count=group.unread,
            )
        )
    summaries.sort(key=_sort_key, reverse=True)
    return summaries


def _sort_key(summary: ChatSummary) -> tuple[datetime, str]:
    return summary.last_message_time, str(summary.other_user_id)


async def list_chats(principal: Principal, uow: UnitOfWork) -> list[ChatSummary]:
    messages = await uow.messages.list_for_user(principal.user_id)
    counterparties = list({m.counterparty(principal.user_id) for m in messages})
    profiles = await uow.users.get_many(counterparties)
    return summarize_chats(principal.user_id, messages, profiles)

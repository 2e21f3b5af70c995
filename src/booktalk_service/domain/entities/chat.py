from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class ChatSummary:
    """Latest state of one conversation, derived from the message log."""

    other_user_id: UUID
    first_name: str | None
    last_name: str | None
    last_message: str
    last_message_time: datetime
    unread_count: int

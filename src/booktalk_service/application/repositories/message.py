from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from booktalk_service.domain.entities.message import Message


class MessageReader(Protocol):
    async def list_for_user(self, user_id: UUID) -> list[Message]:
        """Every message sent or received by user, oldest first."""
        ...

    async def list_between(self, user_a: UUID, user_b: UUID) -> list[Message]:
        """Messages exchanged by exactly this pair (both directions), oldest first."""
        ...


class MessageWriter(Protocol):
    async def create(self, message: Message) -> Message: ...

    async def mark_read(
        self, sender_id: UUID, receiver_id: UUID, read_at: datetime
    ) -> int:
        """Bulk-mark unread sender→receiver messages as read. Returns the row count."""
        ...

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Message:
    id: UUID
    sender_id: UUID
    receiver_id: UUID
    text: str
    read: bool
    read_at: datetime | None
    created_at: datetime

    def counterparty(self, user_id: UUID) -> UUID:
        """The other side of this message as seen by ``user_id``."""
        return self.receiver_id if self.sender_id == user_id else self.sender_id

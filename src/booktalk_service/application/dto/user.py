from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class UserProfileDTO:
    """Profile fields pushed by the identity service."""

    id: UUID
    first_name: str
    last_name: str
    username: str
    email: str
    image: str | None = None

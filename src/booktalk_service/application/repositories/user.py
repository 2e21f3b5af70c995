from __future__ import annotations

from typing import Protocol
from uuid import UUID

from booktalk_service.application.dto.user import UserProfileDTO
from booktalk_service.domain.entities.user import User


class UserReader(Protocol):
    async def get_by_id(self, user_id: UUID) -> User | None: ...

    async def get_many(self, user_ids: list[UUID]) -> dict[UUID, User]: ...

    async def list_all(self) -> list[User]: ...

    async def search(self, query: str) -> list[User]:
        """Case-insensitive substring match on first/last name and username."""
        ...


class UserWriter(Protocol):
    async def upsert(self, profile: UserProfileDTO) -> User: ...

    async def set_image(self, user_id: UUID, image: str | None) -> None: ...

    async def set_username(self, user_id: UUID, username: str) -> None: ...

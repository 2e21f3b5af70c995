from __future__ import annotations

from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from booktalk_service.application.dto.user import UserProfileDTO
from booktalk_service.domain.entities.user import User
from booktalk_service.infrastructure.db.errors import storage_guard
from booktalk_service.infrastructure.db.mappers import user as mapper
from booktalk_service.infrastructure.db.models.user import UserModel


class UserReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @storage_guard
    async def get_by_id(self, user_id: UUID) -> User | None:
        result = await self._session.get(UserModel, user_id)
        return mapper.model_to_entity(result) if result else None

    @storage_guard
    async def get_many(self, user_ids: list[UUID]) -> dict[UUID, User]:
        if not user_ids:
            return {}
        stmt = select(UserModel).where(UserModel.id.in_(user_ids))
        result = await self._session.execute(stmt)
        return {m.id: mapper.model_to_entity(m) for m in result.scalars().all()}

    @storage_guard
    async def list_all(self) -> list[User]:
        stmt = select(UserModel).order_by(UserModel.first_name, UserModel.last_name)
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    @storage_guard
    async def search(self, query: str) -> list[User]:
        pattern = f"%{query}%"
        stmt = (
            select(UserModel)
            .where(
                or_(
                    UserModel.first_name.ilike(pattern),
                    UserModel.last_name.ilike(pattern),
                    UserModel.username.ilike(pattern),
                )
            )
            .order_by(UserModel.first_name, UserModel.last_name)
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class UserWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @storage_guard
    async def upsert(self, profile: UserProfileDTO) -> User:
        values = {
            "id": profile.id,
            "first_name": profile.first_name,
            "last_name": profile.last_name,
            "username": profile.username,
            "email": profile.email,
            "image": profile.image,
        }
        stmt = (
            pg_insert(UserModel)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[UserModel.id],
                set_={k: v for k, v in values.items() if k != "id"},
            )
            .returning(UserModel)
        )
        result = await self._session.execute(stmt)
        return mapper.model_to_entity(result.scalar_one())

    @storage_guard
    async def set_image(self, user_id: UUID, image: str | None) -> None:
        stmt = update(UserModel).where(UserModel.id == user_id).values(image=image)
        await self._session.execute(stmt)

    @storage_guard
    async def set_username(self, user_id: UUID, username: str) -> None:
        stmt = update(UserModel).where(UserModel.id == user_id).values(username=username)
        await self._session.execute(stmt)

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from booktalk_service.domain.entities.message import Message
from booktalk_service.infrastructure.db.errors import storage_guard
from booktalk_service.infrastructure.db.mappers import message as mapper
from booktalk_service.infrastructure.db.models.message import MessageModel

_TIMELINE = (MessageModel.created_at.asc(), MessageModel.id.asc())


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @storage_guard
    async def list_for_user(self, user_id: UUID) -> list[Message]:
        # TODO: cursor pagination on (created_at, id) once inboxes grow large.
        stmt = (
            select(MessageModel)
            .where(
                or_(
                    MessageModel.sender_id == user_id,
                    MessageModel.receiver_id == user_id,
                )
            )
            .order_by(*_TIMELINE)
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    @storage_guard
    async def list_between(self, user_a: UUID, user_b: UUID) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(
                or_(
                    and_(MessageModel.sender_id == user_a, MessageModel.receiver_id == user_b),
                    and_(MessageModel.sender_id == user_b, MessageModel.receiver_id == user_a),
                )
            )
            .order_by(*_TIMELINE)
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @storage_guard
    async def create(self, message: Message) -> Message:
        model = mapper.entity_to_model(message)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    @storage_guard
    async def mark_read(
        self,
        sender_id: UUID,
        receiver_id: UUID,
        read_at: datetime,
    ) -> int:
        # One statement: concurrent readers of the same pair can't lose updates.
        stmt = (
            update(MessageModel)
            .where(
                MessageModel.sender_id == sender_id,
                MessageModel.receiver_id == receiver_id,
                MessageModel.read.is_(False),
            )
            .values(read=True, read_at=read_at)
        )
        result = await self._session.execute(stmt)
        return result.rowcount or 0

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import Select, delete, func, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from booktalk_service.application.dto.book import BookView, UpdateBookDTO
from booktalk_service.domain.entities.book import Book
from booktalk_service.infrastructure.db.errors import storage_guard
from booktalk_service.infrastructure.db.mappers import book as mapper
from booktalk_service.infrastructure.db.models.book import BookLikeModel, BookModel
from booktalk_service.infrastructure.db.models.user import UserModel


def _likes_count() -> Any:
    return (
        select(func.count(BookLikeModel.id))
        .where(BookLikeModel.book_id == BookModel.id)
        .correlate(BookModel)
        .scalar_subquery()
    )


def _with_creator() -> Select[Any]:
    return (
        select(BookModel, UserModel.first_name, UserModel.last_name, _likes_count())
        .outerjoin(UserModel, UserModel.id == BookModel.creator_id)
    )


class BookReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @storage_guard
    async def get_by_id(self, book_id: UUID) -> Book | None:
        result = await self._session.get(BookModel, book_id)
        return mapper.model_to_entity(result) if result else None

    @storage_guard
    async def list_all(self) -> list[BookView]:
        stmt = _with_creator().order_by(BookModel.created_at.desc())
        return await self._views(stmt)

    @storage_guard
    async def search(self, query: str) -> list[BookView]:
        pattern = f"%{query}%"
        stmt = (
            _with_creator()
            .where(or_(BookModel.title.ilike(pattern), BookModel.author.ilike(pattern)))
            .order_by(BookModel.title.asc())
        )
        return await self._views(stmt)

    @storage_guard
    async def list_for_creator(self, creator_id: UUID, viewer_id: UUID) -> list[BookView]:
        liked = (
            select(BookLikeModel.id)
            .where(
                BookLikeModel.book_id == BookModel.id,
                BookLikeModel.user_id == viewer_id,
            )
            .correlate(BookModel)
            .exists()
        )
        stmt = (
            select(BookModel, _likes_count(), liked)
            .where(BookModel.creator_id == creator_id)
            .order_by(BookModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [
            BookView(
                book=mapper.model_to_entity(model),
                total_likes=total,
                liked_by_user=bool(has_liked),
            )
            for model, total, has_liked in result.all()
        ]

    @storage_guard
    async def count_likes(self, book_id: UUID) -> int:
        stmt = select(func.count(BookLikeModel.id)).where(BookLikeModel.book_id == book_id)
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    @storage_guard
    async def has_liked(self, book_id: UUID, user_id: UUID) -> bool:
        stmt = (
            select(BookLikeModel.id)
            .where(BookLikeModel.book_id == book_id, BookLikeModel.user_id == user_id)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def _views(self, stmt: Select[Any]) -> list[BookView]:
        result = await self._session.execute(stmt)
        return [
            BookView(
                book=mapper.model_to_entity(model),
                creator_first_name=first_name,
                creator_last_name=last_name,
                total_likes=total,
            )
            for model, first_name, last_name, total in result.all()
        ]


class BookWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @storage_guard
    async def create(self, book: Book) -> Book:
        model = mapper.entity_to_model(book)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    @storage_guard
    async def update(self, book_id: UUID, changes: UpdateBookDTO) -> Book:
        values = {
            key: value
            for key, value in (
                ("title", changes.title),
                ("author", changes.author),
                ("genre", changes.genre),
                ("review", changes.review),
            )
            if value is not None
        }
        if values:
            await self._session.execute(
                update(BookModel).where(BookModel.id == book_id).values(**values)
            )
        model = await self._session.get(BookModel, book_id, populate_existing=True)
        assert model is not None
        return mapper.model_to_entity(model)

    @storage_guard
    async def delete(self, book_id: UUID) -> None:
        await self._session.execute(delete(BookModel).where(BookModel.id == book_id))

    @storage_guard
    async def add_like(self, book_id: UUID, user_id: UUID) -> None:
        stmt = (
            pg_insert(BookLikeModel)
            .values(book_id=book_id, user_id=user_id)
            .on_conflict_do_nothing(constraint="uq_book_like_member")
        )
        await self._session.execute(stmt)

    @storage_guard
    async def remove_like(self, book_id: UUID, user_id: UUID) -> None:
        stmt = delete(BookLikeModel).where(
            BookLikeModel.book_id == book_id,
            BookLikeModel.user_id == user_id,
        )
        await self._session.execute(stmt)

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from booktalk_service.application.dto.book import BookView, UpdateBookDTO
from booktalk_service.domain.entities.book import Book


class BookReader(Protocol):
    async def get_by_id(self, book_id: UUID) -> Book | None: ...

    async def list_all(self) -> list[BookView]:
        """All books with their creator's name, newest first."""
        ...

    async def search(self, query: str) -> list[BookView]: ...

    async def list_for_creator(self, creator_id: UUID, viewer_id: UUID) -> list[BookView]:
        """Books of one creator with like totals and the viewer's like flag."""
        ...

    async def count_likes(self, book_id: UUID) -> int: ...

    async def has_liked(self, book_id: UUID, user_id: UUID) -> bool: ...


class BookWriter(Protocol):
    async def create(self, book: Book) -> Book: ...

    async def update(self, book_id: UUID, changes: UpdateBookDTO) -> Book: ...

    async def delete(self, book_id: UUID) -> None: ...

    async def add_like(self, book_id: UUID, user_id: UUID) -> None: ...

    async def remove_like(self, book_id: UUID, user_id: UUID) -> None: ...

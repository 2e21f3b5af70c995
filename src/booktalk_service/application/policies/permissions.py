from __future__ import annotations

from uuid import UUID

from booktalk_service.application.dto.principal import Principal
from booktalk_service.application.exceptions import ForbiddenError, NotFoundError
from booktalk_service.domain.entities.book import Book


def assert_self(principal: Principal, user_id: UUID) -> None:
    """Raise unless the caller is asking about their own data."""
    if principal.user_id != user_id:
        raise ForbiddenError("Not authorized to view these messages.")


def assert_book_owner(principal: Principal, book: Book | None) -> Book:
    """Raise if the book doesn't exist or belongs to someone else."""
    if book is None:
        raise NotFoundError("Could not find this book.")
    if book.creator_id != principal.user_id:
        raise ForbiddenError("You are not allowed to modify this book.")
    return book

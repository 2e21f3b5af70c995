from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from uuid import UUID

from booktalk_service.application.dto.book import BookView, CreateBookDTO, UpdateBookDTO
from booktalk_service.application.dto.principal import Principal
from booktalk_service.application.exceptions import NotFoundError, ValidationError
from booktalk_service.application.policies.permissions import assert_book_owner
from booktalk_service.application.uow import UnitOfWork
from booktalk_service.domain.entities.book import Book

logger = logging.getLogger(__name__)

ISBN_LENGTH = 13
MIN_REVIEW_LENGTH = 6


def _validate_review(review: str | None) -> None:
    if review is not None and len(review.strip()) < MIN_REVIEW_LENGTH:
        raise ValidationError(f"Review must be at least {MIN_REVIEW_LENGTH} characters.")


def _validate_create(data: CreateBookDTO) -> None:
    if len(data.isbn.strip()) != ISBN_LENGTH:
        raise ValidationError(f"ISBN must be exactly {ISBN_LENGTH} characters.")
    for name in ("title", "author", "genre"):
        if not getattr(data, name).strip():
            raise ValidationError(f"Could not create book post. {name} is required.")
    _validate_review(data.review)


async def list_books(uow: UnitOfWork) -> list[BookView]:
    return await uow.books.list_all()


async def search_books(query: str | None, uow: UnitOfWork) -> list[BookView]:
    q = (query or "").strip()
    if not q:
        return await uow.books.list_all()
    return await uow.books.search(q)


async def get_book(book_id: UUID, uow: UnitOfWork) -> Book:
    book = await uow.books.get_by_id(book_id)
    if book is None:
        raise NotFoundError("Could not find this book.")
    return book


async def list_books_for_user(
    user_id: UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> list[BookView]:
    return await uow.books.list_for_creator(user_id, principal.user_id)


async def create_book(
    principal: Principal,
    data: CreateBookDTO,
    uow: UnitOfWork,
) -> Book:
    _validate_create(data)
    if await uow.users.get_by_id(principal.user_id) is None:
        raise NotFoundError("Could not find this user. Please try again")

    book = Book(
        id=uuid.uuid4(),
        isbn=data.isbn.strip(),
        title=data.title.strip(),
        author=data.author.strip(),
        genre=data.genre.strip(),
        review=data.review.strip(),
        creator_id=principal.user_id,
        created_at=datetime.now(timezone.utc),
    )
    book = await uow.books_w.create(book)
    await uow.commit()
    logger.info("Book %s created by %s", book.id, principal.user_id)
    return book


async def update_book(
    principal: Principal,
    book_id: UUID,
    changes: UpdateBookDTO,
    uow: UnitOfWork,
) -> Book:
    assert_book_owner(principal, await uow.books.get_by_id(book_id))
    if changes.genre is not None and not changes.genre.strip():
        raise ValidationError("Genre must not be empty.")
    _validate_review(changes.review)

    book = await uow.books_w.update(book_id, changes)
    await uow.commit()
    return book


async def delete_book(principal: Principal, book_id: UUID, uow: UnitOfWork) -> None:
    assert_book_owner(principal, await uow.books.get_by_id(book_id))
    await uow.books_w.delete(book_id)
    await uow.commit()
    logger.info("Book %s deleted by %s", book_id, principal.user_id)


async def toggle_like(
    principal: Principal,
    book_id: UUID,
    uow: UnitOfWork,
) -> tuple[bool, int]:
    """Like the book, or unlike it if already liked. Returns (liked, total_likes)."""
    await get_book(book_id, uow)

    if await uow.books.has_liked(book_id, principal.user_id):
        await uow.books_w.remove_like(book_id, principal.user_id)
        liked = False
    else:
        await uow.books_w.add_like(book_id, principal.user_id)
        liked = True

    total = await uow.books.count_likes(book_id)
    await uow.commit()
    return liked, total

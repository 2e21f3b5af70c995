from __future__ import annotations

from dataclasses import dataclass

from booktalk_service.domain.entities.book import Book


@dataclass(frozen=True, slots=True)
class CreateBookDTO:
    isbn: str
    title: str
    author: str
    genre: str
    review: str


@dataclass(frozen=True, slots=True)
class UpdateBookDTO:
    title: str | None = None
    author: str | None = None
    genre: str | None = None
    review: str | None = None


@dataclass(frozen=True, slots=True)
class BookView:
    """A book joined with its creator's name and like state."""

    book: Book
    creator_first_name: str | None = None
    creator_last_name: str | None = None
    total_likes: int = 0
    liked_by_user: bool = False

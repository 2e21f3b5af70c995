from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, Field

from booktalk_service.api.v1.schemas.common import CamelModel
from booktalk_service.application.dto.book import BookView


class CreateBookRequest(CamelModel):
    isbn: str = Field(validation_alias=AliasChoices("isbn", "ISBN"))
    title: str
    author: str
    genre: str
    review: str


class UpdateBookRequest(CamelModel):
    title: str | None = None
    author: str | None = None
    genre: str | None = None
    review: str | None = None


class BookResponse(CamelModel):
    id: UUID
    isbn: str
    title: str
    author: str
    genre: str
    review: str
    creator_id: UUID
    created_at: datetime


class BookSummaryResponse(BookResponse):
    creator_first_name: str | None = None
    creator_last_name: str | None = None
    total_likes: int = 0
    liked_by_user: bool = False

    @classmethod
    def from_view(cls, view: BookView) -> BookSummaryResponse:
        base = BookResponse.model_validate(view.book).model_dump()
        return cls(
            **base,
            creator_first_name=view.creator_first_name,
            creator_last_name=view.creator_last_name,
            total_likes=view.total_likes,
            liked_by_user=view.liked_by_user,
        )


class BookEnvelope(CamelModel):
    book: BookResponse


class BookListResponse(CamelModel):
    books: list[BookSummaryResponse]


class LikeResponse(CamelModel):
    message: str
    total_likes: int
    liked_by_user: bool

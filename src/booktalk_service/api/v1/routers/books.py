from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query

from booktalk_service.api.deps import CurrentPrincipal, UoWDep
from booktalk_service.api.v1.schemas.book import (
    BookEnvelope,
    BookListResponse,
    BookResponse,
    BookSummaryResponse,
    CreateBookRequest,
    LikeResponse,
    UpdateBookRequest,
)
from booktalk_service.api.v1.schemas.common import StatusResponse
from booktalk_service.application.dto.book import CreateBookDTO, UpdateBookDTO
from booktalk_service.services import book_service

router = APIRouter(prefix="/api/v1/books", tags=["books"])


@router.get("", response_model=BookListResponse)
async def list_books(uow: UoWDep) -> BookListResponse:
    views = await book_service.list_books(uow)
    return BookListResponse(books=[BookSummaryResponse.from_view(v) for v in views])


@router.get("/search", response_model=BookListResponse)
async def search_books(
    uow: UoWDep,
    q: str | None = Query(None),
) -> BookListResponse:
    views = await book_service.search_books(q, uow)
    return BookListResponse(books=[BookSummaryResponse.from_view(v) for v in views])


@router.get("/user/{user_id}", response_model=BookListResponse)
async def list_books_for_user(
    user_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> BookListResponse:
    views = await book_service.list_books_for_user(user_id, principal, uow)
    return BookListResponse(books=[BookSummaryResponse.from_view(v) for v in views])


@router.get("/{book_id}", response_model=BookEnvelope)
async def get_book(
    book_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> BookEnvelope:
    book = await book_service.get_book(book_id, uow)
    return BookEnvelope(book=BookResponse.model_validate(book))


@router.post("", response_model=BookEnvelope, status_code=201)
async def create_book(
    body: CreateBookRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> BookEnvelope:
    data = CreateBookDTO(
        isbn=body.isbn,
        title=body.title,
        author=body.author,
        genre=body.genre,
        review=body.review,
    )
    book = await book_service.create_book(principal, data, uow)
    return BookEnvelope(book=BookResponse.model_validate(book))


@router.patch("/like/{book_id}", response_model=LikeResponse)
async def like_book(
    book_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> LikeResponse:
    liked, total = await book_service.toggle_like(principal, book_id, uow)
    return LikeResponse(
        message="Book liked" if liked else "Book unliked",
        total_likes=total,
        liked_by_user=liked,
    )


@router.patch("/{book_id}", response_model=BookEnvelope)
async def update_book(
    book_id: UUID,
    body: UpdateBookRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> BookEnvelope:
    changes = UpdateBookDTO(
        title=body.title,
        author=body.author,
        genre=body.genre,
        review=body.review,
    )
    book = await book_service.update_book(principal, book_id, changes, uow)
    return BookEnvelope(book=BookResponse.model_validate(book))


@router.delete("/{book_id}", response_model=StatusResponse)
async def delete_book(
    book_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> StatusResponse:
    await book_service.delete_book(principal, book_id, uow)
    return StatusResponse(message="Deleted successfully")

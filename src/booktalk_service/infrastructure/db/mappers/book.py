from __future__ import annotations

from booktalk_service.domain.entities.book import Book
from booktalk_service.infrastructure.db.models.book import BookModel


def model_to_entity(model: BookModel) -> Book:
    return Book(
        id=model.id,
        isbn=model.isbn,
        title=model.title,
        author=model.author,
        genre=model.genre,
        review=model.review,
        creator_id=model.creator_id,
        created_at=model.created_at,
    )


def entity_to_model(entity: Book) -> BookModel:
    return BookModel(
        id=entity.id,
        isbn=entity.isbn,
        title=entity.title,
        author=entity.author,
        genre=entity.genre,
        review=entity.review,
        creator_id=entity.creator_id,
        created_at=entity.created_at,
    )

"""Import all models so Alembic can discover them via Base.metadata."""
from booktalk_service.infrastructure.db.models.book import BookLikeModel, BookModel
from booktalk_service.infrastructure.db.models.message import MessageModel
from booktalk_service.infrastructure.db.models.user import UserModel

__all__ = [
    "BookLikeModel",
    "BookModel",
    "MessageModel",
    "UserModel",
]

"""Translate SQLAlchemy failures into the application's StorageError."""
from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from booktalk_service.application.exceptions import StorageError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def storage_guard(func: F) -> F:
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as exc:
            logger.exception("Storage failure in %s", func.__qualname__)
            raise StorageError(f"{func.__qualname__}: {exc.__class__.__name__}") from exc

    return wrapper  # type: ignore[return-value]

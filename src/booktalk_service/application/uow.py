from __future__ import annotations

from typing import AsyncContextManager, Callable, Protocol

from booktalk_service.application.repositories.book import BookReader, BookWriter
from booktalk_service.application.repositories.message import MessageReader, MessageWriter
from booktalk_service.application.repositories.user import UserReader, UserWriter


class UnitOfWork(Protocol):
    messages: MessageReader
    messages_w: MessageWriter
    users: UserReader
    users_w: UserWriter
    books: BookReader
    books_w: BookWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...


# Opens a fresh unit of work; used where one request spans many operations (WS).
UoWFactory = Callable[[], AsyncContextManager[UnitOfWork]]

"""Shared test fixtures."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
import pytest

from booktalk_service.application.dto.book import BookView, UpdateBookDTO
from booktalk_service.application.dto.principal import Principal
from booktalk_service.application.dto.user import UserProfileDTO
from booktalk_service.config import settings
from booktalk_service.domain.entities.book import Book
from booktalk_service.domain.entities.message import Message
from booktalk_service.domain.entities.user import User

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def alice() -> Principal:
    return Principal(user_id=uuid.uuid4(), email="alice@example.com")


@pytest.fixture
def bob() -> Principal:
    return Principal(user_id=uuid.uuid4(), email="bob@example.com")


def make_token(user_id: UUID | str, *, expires_in: int = 3600, **claims) -> str:
    payload = {
        "sub": str(user_id),
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
        **claims,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def make_message(
    *,
    sender_id: UUID,
    receiver_id: UUID,
    text: str = "hello",
    created_at: datetime = T0,
    read: bool = False,
) -> Message:
    return Message(
        id=uuid.uuid4(),
        sender_id=sender_id,
        receiver_id=receiver_id,
        text=text,
        read=read,
        read_at=created_at if read else None,
        created_at=created_at,
    )


def make_user(
    *,
    user_id: UUID | None = None,
    first_name: str = "Jane",
    last_name: str = "Doe",
    username: str | None = None,
    image: str | None = None,
) -> User:
    return User(
        id=user_id or uuid.uuid4(),
        first_name=first_name,
        last_name=last_name,
        username=username or f"{first_name} {last_name[:1]}",
        email=f"{first_name.lower()}.{uuid.uuid4().hex[:6]}@example.com",
        image=image,
        created_at=T0,
    )


def make_book(
    *,
    creator_id: UUID,
    title: str = "Dune",
    author: str = "Frank Herbert",
) -> Book:
    return Book(
        id=uuid.uuid4(),
        isbn="9780441172719",
        title=title,
        author=author,
        genre="Science fiction",
        review="A desert planet and its politics.",
        creator_id=creator_id,
        created_at=T0,
    )


class FakeClock:
    """Advances one second per reading so successive writes are ordered."""

    def __init__(self, start: datetime = T0) -> None:
        self._now = start

    def now(self) -> datetime:
        current = self._now
        self._now += timedelta(seconds=1)
        return current


def _sort_key(m: Message) -> tuple[datetime, UUID]:
    return m.created_at, m.id


@dataclass
class FakeMessageReader:
    _messages: list[Message] = field(default_factory=list)

    async def list_for_user(self, user_id: UUID) -> list[Message]:
        found = [m for m in self._messages if user_id in (m.sender_id, m.receiver_id)]
        return sorted(found, key=_sort_key)

    async def list_between(self, user_a: UUID, user_b: UUID) -> list[Message]:
        found = [
            m for m in self._messages
            if (m.sender_id, m.receiver_id) in ((user_a, user_b), (user_b, user_a))
        ]
        return sorted(found, key=_sort_key)


@dataclass
class FakeMessageWriter:
    _reader: FakeMessageReader
    fail_with: Exception | None = None

    async def create(self, message: Message) -> Message:
        if self.fail_with is not None:
            raise self.fail_with
        self._reader._messages.append(message)
        return message

    async def mark_read(self, sender_id: UUID, receiver_id: UUID, read_at: datetime) -> int:
        count = 0
        for i, m in enumerate(self._reader._messages):
            if m.sender_id == sender_id and m.receiver_id == receiver_id and not m.read:
                self._reader._messages[i] = replace(m, read=True, read_at=read_at)
                count += 1
        return count


@dataclass
class FakeUserReader:
    _users: dict[UUID, User] = field(default_factory=dict)

    async def get_by_id(self, user_id: UUID) -> User | None:
        return self._users.get(user_id)

    async def get_many(self, user_ids: list[UUID]) -> dict[UUID, User]:
        return {uid: self._users[uid] for uid in user_ids if uid in self._users}

    async def list_all(self) -> list[User]:
        return list(self._users.values())

    async def search(self, query: str) -> list[User]:
        q = query.lower()
        return [
            u for u in self._users.values()
            if q in u.first_name.lower() or q in u.last_name.lower() or q in u.username.lower()
        ]


@dataclass
class FakeUserWriter:
    _reader: FakeUserReader

    async def upsert(self, profile: UserProfileDTO) -> User:
        existing = self._reader._users.get(profile.id)
        user = User(
            id=profile.id,
            first_name=profile.first_name,
            last_name=profile.last_name,
            username=profile.username,
            email=profile.email,
            image=profile.image,
            created_at=existing.created_at if existing else T0,
        )
        self._reader._users[user.id] = user
        return user

    async def set_image(self, user_id: UUID, image: str | None) -> None:
        self._reader._users[user_id] = replace(self._reader._users[user_id], image=image)

    async def set_username(self, user_id: UUID, username: str) -> None:
        self._reader._users[user_id] = replace(self._reader._users[user_id], username=username)


@dataclass
class FakeBookReader:
    _users: FakeUserReader
    _books: dict[UUID, Book] = field(default_factory=dict)
    _likes: set[tuple[UUID, UUID]] = field(default_factory=set)

    def _view(self, book: Book, viewer_id: UUID | None = None) -> BookView:
        creator = self._users._users.get(book.creator_id)
        return BookView(
            book=book,
            creator_first_name=creator.first_name if creator else None,
            creator_last_name=creator.last_name if creator else None,
            total_likes=sum(1 for b, _ in self._likes if b == book.id),
            liked_by_user=(book.id, viewer_id) in self._likes,
        )

    async def get_by_id(self, book_id: UUID) -> Book | None:
        return self._books.get(book_id)

    async def list_all(self) -> list[BookView]:
        return [self._view(b) for b in self._books.values()]

    async def search(self, query: str) -> list[BookView]:
        q = query.lower()
        found = [b for b in self._books.values() if q in b.title.lower() or q in b.author.lower()]
        return [self._view(b) for b in sorted(found, key=lambda b: b.title)]

    async def list_for_creator(self, creator_id: UUID, viewer_id: UUID) -> list[BookView]:
        return [
            self._view(b, viewer_id) for b in self._books.values() if b.creator_id == creator_id
        ]

    async def count_likes(self, book_id: UUID) -> int:
        return sum(1 for b, _ in self._likes if b == book_id)

    async def has_liked(self, book_id: UUID, user_id: UUID) -> bool:
        return (book_id, user_id) in self._likes


@dataclass
class FakeBookWriter:
    _reader: FakeBookReader

    async def create(self, book: Book) -> Book:
        self._reader._books[book.id] = book
        return book

    async def update(self, book_id: UUID, changes: UpdateBookDTO) -> Book:
        values = {
            name: getattr(changes, name)
            for name in ("title", "author", "genre", "review")
            if getattr(changes, name) is not None
        }
        book = replace(self._reader._books[book_id], **values)
        self._reader._books[book_id] = book
        return book

    async def delete(self, book_id: UUID) -> None:
        self._reader._books.pop(book_id, None)
        self._reader._likes = {(b, u) for b, u in self._reader._likes if b != book_id}

    async def add_like(self, book_id: UUID, user_id: UUID) -> None:
        self._reader._likes.add((book_id, user_id))

    async def remove_like(self, book_id: UUID, user_id: UUID) -> None:
        self._reader._likes.discard((book_id, user_id))


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    messages_w: FakeMessageWriter | None = None
    users: FakeUserReader = field(default_factory=FakeUserReader)
    users_w: FakeUserWriter | None = None
    books: FakeBookReader | None = None
    books_w: FakeBookWriter | None = None
    _committed: bool = False
    _commits: int = 0

    def __post_init__(self) -> None:
        if self.messages_w is None:
            self.messages_w = FakeMessageWriter(self.messages)
        if self.users_w is None:
            self.users_w = FakeUserWriter(self.users)
        if self.books is None:
            self.books = FakeBookReader(self.users)
        if self.books_w is None:
            self.books_w = FakeBookWriter(self.books)

    async def __aenter__(self) -> FakeUoW:
        return self

    async def __aexit__(self, *exc_info) -> None:
        pass

    def add_user(self, user: User) -> User:
        self.users._users[user.id] = user
        return user

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self._committed = True
        self._commits += 1

    async def rollback(self) -> None:
        pass

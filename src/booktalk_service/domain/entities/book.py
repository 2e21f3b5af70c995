from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Book:
    id: UUID
    isbn: str
    title: str
    author: str
    genre: str
    review: str
    creator_id: UUID
    created_at: datetime

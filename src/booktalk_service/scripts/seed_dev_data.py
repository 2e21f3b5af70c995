"""Seed development data: a few readers, a book and a short conversation."""
from __future__ import annotations

import asyncio
import logging
import uuid

from booktalk_service.application.dto.book import CreateBookDTO
from booktalk_service.application.dto.principal import Principal
from booktalk_service.application.dto.user import UserProfileDTO
from booktalk_service.infrastructure.db.session import open_uow
from booktalk_service.logging_config import configure_logging
from booktalk_service.services import book_service, message_service

logger = logging.getLogger(__name__)

READERS = [
    ("Ada", "Lovelace", "ada@example.com"),
    ("Alan", "Turing", "alan@example.com"),
    ("Grace", "Hopper", "grace@example.com"),
]


async def seed() -> None:
    async with open_uow() as uow:
        ids: list[uuid.UUID] = []
        for first, last, email in READERS:
            user = await uow.users_w.upsert(
                UserProfileDTO(
                    id=uuid.uuid4(),
                    first_name=first,
                    last_name=last,
                    username=f"{first} {last[:1]}",
                    email=email,
                )
            )
            ids.append(user.id)
        await uow.commit()

        ada, alan, _grace = ids
        await book_service.create_book(
            Principal(user_id=ada),
            CreateBookDTO(
                isbn="9780262033848",
                title="Introduction to Algorithms",
                author="Cormen et al.",
                genre="Computer Science",
                review="Dense but rewarding.",
            ),
            uow,
        )

        thread = [
            (ada, alan, "Have you read the new review I posted?"),
            (alan, ada, "Not yet, is it any good?"),
            (ada, alan, "Chapter 22 alone is worth it."),
        ]
        for sender, receiver, text in thread:
            await message_service.create_message(sender, receiver, text, uow)

    logger.info("Seeded %d users and %d messages", len(ids), len(thread))


def main() -> None:
    configure_logging("INFO")
    asyncio.run(seed())


if __name__ == "__main__":
    main()

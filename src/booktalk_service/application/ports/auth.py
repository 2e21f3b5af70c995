from __future__ import annotations

from typing import Protocol

from booktalk_service.application.dto.principal import Principal


class TokenVerifier(Protocol):
    async def verify(self, token: str) -> Principal:
        """Return the token's principal or raise ``AuthError``."""
        ...

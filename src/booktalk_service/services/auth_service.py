"""Identity gate shared by the HTTP bearer dependency and the WS handshake."""
from __future__ import annotations

import logging

from booktalk_service.application.dto.principal import Principal
from booktalk_service.application.exceptions import AuthError
from booktalk_service.application.ports.auth import TokenVerifier

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "bearer "


async def authenticate(credential: str | None, verifier: TokenVerifier) -> Principal:
    """Resolve a bearer credential into a principal.

    Accepts either the raw token or an ``Authorization`` header value. Raises
    ``AuthError`` when the credential is missing, malformed, expired or badly
    signed.
    """
    token = (credential or "").strip()
    if token.lower().startswith(_BEARER_PREFIX):
        token = token[len(_BEARER_PREFIX):].strip()
    if not token:
        raise AuthError("Authentication token missing")

    try:
        return await verifier.verify(token)
    except AuthError as exc:
        logger.debug("Token rejected: %s", exc.detail)
        raise

from __future__ import annotations

import logging

import jwt
from jwt import PyJWKClient

from booktalk_service.application.dto.principal import Principal
from booktalk_service.application.exceptions import AuthError
from booktalk_service.infrastructure.auth.claims import principal_from_claims

logger = logging.getLogger(__name__)


class JWKSVerifier:
    """Verify JWTs using the identity service's JWKS endpoint."""

    def __init__(self, jwks_url: str) -> None:
        self._jwks_url = jwks_url
        self._jwk_client = PyJWKClient(jwks_url)

    async def verify(self, token: str) -> Principal:
        try:
            signing_key = self._jwk_client.get_signing_key_from_jwt(token)
            payload = jwt.decode(
                token,
                signing_key.key,
                algorithms=["RS256", "ES256"],
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthError("Token expired") from exc
        except jwt.PyJWKClientError as exc:
            logger.warning("JWKS lookup failed against %s: %s", self._jwks_url, exc)
            raise AuthError("Invalid token") from exc
        except jwt.PyJWTError as exc:
            raise AuthError("Invalid token") from exc
        return principal_from_claims(payload)

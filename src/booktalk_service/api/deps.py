"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated, AsyncIterator

from fastapi import Depends
from fastapi.requests import HTTPConnection
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from booktalk_service.application.dto.principal import Principal
from booktalk_service.application.ports.auth import TokenVerifier
from booktalk_service.application.uow import UoWFactory
from booktalk_service.config import settings
from booktalk_service.infrastructure.auth.hs256_verifier import HS256Verifier
from booktalk_service.infrastructure.auth.jwks_verifier import JWKSVerifier
from booktalk_service.infrastructure.db.session import AsyncSessionLocal, open_uow
from booktalk_service.infrastructure.db.uow import SqlAlchemyUoW
from booktalk_service.infrastructure.ws.manager import ChannelManager
from booktalk_service.services.auth_service import authenticate

# Missing credentials are reported by the identity gate, not by the scheme.
_bearer_scheme = HTTPBearer(auto_error=False)


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with AsyncSessionLocal() as session:
        uow = SqlAlchemyUoW(session)
        try:
            yield uow
        finally:
            await session.close()


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


def get_uow_factory() -> UoWFactory:
    return open_uow


UoWFactoryDep = Annotated[UoWFactory, Depends(get_uow_factory)]


def _get_verifier() -> TokenVerifier:
    if settings.JWT_VERIFY_MODE == "jwks":
        assert settings.JWKS_URL, "JWKS_URL must be set when JWT_VERIFY_MODE=jwks"
        return JWKSVerifier(settings.JWKS_URL)
    return HS256Verifier(settings.JWT_SECRET, settings.JWT_ALGORITHM)


_verifier: TokenVerifier | None = None


def get_verifier() -> TokenVerifier:
    global _verifier  # noqa: PLW0603
    if _verifier is None:
        _verifier = _get_verifier()
    return _verifier


VerifierDep = Annotated[TokenVerifier, Depends(get_verifier)]


async def get_current_principal(
    verifier: VerifierDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)],
) -> Principal:
    return await authenticate(credentials.credentials if credentials else None, verifier)


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


def get_channels(conn: HTTPConnection) -> ChannelManager:
    return conn.app.state.channels


ChannelsDep = Annotated[ChannelManager, Depends(get_channels)]

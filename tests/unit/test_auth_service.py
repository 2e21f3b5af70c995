from __future__ import annotations

import uuid

import jwt
import pytest

from booktalk_service.application.exceptions import AuthError
from booktalk_service.config import settings
from booktalk_service.infrastructure.auth.hs256_verifier import HS256Verifier
from booktalk_service.services.auth_service import authenticate
from tests.conftest import make_token


@pytest.fixture
def verifier() -> HS256Verifier:
    return HS256Verifier(settings.JWT_SECRET, settings.JWT_ALGORITHM)


@pytest.mark.asyncio
async def test_valid_token_yields_principal(verifier):
    user_id = uuid.uuid4()

    principal = await authenticate(make_token(user_id, email="a@example.com"), verifier)

    assert principal.user_id == user_id
    assert principal.email == "a@example.com"


@pytest.mark.asyncio
async def test_bearer_prefix_is_stripped(verifier):
    user_id = uuid.uuid4()

    principal = await authenticate(f"Bearer {make_token(user_id)}", verifier)

    assert principal.user_id == user_id


@pytest.mark.asyncio
async def test_legacy_user_id_claim(verifier):
    user_id = uuid.uuid4()
    token = jwt.encode({"userId": str(user_id)}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

    principal = await authenticate(token, verifier)

    assert principal.user_id == user_id


@pytest.mark.asyncio
@pytest.mark.parametrize("credential", [None, "", "Bearer   "])
async def test_missing_token(verifier, credential):
    with pytest.raises(AuthError, match="missing"):
        await authenticate(credential, verifier)


@pytest.mark.asyncio
async def test_expired_token(verifier):
    with pytest.raises(AuthError, match="expired"):
        await authenticate(make_token(uuid.uuid4(), expires_in=-60), verifier)


@pytest.mark.asyncio
async def test_garbage_token(verifier):
    with pytest.raises(AuthError, match="Invalid token"):
        await authenticate("not.a.jwt", verifier)


@pytest.mark.asyncio
async def test_wrong_signature(verifier):
    token = jwt.encode(
        {"sub": str(uuid.uuid4())}, "another-secret-that-is-long-enough!!", algorithm="HS256",
    )

    with pytest.raises(AuthError, match="Invalid token"):
        await authenticate(token, verifier)


@pytest.mark.asyncio
async def test_subject_must_be_a_user_id(verifier):
    with pytest.raises(AuthError, match="subject"):
        await authenticate(make_token("42"), verifier)

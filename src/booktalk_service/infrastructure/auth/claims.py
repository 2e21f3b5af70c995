from __future__ import annotations

from typing import Any

from booktalk_service.application.dto.principal import Principal
from booktalk_service.application.exceptions import AuthError
from booktalk_service.domain.value_objects.ids import parse_id


def principal_from_claims(payload: dict[str, Any]) -> Principal:
    """Build a principal from decoded claims (``sub``, or legacy ``userId``)."""
    user_id = parse_id(payload.get("sub", payload.get("userId")))
    if user_id is None:
        raise AuthError("Token subject is not a valid user id")
    email = payload.get("email")
    return Principal(user_id=user_id, email=email if isinstance(email, str) else None)

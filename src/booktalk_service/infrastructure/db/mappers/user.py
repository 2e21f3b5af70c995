from __future__ import annotations

from booktalk_service.domain.entities.user import User
from booktalk_service.infrastructure.db.models.user import UserModel


def model_to_entity(model: UserModel) -> User:
    return User(
        id=model.id,
        first_name=model.first_name,
        last_name=model.last_name,
        username=model.username,
        email=model.email,
        image=model.image,
        created_at=model.created_at,
    )

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from booktalk_service.api.v1.schemas.common import CamelModel


class UserResponse(CamelModel):
    id: UUID
    first_name: str
    last_name: str
    username: str
    email: str
    image: str | None
    created_at: datetime


class UserListResponse(CamelModel):
    users: list[UserResponse]


class UserEnvelope(CamelModel):
    user: UserResponse


class ProfilePictureRequest(CamelModel):
    image_path: str | None = None


class ProfilePictureResponse(CamelModel):
    message: str
    image_url: str | None


class UpdateUsernameRequest(CamelModel):
    username: str | None = None

from __future__ import annotations

from fastapi import APIRouter, Query

from booktalk_service.api.deps import CurrentPrincipal, UoWDep
from booktalk_service.api.v1.schemas.common import StatusResponse
from booktalk_service.api.v1.schemas.user import (
    ProfilePictureRequest,
    ProfilePictureResponse,
    UpdateUsernameRequest,
    UserEnvelope,
    UserListResponse,
    UserResponse,
)
from booktalk_service.services import user_service

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=UserListResponse)
async def list_users(uow: UoWDep) -> UserListResponse:
    users = await user_service.list_users(uow)
    return UserListResponse(users=[UserResponse.model_validate(u) for u in users])


@router.get("/search", response_model=UserListResponse)
async def search_users(
    uow: UoWDep,
    q: str | None = Query(None),
) -> UserListResponse:
    users = await user_service.search_users(q, uow)
    return UserListResponse(users=[UserResponse.model_validate(u) for u in users])


@router.patch("/profile-picture", response_model=ProfilePictureResponse)
async def update_profile_picture(
    body: ProfilePictureRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ProfilePictureResponse:
    user = await user_service.update_profile_picture(principal, body.image_path, uow)
    return ProfilePictureResponse(
        message="Profile picture updated successfully!",
        image_url=user.image,
    )


@router.patch("/remove-picture", response_model=StatusResponse)
async def remove_profile_picture(
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> StatusResponse:
    await user_service.remove_profile_picture(principal, uow)
    return StatusResponse(message="Profile picture removed successfully!")


@router.patch("/update-username", response_model=UserEnvelope)
async def update_username(
    body: UpdateUsernameRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> UserEnvelope:
    user = await user_service.update_username(principal, body.username, uow)
    return UserEnvelope(user=UserResponse.model_validate(user))

from typing import Annotated
from fastapi import APIRouter, Depends, Request

from edupath.middlewares.auth_middleware import AuthState, require_student
from edupath.schemas.auth_schemas import UpdateProfileRequest
from edupath.services.student.profile_service import (
    ProfileService,
    get_profile_service,
)
from edupath.utils.responses import ResponseBuilder

profile_router = APIRouter()


@profile_router.get("")
async def get_profile(
    request: Request,
    current_user: Annotated[AuthState, Depends(require_student)],
    profile_service: ProfileService = Depends(get_profile_service),
):
    profile = await profile_service.get_profile(current_user.user_id)
    return ResponseBuilder.success(
        request=request,
        data=profile.model_dump(by_alias=True),
        message="Profile retrieved",
    )


@profile_router.put("")
async def update_profile(
    body: UpdateProfileRequest,
    request: Request,
    current_user: Annotated[AuthState, Depends(require_student)],
    profile_service: ProfileService = Depends(get_profile_service),
):
    """Update name, SSC/HSC grades and academic group of the current user"""
    profile = await profile_service.update_profile(current_user.user_id, body)
    return ResponseBuilder.success(
        request=request,
        data=profile.model_dump(by_alias=True),
        message="Profile updated",
    )

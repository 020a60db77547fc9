from typing import Annotated
from fastapi import APIRouter, Depends, Request, status

from edupath.services.auth_service import (
    AuthService,
    get_auth_service,
    to_user_response,
)
from edupath.schemas.auth_schemas import AuthResponse, LoginRequest, RegisterRequest
from edupath.middlewares.auth_middleware import get_current_user, AuthState
from edupath.utils.responses import ResponseBuilder
from edupath.utils.errors import AuthenticationError

auth_router = APIRouter()


@auth_router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    register_request: RegisterRequest,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Create a student account and sign it in"""
    token, user = await auth_service.register_student(register_request)

    auth_data = AuthResponse(user=to_user_response(user), access_token=token)
    return ResponseBuilder.success(
        request=request,
        data=auth_data.model_dump(by_alias=True),
        message="Registration successful",
        status_code=status.HTTP_201_CREATED,
    )


@auth_router.post("/login")
async def login(
    login_request: LoginRequest,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Login with email and password.

    Refreshes the user's last activity and returns a bearer access token.
    """
    token, user = await auth_service.login_user(
        login_request.email, login_request.password
    )

    auth_data = AuthResponse(user=to_user_response(user), access_token=token)
    return ResponseBuilder.success(
        request=request,
        data=auth_data.model_dump(by_alias=True),
        message="Login successful",
    )


@auth_router.post("/ping")
async def ping(
    request: Request,
    current_user: Annotated[AuthState, Depends(get_current_user)],
    auth_service: AuthService = Depends(get_auth_service),
):
    """Liveness ping from the client; refreshes last activity"""
    if not await auth_service.touch_last_active(current_user.user_id):
        raise AuthenticationError("User not found", "USER_NOT_FOUND")

    return ResponseBuilder.success(request=request, message="Activity recorded")


@auth_router.get("/me")
async def get_current_user_info(
    request: Request,
    current_user: Annotated[AuthState, Depends(get_current_user)],
    auth_service: AuthService = Depends(get_auth_service),
):
    """Get current authenticated user information"""
    user = await auth_service.get_user_by_id(current_user.user_id)

    if not user:
        raise AuthenticationError("User not found", "USER_NOT_FOUND")

    return ResponseBuilder.success(
        request=request,
        data=to_user_response(user).model_dump(by_alias=True),
        message="User information retrieved",
    )

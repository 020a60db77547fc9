from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from edupath.db.models import UserRole
from edupath.utils.auth import AuthUtils
from edupath.utils.errors import AuthenticationError, AuthorizationError

bearer_scheme = HTTPBearer(auto_error=False)


class AuthState:
    """Authentication state to be stored in request.state"""

    def __init__(self, user_id: int, email: str, role: str):
        self.user_id = user_id
        self.email = email
        self.role = role

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def get_current_user(
    request: Request,
    credentials: Annotated[
        Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)
    ],
) -> AuthState:
    """Resolve the caller from the bearer access token"""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing access token", "TOKEN_MISSING")

    payload = AuthUtils.verify_access_token(credentials.credentials)
    if not payload:
        raise AuthenticationError("Invalid or expired access token", "TOKEN_INVALID")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token subject", "TOKEN_INVALID")

    auth = AuthState(user_id=user_id, email=payload.get("email", ""), role=payload["role"])
    request.state.auth = auth
    return auth


def require_student(
    current_user: Annotated[AuthState, Depends(get_current_user)],
) -> AuthState:
    """Students act on their own records; admins may use the same routes"""
    if current_user.role not in (UserRole.STUDENT.value, UserRole.ADMIN.value):
        raise AuthorizationError("Student access required", "STUDENT_REQUIRED")
    return current_user


def require_admin(
    current_user: Annotated[AuthState, Depends(get_current_user)],
) -> AuthState:
    if not current_user.is_admin:
        raise AuthorizationError("Admin access required", "ADMIN_REQUIRED")
    return current_user

from typing import Optional, Tuple

from fastapi import Depends
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from edupath.db.models import User, UserRole
from edupath.db.session import get_sync_session
from edupath.schemas.auth_schemas import RegisterRequest, UserResponse
from edupath.utils.auth import AuthUtils
from edupath.utils.datetime_utils import naive_utc_now
from edupath.utils.errors import AuthenticationError, BusinessLogicError
from edupath.utils.logging import get_logger

logger = get_logger()


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role.value,
        ssc_gpa=user.ssc_gpa,
        hsc_gpa=user.hsc_gpa,
        group_name=user.group_name,
        last_active=user.last_active,
        created_at=user.created_at,
    )


class AuthService:
    """Authentication service for registration, login and liveness pings"""

    def __init__(self, db_session: Session):
        self.db = db_session

    async def register_student(self, data: RegisterRequest) -> Tuple[str, User]:
        """Create a student account and return an access token for it"""
        email = data.email.lower()
        if await self.get_user_by_email(email):
            raise BusinessLogicError(
                "An account with this email already exists", "EMAIL_ALREADY_REGISTERED"
            )

        user = User(
            name=data.name,
            email=email,
            password_hash=AuthUtils.hash_password(data.password),
            role=UserRole.STUDENT,
            ssc_gpa=data.ssc_gpa,
            hsc_gpa=data.hsc_gpa,
            group_name=data.group_name,
        )
        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise BusinessLogicError(
                "An account with this email already exists", "EMAIL_ALREADY_REGISTERED"
            )
        self.db.refresh(user)

        logger.info(f"Registered student {user.id} ({email})")
        return self._issue_token(user), user

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        user = await self.get_user_by_email(email.lower())
        if not user or not AuthUtils.verify_password(password, user.password_hash):
            return None
        return user

    async def login_user(self, email: str, password: str) -> Tuple[str, User]:
        """Verify credentials, refresh last activity and issue an access token"""
        user = await self.authenticate_user(email, password)
        if not user:
            raise AuthenticationError("Invalid credentials", "INVALID_CREDENTIALS")

        user.last_active = naive_utc_now()
        self.db.commit()

        logger.info(f"User {user.id} logged in")
        return self._issue_token(user), user

    async def touch_last_active(self, user_id: int) -> bool:
        """Liveness ping; returns False when the user does not exist"""
        result = self.db.execute(
            update(User).where(User.id == user_id).values(last_active=naive_utc_now())
        )
        self.db.commit()
        return bool(result.rowcount)

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    @staticmethod
    def _issue_token(user: User) -> str:
        return AuthUtils.generate_access_token(
            user_id=user.id, email=user.email, role=user.role.value
        )


def get_auth_service(
    db_session: Session = Depends(get_sync_session),
) -> AuthService:
    """Dependency function to get AuthService instance"""
    return AuthService(db_session)

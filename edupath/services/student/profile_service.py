from fastapi import Depends
from sqlalchemy.orm import Session

from edupath.db.models import User
from edupath.db.session import get_sync_session
from edupath.schemas.auth_schemas import UpdateProfileRequest, UserResponse
from edupath.services.auth_service import to_user_response
from edupath.utils.errors import NotFoundError
from edupath.utils.logging import get_logger

logger = get_logger()


class ProfileService:
    def __init__(self, db_session: Session):
        self.db = db_session

    async def get_profile(self, user_id: int) -> UserResponse:
        return to_user_response(self._get_user(user_id))

    async def update_profile(
        self, user_id: int, data: UpdateProfileRequest
    ) -> UserResponse:
        """Replace name, grades and group; email and role are not editable here"""
        user = self._get_user(user_id)
        user.name = data.name
        user.ssc_gpa = data.ssc_gpa
        user.hsc_gpa = data.hsc_gpa
        user.group_name = data.group_name
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"Updated profile for user {user_id}")
        return to_user_response(user)

    def _get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found", "USER_NOT_FOUND")
        return user


def get_profile_service(
    db_session: Session = Depends(get_sync_session),
) -> ProfileService:
    """Dependency function to get ProfileService instance"""
    return ProfileService(db_session)

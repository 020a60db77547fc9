from sqlalchemy.orm import Session
from sqlalchemy import select

from edupath.config.settings import settings
from edupath.db.models import User, UserRole
from edupath.utils.auth import AuthUtils
from edupath.utils.logging import get_logger

logger = get_logger()


def seed_admin(db_session: Session):
    """Create the system administrator unless an account with that email exists"""

    # Stored lowercase, the same way registration and login normalize emails
    email = settings.SEED_ADMIN_EMAIL.lower()

    existing = db_session.execute(
        select(User).where(User.email == email)
    ).scalar_one_or_none()
    if existing:
        logger.info(f"Admin {email} already present, skipping")
        return

    db_session.add(
        User(
            name=settings.SEED_ADMIN_NAME,
            email=email,
            password_hash=AuthUtils.hash_password(settings.SEED_ADMIN_PASSWORD),
            role=UserRole.ADMIN,
        )
    )
    db_session.commit()
    logger.info(f"Seeded admin account {email}")

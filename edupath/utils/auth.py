from datetime import timedelta
from typing import Optional, Dict, Any
import uuid
import jwt
import bcrypt

from edupath.config.settings import settings
from edupath.utils.datetime_utils import utc_now


class AuthUtils:
    """Authentication utilities for JWT token management and password hashing"""

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password with a fresh bcrypt salt"""
        return bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
        ).decode("utf-8")

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        """Check a plain password against a stored bcrypt hash"""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed hash or a password bcrypt refuses (over 72 bytes)
            return False

    @staticmethod
    def generate_access_token(user_id: int, email: str, role: str) -> str:
        """Generate JWT access token with user information"""
        now = utc_now()
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

        payload = {
            "sub": str(user_id),  # Subject (user ID)
            "email": email,
            "role": role,
            "iat": now,  # Issued at
            "exp": expire,  # Expiration
            "jti": str(uuid.uuid4()),  # JWT ID for uniqueness
        }

        return jwt.encode(
            payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM
        )

    @staticmethod
    def verify_access_token(token: str) -> Optional[Dict[str, Any]]:
        """Verify and decode access token"""
        try:
            payload = jwt.decode(
                token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
            )
        except jwt.PyJWTError:
            return None

        if not payload.get("sub") or not payload.get("role"):
            return None

        return payload

from datetime import datetime
from typing import Literal, Optional
from pydantic import EmailStr, Field, field_validator
from .camel_base_model import CamelCaseBaseModel as BaseModel

GroupName = Literal["Science", "Commerce", "Arts"]

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def check_password_bytes(v: str) -> str:
    if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    return v


class RegisterRequest(BaseModel):
    """Student registration request schema"""

    name: str = Field(..., min_length=1, max_length=200, description="Full name")
    email: EmailStr = Field(..., description="Email address, used as login")
    password: str = Field(..., min_length=6, max_length=72, description="Password")
    ssc_gpa: Optional[float] = Field(None, ge=0.0, le=5.0, description="SSC GPA")
    hsc_gpa: Optional[float] = Field(None, ge=0.0, le=5.0, description="HSC GPA")
    group_name: Optional[GroupName] = Field(None, description="Academic group")

    @field_validator("password")
    def password_fits_bcrypt(cls, v: str) -> str:
        return check_password_bytes(v)


class LoginRequest(BaseModel):
    """Login request schema"""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, description="Password")

    @field_validator("password")
    def password_fits_bcrypt(cls, v: str) -> str:
        return check_password_bytes(v)


class UserResponse(BaseModel):
    """User response schema; never carries the password hash"""

    id: int = Field(..., description="User ID")
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Email address")
    role: str = Field(..., description="User role")
    ssc_gpa: Optional[float] = Field(None, description="SSC GPA")
    hsc_gpa: Optional[float] = Field(None, description="HSC GPA")
    group_name: Optional[str] = Field(None, description="Academic group")
    last_active: Optional[datetime] = Field(None, description="Last activity")
    created_at: Optional[datetime] = Field(None, description="Registration time")


class AuthResponse(BaseModel):
    user: UserResponse
    access_token: str = Field(..., description="Bearer access token")
    token_type: str = Field("bearer", description="Token type")


class UpdateProfileRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, description="Full name")
    ssc_gpa: Optional[float] = Field(None, ge=0.0, le=5.0, description="SSC GPA")
    hsc_gpa: Optional[float] = Field(None, ge=0.0, le=5.0, description="HSC GPA")
    group_name: Optional[GroupName] = Field(None, description="Academic group")

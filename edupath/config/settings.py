from typing import List, Union
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    ENVIRONMENT: str = "development"
    NAME: str = "EduPath Portal"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/v1"
    """Pydantic v2 doesn't support parsing List[str] from a plain comma-separated string by default anymore."""
    ALLOWED_HOSTS: Union[str, List[str]] = "http://localhost:3000,http://localhost:5173"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./edupath.db"
    INIT_DB_ON_STARTUP: bool = True

    # Authentication & Security
    JWT_SECRET_KEY: str = "edupath-development-secret-key-change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    BCRYPT_ROUNDS: int = 12

    # Notifications
    NOTIFICATION_PAGE_SIZE: int = 20

    # Seeding
    SEED_ADMIN_NAME: str = "System Admin"
    SEED_ADMIN_EMAIL: str = "admin@edupath.bd"
    SEED_ADMIN_PASSWORD: str = "admin123"

    @field_validator("ALLOWED_HOSTS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if not v:
            return []
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()

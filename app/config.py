from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

LOCAL_DEV_JWT_SECRET = "local-dev-secret-key-123"

ALLOWED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    # Database
    database_url: str | None = None
    db_name: str = "notes_db"
    db_user: str = "postgres"
    db_password: str = ""
    db_host: str = "localhost"
    db_port: str = "5432"

    # Environment
    env: str = "local"
    port: int = 8000
    log_level: str | None = None
    cors_origins: str = "*"

    # Auth
    jwt_secret: str = ""
    jwt_expires_in_days: int = 7
    bcrypt_rounds: int = 10

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if value <= 0 or value > 65535:
            raise ValueError(f"Invalid PORT value {value}. Expected 1-65535.")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = value.upper()
        if normalized not in ALLOWED_LOG_LEVELS:
            raise ValueError(
                f"Invalid LOG_LEVEL {value!r}. Expected one of: {', '.join(ALLOWED_LOG_LEVELS)}"
            )
        return normalized

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, value: int) -> int:
        # bcrypt accepts work factors 4..31
        if value < 4 or value > 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return value

    @model_validator(mode="after")
    def require_secret_when_deployed(self) -> "Settings":
        if self.env in ("staging", "production") and not self.jwt_secret.strip():
            raise ValueError("JWT_SECRET is required outside local environment")
        return self

    @property
    def async_database_url(self) -> str:
        """Database URL for the async engine used by the API."""
        if self.database_url:
            url = self.database_url
            if url.startswith("postgresql://"):
                return url.replace("postgresql://", "postgresql+asyncpg://", 1)
            return url
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port or '5432'}/{self.db_name}"
        )

    @property
    def sync_database_url(self) -> str:
        """Database URL for Alembic migrations."""
        if self.database_url:
            return self.database_url.replace("postgresql+asyncpg://", "postgresql://", 1)
        return (
            f"postgresql://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port or '5432'}/{self.db_name}"
        )

    @property
    def effective_jwt_secret(self) -> str:
        return self.jwt_secret or LOCAL_DEV_JWT_SECRET


settings = Settings()

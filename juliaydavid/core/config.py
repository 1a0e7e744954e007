# juliaydavid/core/config.py
"""
Application configuration using pydantic-settings.

Security considerations:
- SECRET_KEY has no default: a missing key disables login instead of
  signing tokens with a guessable value
- CORS_ORIGINS parsed from comma-separated env var, never defaults to "*"
- Database URLs normalized for async drivers automatically
- Raw backend errors are only shown to clients in development
"""
from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./juliaydavid.db"


class Settings(BaseSettings):
    """
    Strictly typed application settings.

    Priority for loading:
    1. Environment variables (highest priority)
    2. .env file (via pydantic-settings)
    3. Default values (lowest priority, dev-safe only)
    """

    # ─────────────────────────────────────────────────────────────
    # Application metadata
    # ─────────────────────────────────────────────────────────────
    PROJECT_NAME: str = "Julia y David"
    PROJECT_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # ─────────────────────────────────────────────────────────────
    # Environment mode
    # ─────────────────────────────────────────────────────────────
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    # None → decided by ENVIRONMENT (only development shows raw errors)
    EXPOSE_ERROR_DETAILS: Optional[bool] = None

    # ─────────────────────────────────────────────────────────────
    # Security: JWT + password hashing
    # ─────────────────────────────────────────────────────────────
    SECRET_KEY: Optional[str] = None
    ALGORITHM: str = "HS256"
    # 7 days; the session lifetime is a product decision, see DESIGN.md
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    BCRYPT_ROUNDS: int = 12

    # ─────────────────────────────────────────────────────────────
    # Access policy
    # Only these usernames may create, update or delete anything.
    # ─────────────────────────────────────────────────────────────
    ALLOWED_USERS: str = "Julia,David"

    # Used only by the setup routine: {"Julia": "...", "David": "..."}
    SEED_USER_PASSWORDS: Dict[str, str] = {}

    # ─────────────────────────────────────────────────────────────
    # Database Configuration
    # Accepts DATABASE_URL or the POSTGRES_URL name used by Vercel.
    # ─────────────────────────────────────────────────────────────
    DATABASE_URL: str = Field(
        default=DEFAULT_DATABASE_URL,
        validation_alias=AliasChoices("DATABASE_URL", "POSTGRES_URL"),
    )

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def normalize_database_url(cls, v: Optional[str]) -> str:
        """
        Normalize database URLs for async SQLAlchemy compatibility.

        Conversions:
        - postgres://     → postgresql+asyncpg://
        - postgresql://   → postgresql+asyncpg://
        - sqlite:///      → sqlite+aiosqlite:///
        """
        if v is None:
            return DEFAULT_DATABASE_URL

        url = v.strip()

        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)

        if url.startswith("postgresql://") and "+asyncpg" not in url:
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)

        if url.startswith("sqlite:///") and "+aiosqlite" not in url:
            return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)

        return url

    # MUST be False in production to prevent SQL query exposure
    DATABASE_ECHO: bool = False

    # ─────────────────────────────────────────────────────────────
    # CORS Configuration
    # Empty string → empty list (NOT "*")
    # ─────────────────────────────────────────────────────────────
    CORS_ORIGINS: str = "http://localhost:5500,http://127.0.0.1:5500,http://localhost:3000"

    # ─────────────────────────────────────────────────────────────
    # Blob storage
    # "local": files on disk, served by the app under LOCAL_BLOB_URL
    # "s3":    any S3-compatible bucket (Cloudflare R2, AWS, MinIO)
    # ─────────────────────────────────────────────────────────────
    BLOB_BACKEND: str = "local"
    LOCAL_BLOB_DIR: str = "./uploads"
    LOCAL_BLOB_URL: str = "/uploads"

    S3_ENDPOINT_URL: Optional[str] = None
    S3_REGION: str = "auto"
    S3_ACCESS_KEY_ID: Optional[str] = None
    S3_SECRET_ACCESS_KEY: Optional[str] = None
    S3_BUCKET: Optional[str] = None
    # Audio/video go here; falls back to S3_BUCKET
    S3_MEDIA_BUCKET: Optional[str] = None
    S3_PUBLIC_BASE_URL: Optional[str] = None
    S3_MEDIA_PUBLIC_BASE_URL: Optional[str] = None

    BLOB_TIMEOUT_SECONDS: float = 30.0
    MAX_IMAGE_BYTES: int = 15 * 1024 * 1024
    MAX_FILE_BYTES: int = 50 * 1024 * 1024

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def BACKEND_CORS_ORIGINS(self) -> List[str]:
        """Parse CORS_ORIGINS into a list; empty means no cross-origin access."""
        if not self.CORS_ORIGINS or not self.CORS_ORIGINS.strip():
            return []

        return [
            origin.strip()
            for origin in self.CORS_ORIGINS.split(",")
            if origin.strip()
        ]

    @property
    def allowed_usernames(self) -> List[str]:
        return [name.strip() for name in self.ALLOWED_USERS.split(",") if name.strip()]

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database (local development)."""
        return "sqlite" in self.DATABASE_URL.lower()

    @property
    def expose_error_details(self) -> bool:
        if self.EXPOSE_ERROR_DETAILS is not None:
            return self.EXPOSE_ERROR_DETAILS
        return self.ENVIRONMENT.lower() == "development"

    def missing_settings(self) -> List[str]:
        """
        Names of required settings that are not configured.

        The app still starts so that /health answers, but every operation
        that needs one of these fails with a ConfigError (HTTP 500).
        """
        missing = []
        if not self.SECRET_KEY:
            missing.append("SECRET_KEY")
        if self.BLOB_BACKEND.lower() == "s3":
            for name in ("S3_BUCKET", "S3_ACCESS_KEY_ID", "S3_SECRET_ACCESS_KEY"):
                if not getattr(self, name):
                    missing.append(name)
        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance.

    Loaded once per process so every component sees the same values.
    """
    return Settings()

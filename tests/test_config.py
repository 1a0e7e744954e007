import pytest

from juliaydavid.core.config import Settings


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("postgres://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
        ("postgresql://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
        ("postgresql+asyncpg://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
        ("sqlite:///./x.db", "sqlite+aiosqlite:///./x.db"),
    ],
)
def test_database_url_is_normalized(raw, expected):
    assert Settings(DATABASE_URL=raw).DATABASE_URL == expected


def test_postgres_url_alias(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("POSTGRES_URL", "postgres://u:p@db/app")
    assert Settings().DATABASE_URL == "postgresql+asyncpg://u:p@db/app"


def test_cors_origins():
    assert Settings(CORS_ORIGINS="").BACKEND_CORS_ORIGINS == []
    assert Settings(CORS_ORIGINS="https://a.com, https://b.com,").BACKEND_CORS_ORIGINS == [
        "https://a.com",
        "https://b.com",
    ]


def test_allowed_usernames():
    assert Settings(ALLOWED_USERS=" Julia , David ").allowed_usernames == ["Julia", "David"]


def test_missing_settings():
    settings = Settings(SECRET_KEY=None, BLOB_BACKEND="s3", S3_BUCKET="fotos")
    assert settings.missing_settings() == ["SECRET_KEY", "S3_ACCESS_KEY_ID", "S3_SECRET_ACCESS_KEY"]
    assert Settings(SECRET_KEY="k", BLOB_BACKEND="local").missing_settings() == []


def test_error_details_follow_environment():
    assert Settings(ENVIRONMENT="development").expose_error_details
    assert not Settings(ENVIRONMENT="production").expose_error_details
    assert Settings(ENVIRONMENT="production", EXPOSE_ERROR_DETAILS=True).expose_error_details

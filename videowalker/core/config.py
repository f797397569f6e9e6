from datetime import timedelta

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================
    # App
    # =========================
    APP_NAME: str = "VideoWalker"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = ""

    # =========================
    # Auth
    # =========================
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 720

    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "change-me-now"

    # =========================
    # Database
    # =========================
    DATABASE_URL: str = Field(default="sqlite:///./videowalker.db")
    AUTO_CREATE_TABLES: bool = True
    SEED_SAMPLE_CAMPAIGN: bool = False

    # =========================
    # Contest rules
    # =========================
    # minutes after the reveal during which a correct code is still accepted
    CLAIM_WINDOW_MINUTES: int = Field(default=60, gt=0)


settings = Settings()

CLAIM_WINDOW_AFTER_REVEAL = timedelta(minutes=settings.CLAIM_WINDOW_MINUTES)


def get_database_url() -> str:
    url = (settings.DATABASE_URL or "").strip()

    # Compat Render/Heroku
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)

    # SQLAlchemy 2.x + psycopg 3
    if url.startswith("postgresql://") and "+psycopg" not in url:
        url = url.replace("postgresql://", "postgresql+psycopg://", 1)

    return url


def is_memory_sqlite(url: str) -> bool:
    url = url.strip().lower()
    return url in ("sqlite://", "sqlite:///:memory:")

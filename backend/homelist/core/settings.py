# backend/homelist/core/settings.py
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # unrelated env vars (PATH, API keys, ...) are ignored
    )

    # async (FastAPI), e.g. postgresql+asyncpg://user:pw@localhost:5432/homelist
    DATABASE_URL: str | None = Field(None, alias="DATABASE_URL")
    # sync (scripts/alembic), e.g. postgresql+psycopg://user:pw@localhost:5432/homelist
    SYNC_DATABASE_URL: str | None = Field(None, alias="SYNC_DATABASE_URL")

    # Only one browser origin is allowed to call the API.
    ALLOWED_ORIGIN: str = Field("http://localhost:3000", alias="HOMELIST_ALLOWED_ORIGIN")

    HOST: str = Field("0.0.0.0", alias="HOST")
    PORT: int = Field(4000, alias="PORT")
    LOG_LEVEL: str = Field("INFO", alias="LOG_LEVEL")


settings = Settings()

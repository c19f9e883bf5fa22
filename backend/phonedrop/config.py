"""PhoneDrop configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings shared by the upload server and the dashboard client."""

    app_name: str = "PhoneDrop"
    debug: bool = False
    log_level: str = "INFO"

    # Network
    host: str = "127.0.0.1"
    port: int = 8000
    api_prefix: str = "/api"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Upload auth — empty secret means uploads are open
    upload_secret: str = ""
    max_upload_bytes: int = 100 * 1024 * 1024  # 0 = unlimited

    # Object store
    public_base_url: str = "http://127.0.0.1:8000"
    data_dir: str = "./data"
    blob_dir: str = "./data/blobs"
    database_path: str = "./data/phonedrop.db"

    # Dashboard client
    server_url: str = "http://127.0.0.1:8000"
    poll_interval_seconds: float = 3.0
    request_timeout_seconds: float = 10.0
    content_max_attempts: int = 5  # 0 = retry on every pass forever
    content_max_chars: int = 256 * 1024  # longer bodies are truncated for display

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="PHONEDROP_",
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str) and not value.startswith("["):
            return [o.strip() for o in value.split(",") if o.strip()]
        if isinstance(value, list):
            return value
        return ["http://localhost:3000"]

    @field_validator("public_base_url", "server_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        """Ensure data directories are absolute."""
        base = Path(__file__).resolve().parent.parent  # backend/
        for field in ("data_dir", "blob_dir", "database_path"):
            val = getattr(self, field)
            if not Path(val).is_absolute():
                setattr(self, field, str(base / val))
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

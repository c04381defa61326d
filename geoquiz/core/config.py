from __future__ import annotations

from typing import List, Any
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AliasChoices, field_validator


class Settings(BaseSettings):
    # .env source; unknown keys are rejected so typos surface at startup
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="forbid",
    )

    # General
    APP_NAME: str = "GeoQuiz Backend"
    API_V1_PREFIX: str = "/api/v1"
    APP_ENV: str = Field(
        "dev",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Application environment: dev|staging|prod",
    )

    BACKEND_PORT: int = Field(
        8000,
        validation_alias=AliasChoices("BACKEND_PORT", "app_port"),
        description="Backend port to bind",
    )

    # Redis holds the saved screen position per session
    REDIS_URL: str = Field(
        "redis://localhost:6379/0",
        validation_alias=AliasChoices("REDIS_URL", "redis_url"),
        description="redis:// or rediss:// URL",
    )
    POSITION_TTL_SECONDS: int = Field(
        6 * 60 * 60,
        gt=0,
        validation_alias=AliasChoices("POSITION_TTL_SECONDS", "position_ttl_seconds"),
        description="How long a saved question index survives",
    )

    # Answer notification
    TOAST_DURATION_MS: int = Field(
        2000,
        gt=0,
        validation_alias=AliasChoices("TOAST_DURATION_MS", "toast_duration_ms"),
        description="How long the correct/incorrect notification stays up",
    )

    # Logging
    LOG_LEVEL: str = Field(
        "INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
    )
    LOG_DIR: str = Field(
        "logs",
        validation_alias=AliasChoices("LOG_DIR", "log_dir"),
    )

    # CORS origins
    FRONTEND_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]

    @field_validator("FRONTEND_ORIGINS", mode="before")
    @classmethod
    def _parse_origins(cls, v: Any) -> Any:
        """
        FRONTEND_ORIGINS may be given in .env as:
        - a JSON array: ["http://localhost:5173","http://localhost:3000"]
        - a comma separated string: http://localhost:5173,http://localhost:3000
        - or with ; as the separator
        """
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("[") and s.endswith("]"):
                import json
                try:
                    return json.loads(s)
                except ValueError:
                    # broken JSON falls through to the split below
                    pass
            return [item.strip() for item in s.strip("[]").replace(";", ",").split(",") if item.strip()]
        return v


settings = Settings()

"""
Agora Backend Configuration.

Environment-based configuration using Pydantic Settings.
Values can be overridden via environment variables or a .env file.
"""

import json
from functools import lru_cache
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Agora Forum Platform"
    app_version: str = "1.0.0"
    debug: bool = False

    # API
    api_v1_prefix: str = "/api/v1"

    # Markup
    markup_max_input_chars: int = 50_000
    markup_snippet_length: int = 200

    # Forum
    forum_date_format: str = "%b %d, %Y %H:%M"

    # CORS
    cors_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, v: Any) -> Any:
        """Accept CORS_ORIGINS as a JSON list or a comma-separated string."""
        if isinstance(v, str):
            if v.lstrip().startswith("["):
                return json.loads(v)
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("markup_max_input_chars", "markup_snippet_length")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Markup limits must be positive."""
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()

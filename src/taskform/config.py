"""Form core configuration using environment variables."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root once so that `.env` is discovered regardless of CWD
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Load configuration from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    suggestion_limit: int = Field(
        default=5,
        ge=1,
        validation_alias=AliasChoices("TAG_SUGGESTION_LIMIT", "suggestion_limit"),
    )
    parent_candidate_limit: int = Field(
        default=5,
        ge=1,
        validation_alias=AliasChoices(
            "PARENT_CANDIDATE_LIMIT", "parent_candidate_limit"
        ),
    )
    # How long the invalid range highlight stays visible
    invalid_range_flash_ms: int = Field(
        default=500,
        ge=0,
        validation_alias=AliasChoices(
            "INVALID_RANGE_FLASH_MS", "invalid_range_flash_ms"
        ),
    )
    default_task_estimate_minutes: int = Field(
        default=60,
        ge=0,
        validation_alias=AliasChoices(
            "DEFAULT_TASK_ESTIMATE_MINUTES", "default_task_estimate_minutes"
        ),
    )
    default_block_minutes: int = Field(
        default=60,
        ge=1,
        validation_alias=AliasChoices(
            "DEFAULT_BLOCK_MINUTES", "default_block_minutes"
        ),
    )
    default_block_color: str = Field(
        default="#fecaca",
        pattern=r"^#[0-9a-fA-F]{3,8}$",
        validation_alias=AliasChoices("DEFAULT_BLOCK_COLOR", "default_block_color"),
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
    )
    log_file: Optional[Path] = Field(
        default=None,
        validation_alias=AliasChoices("LOG_FILE", "log_file"),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()  # pyright: ignore[reportCallIssue]


__all__ = ["Settings", "get_settings"]

"""Runtime configuration for the content layer.

Relies on pydantic-settings so that environment variables (prefixed with ``CMS_``)
can override defaults. See `.env.example` for common values.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_SUPPORTED_LOCALES: tuple[str, ...] = ("de-DE", "en-US", "ar-AE", "he-IL")


class Settings(BaseSettings):
    """Captures runtime configuration for talking to the CMS."""

    base_url: str = Field(
        default="http://localhost:8055",
        description="Origin of the CMS REST API",
    )
    asset_base_url: Optional[str] = Field(
        default=None,
        description="Origin used for /assets URLs; falls back to base_url",
    )
    public_token: Optional[str] = Field(default=None, description="Bearer token for public reads")
    admin_token: Optional[str] = Field(default=None, description="Bearer token for elevated server reads")

    default_locale: str = Field(default="de-DE")
    fallback_locale: Optional[str] = Field(default="en-US")
    supported_locales: Tuple[str, ...] = Field(default=DEFAULT_SUPPORTED_LOCALES)

    request_timeout_s: float = Field(default=10.0, description="Per-request timeout for CMS calls")
    max_retries: int = Field(default=2, description="Retries for transient CMS failures")
    retry_base_delay_s: float = Field(default=0.3, description="Initial backoff delay between retries")
    user_agent: str = Field(default="hotel-content/0.1.0")

    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("logs"))

    model_config = SettingsConfigDict(
        env_prefix="CMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @field_validator("base_url", "asset_base_url", mode="before")
    def _strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        if value in (None, ""):
            return None
        return str(value).rstrip("/")

    @field_validator("public_token", "admin_token", mode="before")
    def _blank_token_is_missing(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("log_dir", mode="before")
    def _expand_log_dir(cls, value: str | Path) -> Path:
        if isinstance(value, Path):
            return value
        return Path(value).expanduser()

    @field_validator("supported_locales", mode="before")
    def _parse_supported_locales(cls, value: object) -> Tuple[str, ...]:
        if value is None or value == "":
            return DEFAULT_SUPPORTED_LOCALES
        if isinstance(value, tuple):
            return tuple(str(item).strip() for item in value if str(item).strip())
        if isinstance(value, list):
            return tuple(str(item).strip() for item in value if str(item).strip())
        if isinstance(value, str):
            parts: Iterable[str] = (part.strip() for part in value.split(","))
            return tuple(part for part in parts if part)
        raise TypeError("supported_locales must be provided as a comma-separated string or list")

    @field_validator("request_timeout_s", "retry_base_delay_s")
    def _validate_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeouts and delays must be positive")
        return value

    @field_validator("max_retries")
    def _validate_retries(cls, value: int) -> int:
        if value < 0:
            raise ValueError("max_retries must not be negative")
        return value

    @model_validator(mode="after")
    def _check_locales(self) -> "Settings":
        if self.default_locale not in self.supported_locales:
            raise ValueError(
                f"default_locale {self.default_locale!r} is not one of {', '.join(self.supported_locales)}"
            )
        if self.fallback_locale and self.fallback_locale not in self.supported_locales:
            logger.warning(
                "Fallback locale %s is not listed in supported locales %s",
                self.fallback_locale,
                self.supported_locales,
            )
        return self

    @property
    def assets_origin(self) -> str:
        return self.asset_base_url or self.base_url

    def is_supported_locale(self, locale: str) -> bool:
        return locale in self.supported_locales

    def ensure_directories(self) -> None:
        """Create directories that must exist at runtime."""
        self.log_dir.mkdir(parents=True, exist_ok=True)

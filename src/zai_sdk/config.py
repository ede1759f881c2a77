"""Client configuration for the Z.ai SDK.

A :class:`ClientConfig` is immutable once built. Use :meth:`ClientConfig.clone`
to derive a modified copy, or :meth:`ClientConfig.from_env` to load settings
from ``ZAI_*`` environment variables.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from zai_sdk._constants import (
    DEFAULT_ACCEPT_LANGUAGE,
    DEFAULT_MAX_RETRIES,
    DEFAULT_SOURCE_CHANNEL,
    DEFAULT_TIMEOUT,
    ZAI_BASE_URL,
)
from zai_sdk.exceptions import ConfigurationError

ENV_API_KEY = "ZAI_API_KEY"
ENV_BASE_URL = "ZAI_BASE_URL"


def _format_validation_error(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(loc) for loc in err["loc"]) or "config"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


class ClientConfig(BaseModel):
    """Validated, immutable SDK configuration.

    Args:
        api_key: Credential in ``<id>.<secret>`` form
        base_url: Absolute http(s) API root, without trailing slash
        timeout: Total deadline per call in seconds, retries included
        max_retries: Retries after the first attempt
        disable_token_cache: Mint a fresh bearer token for every request
        source_channel: Value of the ``x-source-channel`` header
        accept_language: Default ``Accept-Language`` header

    Raises:
        ConfigurationError: If any field is invalid
    """

    api_key: str = Field(repr=False)
    base_url: str = ZAI_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    disable_token_cache: bool = True
    source_channel: str = DEFAULT_SOURCE_CHANNEL
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE

    model_config = {"frozen": True}

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            raise ConfigurationError(_format_validation_error(e)) from e

    @field_validator("api_key")
    @classmethod
    def _check_api_key(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("API key must not be empty")
        return value.strip()

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        parts = urlsplit(value.strip())
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"base URL must be an absolute http(s) URL, got {value!r}")
        return value.strip().rstrip("/")

    @field_validator("timeout")
    @classmethod
    def _check_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @field_validator("max_retries")
    @classmethod
    def _check_max_retries(cls, value: int) -> int:
        if value < 0:
            raise ValueError("max_retries must not be negative")
        return value

    @classmethod
    def from_env(cls, **overrides: Any) -> ClientConfig:
        """Build a config from ``ZAI_*`` environment variables.

        Reads ZAI_API_KEY (required), ZAI_BASE_URL, ZAI_TIMEOUT,
        ZAI_MAX_RETRIES, ZAI_DISABLE_TOKEN_CACHE, ZAI_SOURCE_CHANNEL and
        ZAI_ACCEPT_LANGUAGE. Keyword overrides that are not None win over
        the environment.

        Raises:
            ConfigurationError: If the key is missing or a value is malformed
        """
        try:
            settings = EnvironmentSettings()
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid environment configuration: {_format_validation_error(e)}"
            ) from e

        values = settings.model_dump(exclude_none=True)
        values.update({k: v for k, v in overrides.items() if v is not None})
        if not values.get("api_key"):
            raise ConfigurationError(
                f"API key not configured. Either pass api_key or set "
                f"{ENV_API_KEY} environment variable."
            )
        return cls(**values)

    def clone(self, **changes: Any) -> ClientConfig:
        """Return an independent copy, re-validated when changes are given."""
        if not changes:
            return self.model_copy(deep=True)
        return ClientConfig(**{**self.model_dump(), **changes})

    @property
    def api_key_id(self) -> str:
        """The public half of the credential."""
        return self.api_key.split(".", 1)[0]


class EnvironmentSettings(BaseSettings):
    """Raw settings read from the environment (and an optional .env file)."""

    api_key: str | None = None
    base_url: str | None = None
    timeout: float | None = None
    max_retries: int | None = None
    disable_token_cache: bool | None = None
    source_channel: str | None = None
    accept_language: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="ZAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

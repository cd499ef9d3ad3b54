"""Centralized configuration management for the Basiq client.

This module provides a Pydantic Settings-based configuration system that
consolidates the API credentials, transport options and logging settings
with environment variable integration and profile-specific ``.env`` files.
"""

import os
import re
from pathlib import Path
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://au-api.basiq.io"
DEFAULT_API_VERSION = "2.0"

_PROFILE_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    model_config = ConfigDict(frozen=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_to_file: bool = Field(default=False, description="Enable file logging")
    log_file_path: Path = Field(
        default=Path("logs/basiq_client.log"), description="Path to log file"
    )
    max_file_size_mb: int = Field(
        default=10, ge=1, le=1000, description="Maximum log file size in MB"
    )
    backup_count: int = Field(
        default=5, ge=1, le=50, description="Number of log file backups to keep"
    )


class BasiqSettings(BaseSettings):
    """Client settings with environment variable integration.

    Environment variables are loaded with the BASIQ_ prefix.
    For nested configs, use double underscores: BASIQ_LOGGING__LEVEL

    Profile Support:
    - Loads from .env.{profile} files (e.g., .env.dev, .env.prod)
    - Falls back to .env when no profile file exists
    """

    api_key: str = Field(
        default="",
        description="Long-lived Basiq API key, already encoded for Basic auth",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL, description="Base URL of the Basiq API"
    )
    api_version: str = Field(
        default=DEFAULT_API_VERSION, description="Value of the basiq-version header"
    )
    version_header_scope: Literal["all", "token"] = Field(
        default="all",
        description="Send basiq-version on every request or only on /token",
    )
    token_scope: str = Field(
        default="SERVER_ACCESS", description="Scope requested for access tokens"
    )
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Request timeout in seconds (None uses the transport default)",
    )
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    profile: str = Field(
        default="default",
        description="Configuration profile name (e.g., dev, prod)",
    )

    @field_validator("profile")
    @classmethod
    def validate_profile_name(cls, v: str) -> str:
        """Ensure profile name is safe for use as a filename."""
        _check_profile_name(v)
        return v

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalise the base URL so paths can be appended directly."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Base URL must start with http:// or https://")
        return v.rstrip("/")

    @model_validator(mode="before")
    @classmethod
    def apply_legacy_api_key(cls, data: Any) -> Any:
        """Fall back to BASIQ_ACCESS_KEY, the name older setups exported.

        Runs on the values merged from arguments, environment and env file,
        so BASIQ_API_KEY from any of them takes precedence.
        """
        if isinstance(data, dict) and "api_key" not in data:
            legacy_key = os.getenv("BASIQ_ACCESS_KEY")
            if legacy_key:
                data = {**data, "api_key": legacy_key}
        return data

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Load the profile-specific env file in place of the default one."""
        init_dict = init_settings.init_kwargs if init_settings else {}
        profile = init_dict.get("profile", "default")  # type: ignore[reportUnknownMemberType]

        profile_env_file = Path(f".env.{profile}")
        if profile_env_file.exists():
            env_file = str(profile_env_file)
        else:
            env_file = ".env"

        from pydantic_settings import DotEnvSettingsSource

        custom_dotenv = DotEnvSettingsSource(
            settings_cls,
            env_file=env_file,
            env_file_encoding="utf-8",
        )

        # Later sources are overridden by earlier ones
        return (
            init_settings,
            env_settings,
            custom_dotenv,
            file_secret_settings,
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BASIQ_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    def require_api_key(self) -> str:
        """Return the configured API key.

        Raises:
            ValueError: If no API key is configured
        """
        if not self.api_key:
            raise ValueError(
                "Missing required configuration: BASIQ_API_KEY is required"
            )
        return self.api_key


def _check_profile_name(profile: str) -> None:
    if not profile:
        raise ValueError("Profile name cannot be empty")
    if not _PROFILE_PATTERN.match(profile):
        raise ValueError(
            f"Invalid profile: {profile}. "
            "Profile name must contain only alphanumeric characters, dashes, and underscores"
        )


_settings_cache: dict[str, BasiqSettings] = {}
_current_profile: str = "default"


def get_settings(profile: str | None = None) -> BasiqSettings:
    """Get the settings instance for the specified profile.

    Settings are loaded once per profile and cached.

    Args:
        profile: Profile name. Defaults to the current profile.

    Returns:
        BasiqSettings: The configuration instance for the profile

    Raises:
        ValueError: If the configuration is invalid
    """
    if profile is None:
        profile = _current_profile

    if profile in _settings_cache:
        return _settings_cache[profile]

    try:
        settings = BasiqSettings(profile=profile)
    except Exception as e:
        raise ValueError(f"Configuration error for profile '{profile}': {e}") from e

    _settings_cache[profile] = settings
    return settings


def set_current_profile(profile: str) -> None:
    """Set the current active profile.

    Raises:
        ValueError: If profile name contains invalid characters
    """
    global _current_profile

    _check_profile_name(profile)
    _current_profile = profile


def get_current_profile() -> str:
    """Get the current active profile name."""
    return _current_profile


def reload_settings(profile: str | None = None) -> BasiqSettings:
    """Reload settings from the environment, discarding the cached copy.

    Args:
        profile: Profile to reload. If None, reloads the current profile.

    Returns:
        BasiqSettings: The reloaded configuration instance
    """
    if profile is None:
        profile = _current_profile

    _settings_cache.pop(profile, None)
    return get_settings(profile)


def clear_settings_cache() -> None:
    """Drop every cached settings instance."""
    _settings_cache.clear()

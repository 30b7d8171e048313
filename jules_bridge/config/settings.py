"""
Configuration system using Pydantic for type-safe settings management.

This module provides the settings object shared by the CLI, the API
clients, and the chat orchestrator.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jules_bridge.exceptions import ConfigurationError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class BridgeSettings(BaseSettings):
    """jules-bridge settings.

    Every field can be overridden with a ``JULES_BRIDGE_<FIELD>`` environment
    variable (e.g. ``JULES_BRIDGE_JULES_API_BASE_URL``).
    """

    model_config = SettingsConfigDict(
        env_prefix="JULES_BRIDGE_",
        case_sensitive=False,
    )

    jules_api_base_url: str = Field(
        default="https://jules.googleapis.com",
        description="Base URL of the Jules session API",
    )
    github_api_base_url: str = Field(
        default="https://api.github.com",
        description="GitHub API base URL (change for GitHub Enterprise)",
    )
    keyring_service: str = Field(
        default="jules-bridge",
        min_length=1,
        description="Keyring service name the credentials are stored under",
    )
    log_level: LogLevel = Field(default="WARNING", description="Minimum log level")
    workspace: Path | None = Field(
        default=None,
        description="Local repository the PR commands operate on",
    )

    pr_branch: str = Field(default="jules-branch", description="Head branch of created PRs")
    pr_title: str = Field(default="Jules PR", description="Title of created PRs")
    pr_body: str = Field(default="This is a PR created by Jules.", description="Body of created PRs")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("jules_api_base_url", "github_api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def load_settings(**overrides: object) -> BridgeSettings:
    """Build settings from the environment plus explicit overrides.

    Args:
        **overrides: Field values that take precedence over the environment
            (``None`` values are ignored so unset CLI options fall through)

    Returns:
        BridgeSettings instance

    Raises:
        ConfigurationError: If any value fails validation
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return BridgeSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

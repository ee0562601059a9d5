"""Runtime configuration for the OpenCitations client and server."""

from __future__ import annotations

from typing import Any, Optional

import requests
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from opencitations_mcp.exceptions import ConfigError

DEFAULT_BASE_URL = "https://api.opencitations.net/index/v2"
DEFAULT_USER_AGENT = "opencitations-mcp"


class OpenCitationsSettings(BaseSettings):  # type: ignore[misc]
    """Settings read from ``OPENCITATIONS_*`` environment variables or ``.env``."""

    access_token: Optional[str] = Field(
        None, description="OpenCitations access token sent verbatim as Authorization"
    )
    base_url: str = Field(DEFAULT_BASE_URL, description="Versioned OpenCitations Index API root")
    timeout: float = Field(10.0, gt=0, description="Timeout (in seconds) for outbound HTTP requests")
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header for API requests")

    model_config = SettingsConfigDict(env_prefix="OPENCITATIONS_", env_file=".env", extra="ignore")

    @field_validator("access_token")
    @classmethod
    def blank_token_is_missing(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def build_session(self) -> requests.Session:
        """Return a :class:`requests.Session` carrying the configured User-Agent."""

        session = requests.Session()
        if self.user_agent:
            session.headers["User-Agent"] = self.user_agent
        session.headers["Accept"] = "application/json"
        return session


def load_settings(**overrides: Any) -> OpenCitationsSettings:
    """Build settings from the environment, applying non-``None`` overrides.

    Raises :class:`ConfigError` when a value fails validation.
    """

    explicit = {key: value for key, value in overrides.items() if value is not None}
    try:
        return OpenCitationsSettings(**explicit)
    except ValidationError as exc:
        raise ConfigError(f"Invalid OpenCitations configuration: {exc}") from exc


def resolve_access_token(flag_value: Optional[str], env_value: Optional[str]) -> Optional[str]:
    """Pick the access token, preferring the command-line flag over the environment.

    Empty strings count as unset.
    """

    for candidate in (flag_value, env_value):
        if candidate:
            return candidate
    return None


__all__ = [
    "DEFAULT_BASE_URL",
    "OpenCitationsSettings",
    "load_settings",
    "resolve_access_token",
]

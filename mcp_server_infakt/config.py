"""Configuration for the inFakt connection."""

import os
from typing import Mapping, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

PRODUCTION_URL = "https://api.infakt.pl/api/v3"
SANDBOX_URL = "https://api.sandbox-infakt.pl/api/v3"

MIN_API_KEY_LENGTH = 10


class ConfigurationError(Exception):
    """Startup settings are missing or malformed."""


class InfaktConfig(BaseModel):
    """Configuration for inFakt connection."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., description="inFakt API key sent in the X-inFakt-ApiKey header")
    base_url: str = Field(PRODUCTION_URL, description="inFakt API base URL including /api/v3")
    use_sandbox: bool = Field(False, description="Whether the sandbox environment is used")
    timeout: int = Field(30, description="Request timeout in seconds")

    @field_validator("api_key")
    @classmethod
    def _check_api_key(cls, value: str) -> str:
        value = value.strip()
        if len(value) < MIN_API_KEY_LENGTH:
            raise ValueError("Invalid API key format: key appears to be too short")
        return value

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid URL format: {value}")
        return value.rstrip("/")

    def masked_api_key(self) -> str:
        """API key safe to print, e.g. 'abcd...wxyz'."""
        return f"{self.api_key[:4]}...{self.api_key[-4:]}"


def _parse_bool(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in ("true", "1")


def load_config(env: Optional[Mapping[str, str]] = None) -> InfaktConfig:
    """Build the configuration from environment variables.

    INFAKT_API_KEY is required. INFAKT_USE_SANDBOX selects the sandbox and
    takes precedence over INFAKT_BASE_URL.
    """
    if env is None:
        env = os.environ

    api_key = (env.get("INFAKT_API_KEY") or "").strip()
    if not api_key:
        raise ConfigurationError("Missing required environment variable: INFAKT_API_KEY")

    use_sandbox = _parse_bool(env.get("INFAKT_USE_SANDBOX"))
    if use_sandbox:
        base_url = SANDBOX_URL
    else:
        base_url = env.get("INFAKT_BASE_URL") or PRODUCTION_URL

    try:
        return InfaktConfig(api_key=api_key, base_url=base_url, use_sandbox=use_sandbox)
    except ValidationError as e:
        messages = "; ".join(error["msg"].removeprefix("Value error, ") for error in e.errors())
        raise ConfigurationError(f"Invalid inFakt configuration: {messages}") from e

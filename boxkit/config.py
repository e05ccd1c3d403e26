from __future__ import annotations

import os

from pydantic import BaseModel, Field, field_validator

__all__ = [
    "DEFAULT_API_ROOT_URL",
    "DEFAULT_API_VERSION",
    "Config",
]

DEFAULT_API_ROOT_URL = "https://api.box.com"
DEFAULT_API_VERSION = "2.0"


class Config(BaseModel):
    """Connection settings shared by every request a BoxClient makes."""

    api_root_url: str = DEFAULT_API_ROOT_URL
    api_version: str = DEFAULT_API_VERSION
    timeout: float = Field(30.0, gt=0)  # seconds
    access_token: str | None = None
    as_user: str | None = None

    @field_validator("api_root_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("api_root_url must not be empty")
        return value

    @field_validator("api_version")
    @classmethod
    def _strip_slashes(cls, value: str) -> str:
        return value.strip().strip("/")

    @property
    def base_url(self) -> str:
        return f"{self.api_root_url}/{self.api_version}"

    @classmethod
    def from_env(cls, **overrides: object) -> "Config":
        """Build a Config from BOX_* environment variables.

        Keyword overrides win over the environment; None overrides are ignored.
        """
        values: dict[str, object] = {
            "api_root_url": os.getenv("BOX_API_ROOT_URL", DEFAULT_API_ROOT_URL),
            "api_version": os.getenv("BOX_API_VERSION", DEFAULT_API_VERSION),
            "timeout": os.getenv("BOX_TIMEOUT", "30"),
            "access_token": os.getenv("BOX_ACCESS_TOKEN") or None,
            "as_user": os.getenv("BOX_AS_USER") or None,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

"""MvcSettings — environment-driven configuration.

Values come from ``MVC_*`` environment variables, falling back to the code
defaults below. ``get_settings()`` caches a single instance per process; call
``get_settings.cache_clear()`` after changing the environment.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MvcSettings(BaseSettings):
    """Package-wide options."""

    model_config = SettingsConfigDict(env_prefix="MVC_", frozen=True)

    id_attribute_dot_replacement: str = "_"
    request_id_header: str = "RequestId"
    constraint_status_code: int = Field(default=404, ge=400, le=599)
    debug: bool = False


@lru_cache
def get_settings() -> MvcSettings:
    return MvcSettings()

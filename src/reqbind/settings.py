"""
reqbind.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven defaults for binding behavior (vacuum, query methods).
- Provide logging defaults consumed by `observability.logging`.
- Offer a cached settings instance for the default binder.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class BindSettings(BaseSettings):
    """
    Process-wide binding defaults.

    Values are read once; explicit arguments to `Binder` always win.
    """

    model_config = SettingsConfigDict(env_prefix="REQBIND_", case_sensitive=False)

    # Apply the vacuum pass on every call, as if Flag.VACUUM were always passed.
    vacuum: bool = False

    # Methods for which `bind_request` reads the query string instead of the body.
    query_methods: frozenset[str] = frozenset({"GET", "DELETE", "HEAD"})

    log_level: str = "INFO"
    log_json: bool = True


@lru_cache(maxsize=1)
def get_settings() -> BindSettings:
    # Cache avoids re-parsing env vars for each request.
    return BindSettings()


# --- Module Notes -----------------------------------------------------------
# Tests that tweak env vars must call `get_settings.cache_clear()` afterwards.

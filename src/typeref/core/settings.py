"""Environment-driven defaults for typeref converters.

``TypeRefSettings`` holds the process-wide defaults used when a caller does
not pass explicit values: the name the converter type is registered under,
whether compat-mode aliases are generated, and the alias collision policy.

Manifesto:
    Attribute definitions should be explicit; settings only supply the
    defaults that are the same for every attribute in a process.

    - **Pydantic validation:** Type-checked when first loaded
    - **Environment-driven:** Reads ``TYPEREF_*`` env vars and .env files
    - **Extra ignore:** Unknown env vars don't cause startup failures

Examples:
    >>> import os
    >>> os.environ["TYPEREF_TYPE_NAME"] = "module_ref"
    >>> reset_settings()
    >>> get_settings().type_name
    'module_ref'

Tags:
    settings, configuration, pydantic, environment, typeref

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TypeRefSettings(BaseSettings):
    """Process-wide defaults for typeref.

    Fields
    ──────
    type_name        : Name the converter is registered under
    compat_mode      : Default for lower-cased underscored short aliases
    collision_policy : Alias tie-break (``last_wins`` or ``first_wins``)
    log_level        : Structlog log level
    """

    model_config = SettingsConfigDict(
        env_prefix="TYPEREF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Registration ─────────────────────────────────────────────
    type_name: str = Field(default="active_module", min_length=1)

    # ── Resolution ───────────────────────────────────────────────
    compat_mode: bool = False
    collision_policy: Literal["last_wins", "first_wins"] = "last_wins"

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"


_settings: TypeRefSettings | None = None


def get_settings() -> TypeRefSettings:
    """Return the cached settings instance, loading it on first use."""
    global _settings
    if _settings is None:
        _settings = TypeRefSettings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (for testing)."""
    global _settings
    _settings = None


__all__ = ["TypeRefSettings", "get_settings", "reset_settings"]

"""Process-wide table of named column-type factories.

The host application registers the converter once at startup under a
configurable name (default ``"active_module"``, see ``TypeRefSettings``)
and later builds column types by name, e.g. from declarative config.

Registration is idempotent: registering the same factory under the same
name again is a no-op; a different factory under a taken name is an error.

Tags:
    registry, type-registration, orm, typeref

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sqlalchemy.types import TypeEngine

from typeref.core.errors import InvalidConfigError
from typeref.core.logging import get_logger
from typeref.core.settings import get_settings
from typeref.orm.types import IdentifierType

logger = get_logger(__name__)

TypeFactory = Callable[..., TypeEngine]

# Global type registry
_registry: dict[str, TypeFactory] = {}


def register_type(name: str | None = None, factory: TypeFactory = IdentifierType) -> TypeFactory:
    """Register ``factory`` under ``name`` (settings ``type_name`` when None)."""
    if name is None:
        name = get_settings().type_name
    if not isinstance(name, str) or not name:
        raise InvalidConfigError("type_name", name)

    existing = _registry.get(name)
    if existing is factory:
        return factory
    if existing is not None:
        raise ValueError(f"Type '{name}' is already registered")

    _registry[name] = factory
    logger.info(
        "type_registered",
        name=name,
        factory=getattr(factory, "__name__", repr(factory)),
    )
    return factory


def get_type(name: str | None = None) -> TypeFactory:
    """Get a type factory by name."""
    if name is None:
        name = get_settings().type_name
    if name not in _registry:
        available = ", ".join(sorted(_registry))
        raise KeyError(f"Type '{name}' not found. Available: {available}")
    return _registry[name]


def build_type(name: str | None = None, *args: Any, **kwargs: Any) -> TypeEngine:
    """Instantiate the factory registered under ``name``."""
    if name is None:
        name = get_settings().type_name
    factory = get_type(name)
    if isinstance(factory, type) and issubclass(factory, IdentifierType):
        kwargs.setdefault("type_name", name)
    return factory(*args, **kwargs)


def list_types() -> list[str]:
    """List all registered type names."""
    return sorted(_registry)


def clear_registry() -> None:
    """Clear registry (for testing)."""
    _registry.clear()


__all__ = [
    "TypeFactory",
    "build_type",
    "clear_registry",
    "get_type",
    "list_types",
    "register_type",
]

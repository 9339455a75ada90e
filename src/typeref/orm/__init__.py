"""SQLAlchemy integration: the ``IdentifierType`` column type and the
process-wide named type table it is registered in."""

from typeref.orm.registry import (
    build_type,
    clear_registry,
    get_type,
    list_types,
    register_type,
)
from typeref.orm.types import IdentifierType

__all__ = [
    "IdentifierType",
    "build_type",
    "clear_registry",
    "get_type",
    "list_types",
    "register_type",
]

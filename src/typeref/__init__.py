"""
typeref - store references to a closed set of program entities as short
string tokens, and resolve them back from any unambiguous alias.

    >>> from typeref import Registry, Caster, Symbol
    >>> registry = Registry([StrategyA, Nested.MyClass.MoreNesting])
    >>> Caster(registry).cast(Symbol("MoreNesting"))
    Identifier(...::Nested::MyClass::MoreNesting)
"""

from __future__ import annotations

from typeref.core import *  # noqa: F401,F403
from typeref.core import __all__ as _core_all

__version__ = "0.1.0"


def register(name: str | None = None):
    """Register ``IdentifierType`` with the ORM type table (idempotent)."""
    from typeref.orm.registry import register_type

    return register_type(name)


__all__ = [*_core_all, "register", "__version__"]

"""
Flexible equality between an Identifier and a symbol, text or entity.

``matches`` is an explicit function rather than an ``__eq__`` override:
``Identifier == "MoreNesting"`` stays ``False`` for every other consumer of
the type. The alias test is local to one Identifier's own candidate set and
needs no Registry.

Examples:
    >>> ident = Identifier(("Nested", "MyClass", "MoreNesting"))
    >>> matches(ident, "MyClass::MoreNesting")
    True
    >>> matches(ident, Symbol("more_nesting"), compat_mode=True)
    True
    >>> matches(ident, "MyClass")
    False

Tags:
    comparison, equality, alias, typeref
"""

from __future__ import annotations

from typing import Any

from typeref.core.caster import InputShape, classify, token_of
from typeref.core.identifier import Identifier


def matches(identifier: Identifier, other: Any, *, compat_mode: bool = False) -> bool:
    """True iff ``other`` denotes ``identifier``.

    Entities and Identifiers compare by identity; symbols and text compare
    by membership in ``identifier``'s own alias set. Anything else is False.
    """
    match classify(other):
        case InputShape.IDENTIFIER:
            handle = other.handle if isinstance(other, Identifier) else other
            return identifier.handle is handle
        case InputShape.SYMBOL | InputShape.TEXT:
            return token_of(other) in identifier.aliases(compat_mode)
        case _:
            return False


class Comparator:
    """``matches`` bound to one compat mode."""

    def __init__(self, compat_mode: bool = False):
        self.compat_mode = compat_mode

    def compare(self, identifier: Identifier, other: Any) -> bool:
        return matches(identifier, other, compat_mode=self.compat_mode)

    __call__ = compare


__all__ = ["Comparator", "matches"]

"""
Cast arbitrary attribute input to a validated Identifier.

The caster accepts the four input shapes an attribute value can arrive in
and resolves each one against a Registry. Dispatch is a total match over
``InputShape``; ``classify`` is the only place that looks at Python types.

    ┌──────────────┬──────────────────────────────────────────────────────┐
    │ InputShape   │ cast(value)                                          │
    ├──────────────┼──────────────────────────────────────────────────────┤
    │ NONE         │ None (absence propagates, not an error)              │
    │ IDENTIFIER   │ allowed Identifier for that entity, else NOT_ALLOWED │
    │ SYMBOL       │ NameIndex lookup, else UNKNOWN_ALIAS                 │
    │ TEXT         │ NameIndex lookup, else UNKNOWN_ALIAS                 │
    │ UNSUPPORTED  │ UNSUPPORTED_INPUT                                    │
    └──────────────┴──────────────────────────────────────────────────────┘

Identifier-shaped inputs are ``Identifier`` instances and raw program
entities (classes, modules, functions). Symbols are ``Symbol`` strings;
any other ``str`` is free text.

Tags:
    caster, dispatch, resolution, typeref
"""

from __future__ import annotations

import inspect
from enum import Enum
from typing import TYPE_CHECKING, Any

from typeref.core.errors import ResolutionFailure
from typeref.core.identifier import Identifier

if TYPE_CHECKING:
    from typeref.core.registry import Registry


class InputShape(str, Enum):
    """The closed set of shapes a raw attribute value can take."""

    NONE = "none"
    IDENTIFIER = "identifier"
    SYMBOL = "symbol"
    TEXT = "text"
    UNSUPPORTED = "unsupported"


class Symbol(str):
    """A short symbolic handle such as ``Symbol("MoreNesting")``.

    Resolves exactly like text; the distinct type only records that the
    caller meant a name rather than arbitrary user input.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Symbol({str.__repr__(self)})"


def is_entity(value: Any) -> bool:
    """True for program entities an Identifier can stand for."""
    return (
        inspect.isclass(value)
        or inspect.ismodule(value)
        or inspect.isfunction(value)
        or inspect.isbuiltin(value)
        or inspect.ismethod(value)
    )


def classify(value: Any) -> InputShape:
    if value is None:
        return InputShape.NONE
    if isinstance(value, Identifier) or is_entity(value):
        return InputShape.IDENTIFIER
    if isinstance(value, Symbol):
        return InputShape.SYMBOL
    if isinstance(value, str):
        return InputShape.TEXT
    return InputShape.UNSUPPORTED


def token_of(value: str) -> str:
    """Plain token form of a symbol or text input."""
    return str.__str__(value)


class Caster:
    """Stateless resolution of raw input against one Registry."""

    def __init__(self, registry: Registry):
        self.registry = registry

    def cast(self, value: Any) -> Identifier | None:
        """Resolve ``value`` to an allowed Identifier.

        Returns ``None`` for ``None``. Raises ``UnresolvableIdentifierError``
        for everything that does not resolve to exactly one Identifier.
        """
        match classify(value):
            case InputShape.NONE:
                return None
            case InputShape.IDENTIFIER:
                identifier = self.registry.identifier_for_entity(value)
                if identifier is None:
                    raise self.registry.resolution_error(value, ResolutionFailure.NOT_ALLOWED)
                return identifier
            case InputShape.SYMBOL | InputShape.TEXT:
                identifier = self.registry.index.find(token_of(value))
                if identifier is None:
                    raise self.registry.resolution_error(value, ResolutionFailure.UNKNOWN_ALIAS)
                return identifier
            case _:
                raise self.registry.resolution_error(value, ResolutionFailure.UNSUPPORTED_INPUT)

    def cast_entity(self, value: Any) -> Any:
        """Like ``cast`` but returns the entity the Identifier stands for."""
        identifier = self.cast(value)
        return None if identifier is None else identifier.handle

    __call__ = cast


__all__ = ["Caster", "InputShape", "Symbol", "classify", "is_entity", "token_of"]

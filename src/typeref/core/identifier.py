"""
Identifier value type and alias generation.

An ``Identifier`` names one entity of the closed universe an attribute may
hold: an ordered path of name segments (outermost first) plus an opaque
handle to the program entity itself. Identity, equality and hashing go
through the handle only; the segments are used for naming and aliasing.

Alias generation:
    ::

        segments = ("Nested", "MyClass", "MoreNesting")

        "::Nested::MyClass::MoreNesting"    qualified form
        "Nested::MyClass::MoreNesting"      every trailing suffix ...
        "MyClass::MoreNesting"
        "MoreNesting"                       ... down to the bare last segment
        "more_nesting"                      enum symbol (compat mode only,
                                            listed first)

Segments are derived once, at construction, by a pure ``segments_of``
function supplied by the embedding application. Two stock functions are
provided: ``segments_of`` (module path + qualified name) and
``qualname_segments`` (qualified name only).

Tags:
    identifier, alias, naming, value-object, typeref

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import inspect
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

SEPARATOR = "::"
QUALIFIER = "::"

_ACRONYM_BOUNDARY = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_LOCALS = "<locals>"


# =============================================================================
# Segment derivation
# =============================================================================


def _split_path(*paths: str) -> tuple[str, ...]:
    parts: list[str] = []
    for path in paths:
        parts.extend(p for p in path.split(".") if p and p != _LOCALS)
    return tuple(parts)


def segments_of(entity: Any) -> tuple[str, ...]:
    """Full namespace path of a module, class or function.

    >>> segments_of(collections.OrderedDict)
    ('collections', 'OrderedDict')
    """
    if inspect.ismodule(entity):
        return _split_path(entity.__name__)
    qualname = getattr(entity, "__qualname__", None) or getattr(entity, "__name__", None)
    if not isinstance(qualname, str):
        raise TypeError(f"Cannot derive name segments from {entity!r}")
    return _split_path(getattr(entity, "__module__", None) or "", qualname)


def qualname_segments(entity: Any) -> tuple[str, ...]:
    """Namespace path inside the defining module only (no module prefix)."""
    if inspect.ismodule(entity):
        return _split_path(entity.__name__)
    qualname = getattr(entity, "__qualname__", None) or getattr(entity, "__name__", None)
    if not isinstance(qualname, str):
        raise TypeError(f"Cannot derive name segments from {entity!r}")
    return _split_path(qualname)


def underscore(word: str) -> str:
    """Lower-cased, underscore-separated form of a camel-cased word.

    >>> underscore("MoreNesting")
    'more_nesting'
    >>> underscore("HTTPServer")
    'http_server'
    """
    word = _ACRONYM_BOUNDARY.sub(r"\1_\2", word)
    word = _WORD_BOUNDARY.sub(r"\1_\2", word)
    return word.replace("-", "_").lower()


def candidate_aliases(segments: Iterable[str], *, compat_mode: bool = False) -> tuple[str, ...]:
    """Every alias a segment path answers to, in registration order."""
    parts = tuple(segments)
    aliases: list[str] = []
    if compat_mode:
        aliases.append(underscore(parts[-1]))
    aliases.append(QUALIFIER + SEPARATOR.join(parts))
    aliases.extend(SEPARATOR.join(parts[i:]) for i in range(len(parts)))
    return tuple(aliases)


# =============================================================================
# Identifier
# =============================================================================


@dataclass(frozen=True, eq=False)
class Identifier:
    """One allowed entity: its segment path plus a handle to the entity.

    ``entity`` may be omitted, in which case the Identifier is its own
    handle (useful when the closed set is purely nominal).
    """

    segments: tuple[str, ...]
    entity: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        segments = tuple(self.segments)
        if not segments:
            raise ValueError("Identifier segments cannot be empty")
        for segment in segments:
            if not isinstance(segment, str) or not segment:
                raise ValueError(f"Invalid identifier segment {segment!r} in {segments!r}")
            if SEPARATOR in segment:
                raise ValueError(f"Identifier segment {segment!r} contains {SEPARATOR!r}")
        object.__setattr__(self, "segments", segments)

    # ------------------- Constructors -------------------
    @classmethod
    def of(
        cls,
        entity: Any,
        segments_of: Callable[[Any], Iterable[str]] = segments_of,
    ) -> Identifier:
        """Wrap a program entity, deriving its segments once."""
        return cls(tuple(segments_of(entity)), entity)

    @classmethod
    def parse(cls, name: str, entity: Any = None) -> Identifier:
        """Build from a ``"A::B::C"`` (or ``"::A::B::C"``) name."""
        if name.startswith(QUALIFIER):
            name = name[len(QUALIFIER):]
        return cls(tuple(name.split(SEPARATOR)), entity)

    # ------------------- Identity -------------------
    @property
    def handle(self) -> Any:
        return self if self.entity is None else self.entity

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Identifier):
            return NotImplemented
        return self.handle is other.handle

    def __hash__(self) -> int:
        return id(self.handle)

    # ------------------- Names -------------------
    @property
    def name(self) -> str:
        """Qualified name without the leading marker (canonical text form)."""
        return SEPARATOR.join(self.segments)

    @property
    def qualified_name(self) -> str:
        return QUALIFIER + self.name

    @property
    def enum_symbol(self) -> str:
        return underscore(self.segments[-1])

    @cached_property
    def _aliases(self) -> tuple[str, ...]:
        return candidate_aliases(self.segments)

    @cached_property
    def _compat_aliases(self) -> tuple[str, ...]:
        return candidate_aliases(self.segments, compat_mode=True)

    def aliases(self, compat_mode: bool = False) -> tuple[str, ...]:
        """Candidate alias set of this Identifier (memoized)."""
        return self._compat_aliases if compat_mode else self._aliases

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Identifier({self.name})"


__all__ = [
    "Identifier",
    "QUALIFIER",
    "SEPARATOR",
    "candidate_aliases",
    "qualname_segments",
    "segments_of",
    "underscore",
]

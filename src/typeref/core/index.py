"""Alias → Identifier index built from an ordered Identifier list.

The index is built once, in registration order. When two Identifiers share
a candidate alias the collision policy decides the owner; the default,
``LAST_WINS``, lets callers resolve ambiguity by placing more specific
Identifiers later in the list.

Canonical names are never captured: after the collision pass every
Identifier's qualified name (with and without the leading ``::``) is bound
back to its own Identifier.

Tags:
    index, alias, lookup, typeref
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum
from types import MappingProxyType

from typeref.core.identifier import Identifier
from typeref.core.logging import get_logger

logger = get_logger(__name__)


class CollisionPolicy(str, Enum):
    """Tie-break when two Identifiers share a candidate alias."""

    LAST_WINS = "last_wins"
    FIRST_WINS = "first_wins"


class NameIndex:
    """Read-only mapping from alias token to its owning Identifier."""

    def __init__(
        self,
        identifiers: Iterable[Identifier],
        *,
        compat_mode: bool = False,
        policy: CollisionPolicy = CollisionPolicy.LAST_WINS,
    ):
        self._identifiers = tuple(identifiers)
        self.compat_mode = compat_mode
        self.policy = CollisionPolicy(policy)

        index: dict[str, Identifier] = {}
        for identifier in self._identifiers:
            for alias in identifier.aliases(compat_mode):
                if self.policy is CollisionPolicy.FIRST_WINS and alias in index:
                    continue
                index[alias] = identifier
        for identifier in self._identifiers:
            index[identifier.qualified_name] = identifier
            index[identifier.name] = identifier

        self._index = MappingProxyType(index)
        logger.debug(
            "name_index_built",
            identifiers=len(self._identifiers),
            aliases=len(index),
            compat_mode=compat_mode,
            policy=self.policy.value,
        )

    def find(self, alias: str) -> Identifier | None:
        """Exact, case-sensitive lookup; ``None`` when not found."""
        return self._index.get(alias)

    def keys(self) -> tuple[str, ...]:
        """All registered aliases, in first-insertion order."""
        return tuple(self._index)

    def aliases_for(self, identifier: Identifier) -> tuple[str, ...]:
        """Aliases that currently resolve to ``identifier``."""
        return tuple(alias for alias, owner in self._index.items() if owner == identifier)

    def __contains__(self, alias: object) -> bool:
        return alias in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"NameIndex({len(self._identifiers)} identifiers, {len(self._index)} aliases)"


__all__ = ["CollisionPolicy", "NameIndex"]

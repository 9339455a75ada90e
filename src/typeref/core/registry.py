"""
Per-attribute configuration: the closed set of allowed Identifiers.

A ``Registry`` is built once per attribute definition and never changes.
It owns the ordered allowed list (the order is the alias tie-break), the
effective storage-token mapping, and the compat-mode flag. Its NameIndex
is derived lazily and cached for the Registry's lifetime.

Manifesto:
    - **Immutable:** Everything derived from a Registry can be cached forever
    - **Fail fast on configuration:** Colliding storage tokens are rejected
      at construction, not on the first unlucky read
    - **Explicit closed set:** Nothing is discovered from the runtime

Architecture:
    ::

        allowed (ordered)  ─┬─► NameIndex        alias  → Identifier (lazy)
                            ├─► token map        Identifier → token
        storage_map ────────┘   inverse map      token → Identifier

Examples:
    >>> registry = Registry([StrategyA, StrategyB], {StrategyA: "s1"})
    >>> registry.storage_token_for(registry.identifier_for_entity(StrategyA))
    's1'
    >>> registry.identifier_for_token("StrategyB")
    Identifier(...StrategyB)

Concurrency:
    The token maps are built in ``__init__``; the NameIndex is published
    once under a lock, so a Registry may be shared across threads.

Tags:
    registry, configuration, storage-mapping, typeref

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any

from typeref.core.errors import (
    InvalidConfigError,
    ResolutionFailure,
    UnresolvableIdentifierError,
)
from typeref.core.identifier import Identifier, segments_of
from typeref.core.index import CollisionPolicy, NameIndex
from typeref.core.logging import get_logger

logger = get_logger(__name__)

_INDEX_LOCK = threading.Lock()


class Registry:
    """Immutable allowed-set + storage mapping + compat flag for one attribute."""

    def __init__(
        self,
        allowed: Iterable[Any] = (),
        storage_map: Mapping[Any, str] | None = None,
        *,
        compat_mode: bool = False,
        collision_policy: CollisionPolicy | str = CollisionPolicy.LAST_WINS,
        segments_of: Callable[[Any], Iterable[str]] = segments_of,
    ):
        self._segments_of = segments_of
        self._index: NameIndex | None = None
        self.compat_mode = bool(compat_mode)
        self.collision_policy = CollisionPolicy(collision_policy)

        identifiers: dict[Identifier, None] = {}
        for value in allowed:
            identifiers.setdefault(self._wrap(value, identifiers, "allowed"), None)

        overrides: dict[Identifier, str] = {}
        for key, token in (storage_map or {}).items():
            identifier = self._wrap(key, identifiers, "storage_map")
            if not isinstance(token, str):
                raise InvalidConfigError(f"storage_map[{identifier.name}]", token)
            identifiers.setdefault(identifier, None)
            overrides[identifier] = token

        self._identifiers = tuple(identifiers)
        self._by_handle = {id(i.handle): i for i in self._identifiers}

        tokens: dict[Identifier, str] = {}
        from_token: dict[str, Identifier] = {}
        for identifier in self._identifiers:
            token = overrides.get(identifier, identifier.name)
            if token in from_token:
                raise UnresolvableIdentifierError(
                    token,
                    allowed=self._identifiers,
                    aliases=self.index.keys(),
                    reason=ResolutionFailure.MAPPING_CONFLICT,
                    message=(
                        f"Storage token {token!r} is used by both "
                        f"{from_token[token].name!r} and {identifier.name!r}"
                    ),
                )
            tokens[identifier] = token
            from_token[token] = identifier

        self._tokens = MappingProxyType(tokens)
        self._from_token = MappingProxyType(from_token)

        logger.debug(
            "registry_created",
            identifiers=len(self._identifiers),
            overrides=len(overrides),
            compat_mode=self.compat_mode,
        )

    # ------------------- Constructors -------------------
    @classmethod
    def build(
        cls,
        modules_or_mapping: Iterable[Any] | Mapping[Any, str] = (),
        *,
        possible: Iterable[Any] = (),
        mapping: Mapping[Any, str] | None = None,
        **kwargs: Any,
    ) -> Registry:
        """Flexible constructor.

        The first argument is either the allowed sequence or a mapping of
        entity → storage token. ``possible`` and ``mapping`` are merged in,
        later sources winning for tokens; mapping keys join the allowed set.
        """
        mapping = dict(mapping or {})
        if isinstance(modules_or_mapping, Mapping):
            mapping = {**modules_or_mapping, **mapping}
        allowed = [*modules_or_mapping, *possible, *mapping]
        return cls(allowed, mapping, **kwargs)

    def _wrap(self, value: Any, known: Mapping[Identifier, Any], key: str) -> Identifier:
        if isinstance(value, Identifier):
            return value
        for identifier in known:
            if identifier.handle is value:
                return identifier
        try:
            return Identifier.of(value, self._segments_of)
        except (TypeError, ValueError) as exc:
            raise InvalidConfigError(key, value) from exc

    # ------------------- Derived structures -------------------
    @property
    def identifiers(self) -> tuple[Identifier, ...]:
        """Allowed Identifiers, in registration order."""
        return self._identifiers

    @property
    def index(self) -> NameIndex:
        """The alias index (built on first use, then cached)."""
        index = self._index
        if index is None:
            with _INDEX_LOCK:
                index = self._index
                if index is None:
                    index = NameIndex(
                        self._identifiers,
                        compat_mode=self.compat_mode,
                        policy=self.collision_policy,
                    )
                    self._index = index
        return index

    @property
    def token_map(self) -> Mapping[Identifier, str]:
        """Effective Identifier → storage token mapping (defaults merged)."""
        return self._tokens

    # ------------------- Lookups -------------------
    def storage_token_for(self, identifier: Identifier) -> str:
        """Explicit override if present, else the Identifier's qualified name."""
        return self._tokens.get(identifier, identifier.name)

    def identifier_for_token(self, token: str | None) -> Identifier | None:
        if token is None:
            return None
        return self._from_token.get(token)

    def identifier_for_entity(self, entity: Any) -> Identifier | None:
        """Allowed Identifier whose handle *is* ``entity``."""
        handle = entity.handle if isinstance(entity, Identifier) else entity
        return self._by_handle.get(id(handle))

    def is_allowed(self, value: Any) -> bool:
        return self.identifier_for_entity(value) is not None

    def serializable(self, value: Any) -> bool:
        """True iff ``value`` is an allowed entity or Identifier."""
        return self.is_allowed(value)

    def resolution_error(
        self,
        value: Any,
        reason: ResolutionFailure = ResolutionFailure.UNKNOWN_ALIAS,
    ) -> UnresolvableIdentifierError:
        """Build the self-documenting error for an unresolvable ``value``."""
        logger.debug("identifier_unresolved", value=repr(value), reason=reason.value)
        return UnresolvableIdentifierError(
            value,
            allowed=self._identifiers,
            aliases=self.index.keys(),
            reason=reason,
        )

    def matches(self, value: Any, other: Any) -> bool:
        """Cast ``value`` through this registry, then compare it with ``other``."""
        from typeref.core.caster import Caster
        from typeref.core.comparison import matches

        identifier = Caster(self).cast(value)
        if identifier is None:
            return False
        return matches(identifier, other, compat_mode=self.compat_mode)

    # ------------------- Equality -------------------
    def _key(self) -> tuple[Any, ...]:
        return (
            self._identifiers,
            tuple(i.segments for i in self._identifiers),
            tuple(self._tokens.items()),
            self.compat_mode,
            self.collision_policy,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Registry):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        names = ", ".join(i.name for i in self._identifiers)
        return f"Registry([{names}], compat_mode={self.compat_mode})"


__all__ = ["Registry"]

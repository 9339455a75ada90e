"""Identifier ↔ storage token conversion.

``serialize`` accepts any input shape ``Caster.cast`` accepts and fails the
same way. ``deserialize`` never fails: a token that no longer maps to a
configured Identifier (legacy rows, removed entities) reads as ``None``.
"""

from __future__ import annotations

from typing import Any

from typeref.core.caster import Caster
from typeref.core.identifier import Identifier
from typeref.core.logging import get_logger
from typeref.core.registry import Registry

logger = get_logger(__name__)


class Codec:
    """Storage codec for one Registry."""

    def __init__(self, registry: Registry):
        self.registry = registry
        self.caster = Caster(registry)

    def serialize(self, value: Any) -> str | None:
        identifier = self.caster.cast(value)
        if identifier is None:
            return None
        return self.registry.storage_token_for(identifier)

    def deserialize(self, token: str | None) -> Identifier | None:
        if token is None:
            return None
        identifier = self.registry.identifier_for_token(token)
        if identifier is None:
            logger.debug("storage_token_unknown", token=token)
        return identifier

    def load(self, token: str | None) -> Any:
        """Deserialize and unwrap to the entity the Identifier stands for."""
        identifier = self.deserialize(token)
        return None if identifier is None else identifier.handle


__all__ = ["Codec"]

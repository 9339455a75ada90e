"""SQLAlchemy column type storing one Identifier as a short string token.

``IdentifierType`` is the boundary between the host ORM and the resolution
engine: writes and query parameters go through ``Codec.serialize`` (so any
alias, symbol, Identifier or entity is accepted), reads go through
``Codec.load`` (entity or ``None``, never an error).

Examples:
    >>> class Job(Base):
    ...     __tablename__ = "jobs"
    ...     id: Mapped[int] = mapped_column(primary_key=True)
    ...     strategy: Mapped[Any] = mapped_column(
    ...         IdentifierType([StrategyA, StrategyB], {StrategyA: "s1"})
    ...     )
    >>> session.scalars(select(Job).where(Job.strategy == "StrategyA"))

Tags:
    orm, sqlalchemy, type-decorator, typeref

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from sqlalchemy import String
from sqlalchemy.engine import Dialect
from sqlalchemy.sql import operators
from sqlalchemy.types import TypeDecorator, TypeEngine

from typeref.core.codec import Codec
from typeref.core.errors import TypeRefError
from typeref.core.identifier import segments_of as default_segments_of
from typeref.core.index import CollisionPolicy
from typeref.core.registry import Registry
from typeref.core.settings import get_settings

# Operators whose operand is an alias of the stored entity; any other
# operator (like, contains, ...) compares against the raw storage token.
_ALIAS_OPERATORS = frozenset({operators.eq, operators.ne, operators.in_op, operators.not_in_op})


class IdentifierType(TypeDecorator):
    """Column type whose Python value is one entity of a closed set.

    Parameters
    ----------
    allowed:
        Ordered allowed entities or Identifiers (order is the alias tie-break).
    storage_map:
        Explicit entity → token overrides; other entities store their name.
    compat_mode, collision_policy:
        Default to the process settings when not given.
    registry:
        A prebuilt ``Registry``; the other configuration arguments are ignored.
    length:
        Forwarded to ``String``.
    type_name:
        Name attached to resolution errors; settings ``type_name`` when None.
    """

    impl = String
    cache_ok = True

    class comparator_factory(TypeDecorator.Comparator, String.Comparator):
        def matches(self, other: Any) -> Any:
            """Equality predicate that accepts any alias of the stored entity."""
            return self.operate(operators.eq, other)

    def __init__(
        self,
        allowed: Iterable[Any] = (),
        storage_map: Mapping[Any, str] | None = None,
        registry: Registry | None = None,
        *,
        compat_mode: bool | None = None,
        collision_policy: CollisionPolicy | str | None = None,
        segments_of: Callable[[Any], Iterable[str]] = default_segments_of,
        length: int | None = None,
        type_name: str | None = None,
    ):
        settings = get_settings()
        if registry is None:
            registry = Registry(
                allowed,
                storage_map,
                compat_mode=settings.compat_mode if compat_mode is None else compat_mode,
                collision_policy=collision_policy or settings.collision_policy,
                segments_of=segments_of,
            )
        super().__init__(length)
        self.registry = registry
        self.type_name = type_name or settings.type_name
        self._codec = Codec(registry)

    def _serialize(self, value: Any) -> str | None:
        try:
            return self._codec.serialize(value)
        except TypeRefError as exc:
            raise exc.with_context(type_name=self.type_name)

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        return self._serialize(value)

    def process_literal_param(self, value: Any, dialect: Dialect) -> str | None:
        return self._serialize(value)

    def process_result_value(self, value: Any, dialect: Dialect) -> Any:
        return self._codec.load(value)

    def coerce_compared_value(self, op: Any, value: Any) -> TypeEngine:
        if op in _ALIAS_OPERATORS:
            return self
        return String()

    @property
    def python_type(self) -> type:
        return object

    def __repr__(self) -> str:
        return f"IdentifierType({self.registry!r})"


__all__ = ["IdentifierType"]

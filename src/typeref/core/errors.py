"""
Structured error types for typeref.

Every failure raised by the resolution engine derives from ``TypeRefError``
and carries a category, a structured context and an optional chained cause,
so the host framework can log or surface it without string parsing.

Manifesto:
    - **One resolution error kind:** ``UnresolvableIdentifierError`` covers
      every way an input can fail to resolve
    - **Self-documenting:** The error lists what *would* have been accepted
    - **No silent coercion:** An input resolves to exactly one Identifier
      or the operation fails

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                      TypeRefError                            │
        │              (category, context, cause)                      │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  UnresolvableIdentifierError       InvalidConfigError        │
        │  (VALIDATION / CONFIG)             (CONFIG)                  │
        │   value, allowed, aliases,          key, value               │
        │   reason                                                     │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> try:
    ...     caster.cast("RandomModule")
    ... except UnresolvableIdentifierError as e:
    ...     e.reason
    <ResolutionFailure.UNKNOWN_ALIAS: 'unknown_alias'>

Tags:
    error-handling, exception-hierarchy, error-context, typeref

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Error categories for classification and routing.

    Resolution failures are VALIDATION errors (bad caller input); mapping
    conflicts and bad settings are CONFIG errors (bad attribute definition).
    Neither is ever retryable: resolution is a pure function of immutable
    configuration.
    """

    VALIDATION = "VALIDATION"     # Input outside the closed set
    CONFIG = "CONFIG"             # Invalid attribute/settings definition

    INTERNAL = "INTERNAL"         # Bugs, unexpected state
    UNKNOWN = "UNKNOWN"           # Uncategorized errors


class ResolutionFailure(str, Enum):
    """Why an input could not be resolved to an Identifier."""

    NOT_ALLOWED = "not_allowed"              # identifier-shaped, not in allowed
    UNKNOWN_ALIAS = "unknown_alias"          # symbol/text not in the index
    UNSUPPORTED_INPUT = "unsupported_input"  # unsupported input shape
    MAPPING_CONFLICT = "mapping_conflict"    # storage tokens not distinct


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        type_name: Registered converter name (e.g. ``"active_module"``)
        metadata: Additional key-value pairs
    """

    type_name: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        if self.type_name is not None:
            result["type_name"] = self.type_name
        if self.metadata:
            result.update(self.metadata)
        return result


class TypeRefError(Exception):
    """
    Base exception for all typeref errors.

    Subclasses set ``default_category``; callers may override it per
    instance. ``with_context`` adds metadata fluently and ``to_dict``
    serializes for structured logging.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> TypeRefError:
        """
        Add context to this error (fluent API).

        Usage:
            raise err.with_context(type_name="active_module")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# RESOLUTION ERRORS
# =============================================================================


def _format_message(value: Any, allowed: tuple[Any, ...], aliases: tuple[str, ...]) -> str:
    allowed_names = [getattr(identifier, "name", repr(identifier)) for identifier in allowed]
    return (
        f"Invalid identifier value {value!r}:\n"
        f" It must be one of these identifiers:\n"
        f"  {allowed_names!r}\n"
        f"\n"
        f" Or one of their aliases:\n"
        f"  {list(aliases)!r}\n"
    )


class UnresolvableIdentifierError(TypeRefError, ValueError):
    """
    An input could not be resolved to exactly one allowed Identifier.

    Raised by ``Caster.cast``, ``Codec.serialize`` and ``Registry``
    construction (when storage tokens collide). The error always carries
    the rejected value, the full ordered allowed list, and the live alias
    list of the registry's NameIndex.
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        value: Any,
        *,
        allowed: Iterable[Any] = (),
        aliases: Iterable[str] = (),
        reason: ResolutionFailure = ResolutionFailure.UNKNOWN_ALIAS,
        message: str | None = None,
        **kwargs: Any,
    ):
        self.value = value
        self.allowed = tuple(allowed)
        self.aliases = tuple(aliases)
        self.reason = reason
        if reason is ResolutionFailure.MAPPING_CONFLICT:
            kwargs.setdefault("category", ErrorCategory.CONFIG)
        super().__init__(
            message or _format_message(value, self.allowed, self.aliases),
            **kwargs,
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["value"] = repr(self.value)
        result["reason"] = self.reason.value
        result["allowed"] = [getattr(i, "name", repr(i)) for i in self.allowed]
        result["aliases"] = list(self.aliases)
        return result


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class InvalidConfigError(TypeRefError, ValueError):
    """Configuration value is invalid."""

    default_category = ErrorCategory.CONFIG

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "InvalidConfigError",
    "ResolutionFailure",
    "TypeRefError",
    "UnresolvableIdentifierError",
]

"""
Structured error types for potkit.

A ``Pot`` deals with two kinds of failure. Programmer errors, such as asking
an empty pot for its value, are raised immediately. Domain failures, such as a
fetch that timed out, are never raised by the pot: they are stored opaquely
inside ``Failed``/``FailedStale`` and handed back through
``exception_option()``. This module supplies typed errors for both, so the
collaborator deciding whether to retry has something better than a bare
``Exception`` to look at.

Every ``PotError`` carries:
- **Category:** What kind of error (network, source, internal, ...)
- **Retryable:** Whether the failed load is worth retrying
- **Retry-after:** Optional hint, in seconds, before the next attempt
- **Context:** Free-form metadata for logging
- **Cause:** Chained underlying exception

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                         PotError                             │
        │     (category, retryable, retry_after, context, cause)      │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  EmptyValueError       RetriesExhaustedError                 │
        │  (INTERNAL, LookupError)  (INTERNAL, RuntimeError)           │
        │                                                              │
        │  TransientError        SourceError                           │
        │  (retryable=True)      (SOURCE)                              │
        │       │                                                      │
        │  NetworkError                                                │
        │  LoadTimeoutError                                            │
        │  RateLimitError                                              │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> error = NetworkError("Connection reset")
    >>> error.retryable
    True
    >>> error.category
    <ErrorCategory.NETWORK: 'NETWORK'>

    >>> RetriesExhaustedError().message
    'No more retries left'

Guardrails:
    ❌ DON'T: Raise TransientError from inside a Pot combinator
    ✅ DO: Store it with ``pot.fail(error)`` and let the collaborator decide

Tags:
    errors, error-hierarchy, retry-logic, potkit

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Coarse error categories for routing and retry decisions.

    Attributes:
        NETWORK: Connection, timeout, rate limiting
        SOURCE: Upstream returned something unusable
        INTERNAL: Misuse of the pot API, exhausted retries
        UNKNOWN: Anything else
    """

    NETWORK = "NETWORK"
    SOURCE = "SOURCE"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


class PotError(Exception):
    """
    Base exception for all potkit errors.

    Subclasses set ``default_category`` and ``default_retryable`` so that
    callers rarely need to pass them explicitly.

    Examples:
        >>> error = PotError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.retryable
        False

        >>> error = PotError("Fetch failed").with_context(resource="users")
        >>> error.context
        {'resource': 'users'}

        >>> d = PotError("boom", category=ErrorCategory.SOURCE).to_dict()
        >>> d["category"]
        'SOURCE'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        retry_after: int | None = None,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.retry_after = retry_after
        self.context = dict(context) if context else {}
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> PotError:
        """Add context to this error (fluent API)."""
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        if self.retry_after is not None:
            result["retry_after"] = self.retry_after
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PotError):
            return NotImplemented
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((type(self), self.message, self.category))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# API MISUSE
# =============================================================================


class EmptyValueError(PotError, LookupError):
    """Raised by ``get()`` on a pot that carries no value."""

    def __init__(self, message: str = "Pot is empty", **kwargs: Any):
        super().__init__(message, **kwargs)


class RetriesExhaustedError(PotError, RuntimeError):
    """
    Synthesized by ``retry()`` when no retries are left.

    Replaces whatever error the pot held before, so a collaborator that sees
    it knows automatic retrying must stop.
    """

    def __init__(self, message: str = "No more retries left", **kwargs: Any):
        super().__init__(message, **kwargs)


# =============================================================================
# LOAD FAILURES
# =============================================================================


class TransientError(PotError):
    """
    Temporary load failure that may succeed on retry.

    Use for timeouts, dropped connections and throttling. Do NOT use for
    permanent failures like a 404; use SourceError for those.
    """

    default_category = ErrorCategory.NETWORK
    default_retryable = True


class NetworkError(TransientError):
    """Network-related transient error."""


class LoadTimeoutError(TransientError):
    """Load did not complete in time."""


class RateLimitError(TransientError):
    """Rate limit exceeded."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        retry_after: int = 60,
        **kwargs: Any,
    ):
        super().__init__(message, retry_after=retry_after, **kwargs)


class SourceError(PotError):
    """
    The upstream answered, but not with something usable.

    Default not retryable (e.g. 404, malformed payload).
    """

    default_category = ErrorCategory.SOURCE
    default_retryable = False


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def error_to_dict(error: BaseException) -> dict[str, Any]:
    """Serialize any exception the way PotError.to_dict() does."""
    if isinstance(error, PotError):
        return error.to_dict()
    return {
        "error_type": type(error).__name__,
        "message": str(error),
    }


def is_retryable(error: BaseException) -> bool:
    """Check if an error is worth retrying."""
    if isinstance(error, PotError):
        return error.retryable
    return isinstance(error, OSError)


def get_retry_after(error: BaseException) -> int | None:
    """Get retry delay from error, if specified."""
    if isinstance(error, PotError):
        return error.retry_after
    return None


def categorize_error(error: BaseException) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, PotError):
        return error.category
    if isinstance(error, OSError):
        return ErrorCategory.NETWORK
    if isinstance(error, LookupError):
        return ErrorCategory.INTERNAL
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "PotError",
    "EmptyValueError",
    "RetriesExhaustedError",
    "TransientError",
    "NetworkError",
    "LoadTimeoutError",
    "RateLimitError",
    "SourceError",
    "error_to_dict",
    "is_retryable",
    "get_retry_after",
    "categorize_error",
]

"""
Load events and the pure reducer that applies them to a pot.

A state container that holds a ``Pot`` needs to react to four things: a fetch
started, it succeeded, it failed, or the user (or a scheduler) asked to try
again. ``apply_event`` maps each event to the matching ``Pot`` transition and
logs what happened. It does not fetch, schedule, or store anything; the caller
owns the state field and swaps in the returned pot.

Architecture:
    ::

        ┌──────────────────┬──────────────────────────────────────────┐
        │ Event            │ Transition                                │
        ├──────────────────┼──────────────────────────────────────────┤
        │ FetchStarted(n)  │ pot.pending(n or settings.default_retries)│
        │ FetchSucceeded(v)│ Ready(v)                                  │
        │ FetchFailed(e)   │ pot.fail(e)                               │
        │ RetryRequested() │ pot.retry()                               │
        └──────────────────┴──────────────────────────────────────────┘

Examples:
    Each call also emits a ``pot_transition`` debug line::

        pot = apply_event(Empty(), FetchStarted(retries=2))
        pot.state                     # PotState.PENDING
        pot = apply_event(pot, FetchSucceeded({"id": 1}))
        pot.get()                     # {"id": 1}

    Retry loop driven by a collaborator::

        pot = apply_event(pot, RetryRequested())
        if should_refetch(pot):
            schedule_fetch()

Tags:
    lifecycle, reducer, retry, potkit
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from potkit.core.errors import (
    RetriesExhaustedError,
    categorize_error,
    get_retry_after,
    is_retryable,
)
from potkit.core.logging import get_logger
from potkit.core.pot import Pot, Ready
from potkit.core.settings import PotSettings, get_settings


logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class FetchStarted:
    retries: int | None = None


@dataclass(frozen=True, slots=True)
class FetchSucceeded:
    value: Any


@dataclass(frozen=True, slots=True)
class FetchFailed:
    error: BaseException


@dataclass(frozen=True, slots=True)
class RetryRequested:
    pass


LoadEvent = FetchStarted | FetchSucceeded | FetchFailed | RetryRequested


def apply_event(
    pot: Pot[Any],
    event: LoadEvent,
    *,
    settings: PotSettings | None = None,
) -> Pot[Any]:
    """
    Return the pot that follows ``pot`` after ``event``.

    Args:
        pot: Current value held by the caller
        event: What just happened
        settings: Source of ``default_retries`` (defaults to ``get_settings()``)

    Raises:
        TypeError: ``event`` is not one of the four load events
    """
    match event:
        case FetchStarted(retries=retries):
            if retries is None:
                retries = (settings or get_settings()).default_retries
            result = pot.pending(retries)
        case FetchSucceeded(value=value):
            result = Ready(value)
        case FetchFailed(error=error):
            result = pot.fail(error)
            logger.info(
                "pot_fetch_failed",
                error_type=type(error).__name__,
                category=categorize_error(error).value,
                retryable=is_retryable(error),
                retry_after=get_retry_after(error),
            )
        case RetryRequested():
            result = pot.retry()
            if _newly_exhausted(pot, result):
                logger.warning(
                    "pot_retries_exhausted",
                    from_state=pot.state.value,
                    stale=result.is_stale,
                )
        case _:
            raise TypeError(f"unknown load event: {type(event).__name__}")

    logger.debug(
        "pot_transition",
        load_event=type(event).__name__,
        from_state=pot.state.value,
        to_state=result.state.value,
        stale=result.is_stale,
        retries_left=result.retries_left,
    )
    return result


def _newly_exhausted(before: Pot[Any], after: Pot[Any]) -> bool:
    """True the first time a retry runs out; repeated retries stay quiet."""
    return isinstance(after.exception_option(), RetriesExhaustedError) and not isinstance(
        before.exception_option(), RetriesExhaustedError
    )


def should_refetch(pot: Pot[Any]) -> bool:
    """True when ``pot`` is pending, i.e. a fetch must be (re)issued."""
    return pot.is_pending


__all__ = [
    "FetchStarted",
    "FetchSucceeded",
    "FetchFailed",
    "RetryRequested",
    "LoadEvent",
    "apply_event",
    "should_refetch",
]

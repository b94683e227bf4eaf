"""
Potential values: the lifecycle of an asynchronously loaded value.

A ``Pot[T]`` says where a remote value currently stands, so that application
state never needs ``is_loading``/``error``/``data`` flags that can drift out of
sync. It is a closed set of six immutable variants:

    ┌──────────────┬─────────┬──────────┬────────────┬──────────┬──────────┐
    │ Variant      │ value?  │ is_empty │ is_pending │ is_stale │ is_failed│
    ├──────────────┼─────────┼──────────┼────────────┼──────────┼──────────┤
    │ Empty        │ no      │ True     │ False      │ False    │ False    │
    │ Ready        │ yes     │ False    │ False      │ False    │ False    │
    │ Pending      │ no      │ True     │ True       │ False    │ False    │
    │ PendingStale │ yes     │ False    │ True       │ True     │ False    │
    │ Failed       │ no      │ True     │ False      │ False    │ True     │
    │ FailedStale  │ yes     │ False    │ False      │ True     │ True     │
    └──────────────┴─────────┴──────────┴────────────┴──────────┴──────────┘

Stale variants keep the last good value around while a reload is in flight
or after it failed, so a view can keep showing it.

Lifecycle:
    ::

        Empty ──pending(n)──► Pending(n) ──fail(e)──► Failed(e, 0)
                                   ▲                      │
                                   └──────retry()─────────┘  (if retries left)

        Ready(x) ──pending(n)──► PendingStale(x, n) ──fail(e)──► FailedStale(x, e, 0)

    A successful load is not a transition: the collaborator simply builds
    ``Ready(value)``. ``retry()`` at zero retries produces
    ``Failed``/``FailedStale`` holding ``RetriesExhaustedError``.

Features:
    - **Transitions:** pending(), fail(), retry(); all total, never raise
    - **Queries:** is_empty, is_pending, is_stale, is_failed, is_ready,
      can_retry, retries_left, state, duration()
    - **Combinators:** map, flat_map, flatten, fold, filter, collect,
      or_else, recover_with, ...
    - **Conversions:** to_option, to_try, to_list, to_left, to_right,
      iterator, to_dict
    - **Pattern matching:** every variant is a dataclass with __match_args__

Examples:
    >>> from potkit.core.pot import Empty, Ready, Pending
    >>> p = Empty().pending(3, start_time=0)
    >>> p
    Pending(retries_left=3, start_time=0)
    >>> p.retry()
    Pending(retries_left=2, start_time=0)
    >>> Ready(21).map(lambda x: x * 2)
    Ready(value=42)
    >>> Pending(start_time=0).get_or_else(lambda: "loading")
    'loading'

    Rendering by pattern:

    >>> def render(pot):
    ...     match pot:
    ...         case Ready(value) | PendingStale(value) | FailedStale(value):
    ...             return f"showing {value}"
    ...         case Pending():
    ...             return "spinner"
    ...         case Failed(exception):
    ...             return f"error: {exception}"
    ...         case _:
    ...             return "nothing yet"

Guardrails:
    ❌ DON'T: Call get() without checking non_empty
    ✅ DO: Use get_or_else(), fold() or to_option()

    ❌ DON'T: Compare Pending values built at different times
    ✅ DO: Pass start_time explicitly, or freeze the clock in tests

    ❌ DON'T: Subclass Pot; the variant set is closed
    ✅ DO: Pattern match on the six variants

Tags:
    pot, async-state, remote-data, loading-state, functional-programming,
    monadic, potkit

Doc-Types:
    - API Reference
    - State Modelling Guide
"""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Generic, Iterator, TypeVar

from potkit.core import timestamps
from potkit.core.either import Either, Left, Right
from potkit.core.errors import EmptyValueError, RetriesExhaustedError, error_to_dict
from potkit.core.partial import PartialFunction, as_partial
from potkit.core.result import Err, Ok, Result


T = TypeVar("T")
U = TypeVar("U")
X = TypeVar("X")


class PotState(str, Enum):
    """Coarse state tag; stale variants report PENDING or FAILED."""

    EMPTY = "EMPTY"
    READY = "READY"
    PENDING = "PENDING"
    FAILED = "FAILED"


def _now() -> int:
    return timestamps.now_ms()


class Pot(ABC, Generic[T]):
    """
    Base of the six Pot variants.

    All combinators are defined here in terms of ``is_empty`` and ``get()``;
    the variants only say which state they are in and how they transition.
    Subclassing outside this module raises ``TypeError``, and the base itself
    cannot be instantiated.
    """

    __slots__ = ()

    is_empty: ClassVar[bool]
    is_pending: ClassVar[bool]
    is_stale: ClassVar[bool]
    is_failed: ClassVar[bool]
    state: ClassVar[PotState]
    retries_left: int

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__:
            raise TypeError(f"Pot is a closed type; cannot subclass it as {cls.__qualname__}")

    @staticmethod
    def empty() -> Pot[Any]:
        return Empty()

    # -- queries ------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        """True only for Ready."""
        return not self.is_empty and not self.is_stale

    @property
    def non_empty(self) -> bool:
        return not self.is_empty

    @property
    def can_retry(self) -> bool:
        return self.retries_left > 0

    @abstractmethod
    def get(self) -> T:
        """The value; raises ``EmptyValueError`` when there is none."""
        ...

    # -- transitions --------------------------------------------------------

    @abstractmethod
    def pending(self, retries: int | None = None, *, start_time: int | None = None) -> Pot[T]:
        """
        Move toward a pending state.

        ``retries`` defaults to the current ``retries_left``. ``start_time`` is
        used only when a new loading period begins; pending pots keep theirs.
        """
        ...

    @abstractmethod
    def fail(self, exception: BaseException) -> Pot[T]:
        """Move to the failed counterpart; retries reset to 0."""
        ...

    def retry(self) -> Pot[T]:
        """Identity for Empty and Ready."""
        return self

    # -- combinators --------------------------------------------------------

    def get_or_else(self, default: Callable[[], U]) -> T | U:
        """The carried value, else ``default()``."""
        if self.is_empty:
            return default()
        return self.get()

    def map(self, f: Callable[[T], U]) -> Pot[U]:
        """
        ``Ready(f(value))`` if a value is carried, else ``Empty()``.

        Pending/failed/stale metadata is dropped: the result describes a
        successful transform of what is available now.
        """
        if self.is_empty:
            return Empty()
        return Ready(f(self.get()))

    def flat_map(self, f: Callable[[T], Pot[U]]) -> Pot[U]:
        if self.is_empty:
            return Empty()
        return f(self.get())

    def flatten(self) -> Pot[Any]:
        """Unwrap a pot carrying a pot."""
        if self.is_empty:
            return Empty()
        inner = self.get()
        if not isinstance(inner, Pot):
            raise TypeError(f"flatten() needs a Pot value, got {type(inner).__name__}")
        return inner

    def fold(self, if_empty: Callable[[], U], f: Callable[[T], U]) -> U:
        if self.is_empty:
            return if_empty()
        return f(self.get())

    def filter(self, p: Callable[[T], bool]) -> Pot[T]:
        if self.is_empty or p(self.get()):
            return self
        return Empty()

    def filter_not(self, p: Callable[[T], bool]) -> Pot[T]:
        if self.is_empty or not p(self.get()):
            return self
        return Empty()

    def with_filter(self, p: Callable[[T], bool]) -> WithFilter[T]:
        """Lazy filter view; see ``WithFilter``."""
        return WithFilter(self, p)

    def contains(self, elem: Any) -> bool:
        return not self.is_empty and self.get() == elem

    def exists(self, p: Callable[[T], bool]) -> bool:
        return not self.is_empty and p(self.get())

    def forall(self, p: Callable[[T], bool]) -> bool:
        return self.is_empty or p(self.get())

    def foreach(self, f: Callable[[T], Any]) -> None:
        if not self.is_empty:
            f(self.get())

    def collect(self, pf: PartialFunction[T, U] | Callable[[T], U]) -> Pot[U]:
        """``Ready(pf(value))`` where ``pf`` is defined at the value, else ``Empty()``."""
        if self.is_empty:
            return Empty()
        pf = as_partial(pf)
        value = self.get()
        if pf.is_defined_at(value):
            return Ready(pf(value))
        return Empty()

    def or_else(self, alternative: Callable[[], Pot[U]]) -> Pot[T] | Pot[U]:
        if self.is_empty:
            return alternative()
        return self

    def recover(self, pf: PartialFunction[BaseException, Any] | Callable[[BaseException], Any]) -> Pot[T]:
        """
        Always returns ``self``.

        Failed variants do not apply ``pf`` either. Use ``recover_with`` and
        return ``Ready(...)`` from the handler to replace a failure.
        """
        return self

    def recover_with(
        self, pf: PartialFunction[BaseException, Pot[U]] | Callable[[BaseException], Pot[U]]
    ) -> Pot[T] | Pot[U]:
        """Identity unless failed; see Failed/FailedStale."""
        return self

    def exception_option(self) -> BaseException | None:
        return None

    # -- conversions --------------------------------------------------------

    def iterator(self) -> Iterator[T]:
        """A fresh iterator over zero or one values."""
        if not self.is_empty:
            yield self.get()

    def to_option(self) -> T | None:
        if self.is_empty:
            return None
        return self.get()

    def to_try(self) -> Result[T]:
        """
        ``Ok(value)`` if a value is carried.

        A FailedStale gives ``Err(exception)``; every valueless variant,
        Failed included, gives ``Err(EmptyValueError())``.
        """
        if self.is_empty:
            return Err(EmptyValueError())
        match self:
            case FailedStale(exception=exc):
                return Err(exc)
            case _:
                return Ok(self.get())

    def to_list(self) -> list[T]:
        if self.is_empty:
            return []
        return [self.get()]

    def to_right(self, left: Callable[[], X]) -> Either[X, T]:
        """``Right(value)`` if carried, else ``Left(left())``."""
        if self.is_empty:
            return Left(left())
        return Right(self.get())

    def to_left(self, right: Callable[[], X]) -> Either[T, X]:
        """``Left(value)`` if carried, else ``Right(right())``."""
        if self.is_empty:
            return Right(right())
        return Left(self.get())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "state": self.state.value,
            "stale": self.is_stale,
            "retries_left": self.retries_left,
        }
        if not self.is_empty:
            result["value"] = self.get()
        start_time = getattr(self, "start_time", None)
        if start_time is not None:
            result["start_time"] = start_time
        exc = self.exception_option()
        if exc is not None:
            result["error"] = error_to_dict(exc)
        return result


class WithFilter(Generic[T]):
    """
    A pot seen through a predicate, without building the filtered pot.

    ``pot.with_filter(p).map(f)`` equals ``pot.filter(p).map(f)``.
    """

    __slots__ = ("_pot", "_p")

    def __init__(self, pot: Pot[T], p: Callable[[T], bool]):
        self._pot = pot
        self._p = p

    def map(self, f: Callable[[T], U]) -> Pot[U]:
        return self._pot.filter(self._p).map(f)

    def flat_map(self, f: Callable[[T], Pot[U]]) -> Pot[U]:
        return self._pot.filter(self._p).flat_map(f)

    def foreach(self, f: Callable[[T], Any]) -> None:
        self._pot.filter(self._p).foreach(f)

    def with_filter(self, q: Callable[[T], bool]) -> WithFilter[T]:
        p = self._p
        return WithFilter(self._pot, lambda x: p(x) and q(x))


# =============================================================================
# VARIANTS
# =============================================================================


@dataclass(frozen=True, slots=True)
class Empty(Pot[Any]):
    """Nothing requested yet."""

    is_empty = True
    is_pending = False
    is_stale = False
    is_failed = False
    state = PotState.EMPTY
    retries_left = 0

    def get(self) -> Any:
        raise EmptyValueError("Empty.get")

    def pending(self, retries: int | None = None, *, start_time: int | None = None) -> Pot[Any]:
        return Pending(
            self.retries_left if retries is None else retries,
            _now() if start_time is None else start_time,
        )

    def fail(self, exception: BaseException) -> Pot[Any]:
        return Failed(exception)


@dataclass(frozen=True, slots=True)
class Ready(Pot[T]):
    """A loaded value."""

    value: T

    is_empty = False
    is_pending = False
    is_stale = False
    is_failed = False
    state = PotState.READY
    retries_left = 0

    def get(self) -> T:
        return self.value

    def pending(self, retries: int | None = None, *, start_time: int | None = None) -> Pot[T]:
        return PendingStale(
            self.value,
            self.retries_left if retries is None else retries,
            _now() if start_time is None else start_time,
        )

    def fail(self, exception: BaseException) -> Pot[T]:
        return FailedStale(self.value, exception)


class _PendingBase(Pot[T]):
    __slots__ = ()

    is_pending = True
    is_failed = False
    state = PotState.PENDING
    start_time: int

    def duration(self, current_time: int | None = None) -> int:
        """Milliseconds since loading started, as of ``current_time`` (default: now)."""
        return timestamps.elapsed_ms(self.start_time, current_time)


@dataclass(frozen=True, slots=True)
class Pending(_PendingBase[Any]):
    """Loading, nothing to show yet."""

    retries_left: int = 0
    start_time: int = field(default_factory=_now)

    is_empty = True
    is_stale = False

    def get(self) -> Any:
        raise EmptyValueError("Pending.get")

    def pending(self, retries: int | None = None, *, start_time: int | None = None) -> Pot[Any]:
        if retries is None:
            return self
        return dataclasses.replace(self, retries_left=retries)

    def fail(self, exception: BaseException) -> Pot[Any]:
        return Failed(exception)

    def retry(self) -> Pot[Any]:
        if self.can_retry:
            return dataclasses.replace(self, retries_left=self.retries_left - 1)
        return Failed(RetriesExhaustedError())


@dataclass(frozen=True, slots=True)
class PendingStale(_PendingBase[T]):
    """Reloading while still holding the previous value."""

    value: T
    retries_left: int = 0
    start_time: int = field(default_factory=_now)

    is_empty = False
    is_stale = True

    def get(self) -> T:
        return self.value

    def pending(self, retries: int | None = None, *, start_time: int | None = None) -> Pot[T]:
        if retries is None:
            return self
        return dataclasses.replace(self, retries_left=retries)

    def fail(self, exception: BaseException) -> Pot[T]:
        return FailedStale(self.value, exception)

    def retry(self) -> Pot[T]:
        if self.can_retry:
            return dataclasses.replace(self, retries_left=self.retries_left - 1)
        return FailedStale(self.value, RetriesExhaustedError())


class _FailedBase(Pot[T]):
    __slots__ = ()

    is_pending = False
    is_failed = True
    state = PotState.FAILED
    exception: BaseException

    def exception_option(self) -> BaseException | None:
        return self.exception

    def recover_with(
        self, pf: PartialFunction[BaseException, Pot[U]] | Callable[[BaseException], Pot[U]]
    ) -> Pot[T] | Pot[U]:
        """``pf(exception)`` as-is where ``pf`` is defined, else ``self``."""
        pf = as_partial(pf)
        if pf.is_defined_at(self.exception):
            return pf(self.exception)
        return self


@dataclass(frozen=True, slots=True)
class Failed(_FailedBase[Any]):
    """The load failed and there is nothing to show."""

    exception: BaseException
    retries_left: int = 0

    is_empty = True
    is_stale = False

    def get(self) -> Any:
        raise EmptyValueError("Failed.get")

    def pending(self, retries: int | None = None, *, start_time: int | None = None) -> Pot[Any]:
        return Pending(
            self.retries_left if retries is None else retries,
            _now() if start_time is None else start_time,
        )

    def fail(self, exception: BaseException) -> Pot[Any]:
        return Failed(exception)

    def retry(self) -> Pot[Any]:
        if self.can_retry:
            return Pending(self.retries_left - 1)
        return Failed(RetriesExhaustedError())


@dataclass(frozen=True, slots=True)
class FailedStale(_FailedBase[T]):
    """The reload failed; the previous value is still available."""

    value: T
    exception: BaseException
    retries_left: int = 0

    is_empty = False
    is_stale = True

    def get(self) -> T:
        return self.value

    def pending(self, retries: int | None = None, *, start_time: int | None = None) -> Pot[T]:
        return PendingStale(
            self.value,
            self.retries_left if retries is None else retries,
            _now() if start_time is None else start_time,
        )

    def fail(self, exception: BaseException) -> Pot[T]:
        return FailedStale(self.value, exception)

    def retry(self) -> Pot[T]:
        if self.can_retry:
            return PendingStale(self.value, self.retries_left - 1)
        return FailedStale(self.value, RetriesExhaustedError())


# =============================================================================
# CONSTRUCTORS
# =============================================================================


def from_optional(value: T | None) -> Pot[T]:
    """``Empty()`` for ``None``, else ``Ready(value)``."""
    if value is None:
        return Empty()
    return Ready(value)


def from_result(result: Result[T]) -> Pot[T]:
    """``Ok(v)`` becomes ``Ready(v)``; ``Err(e)`` becomes ``Failed(e)``."""
    match result:
        case Ok(value):
            return Ready(value)
        case Err(error):
            return Failed(error)
    raise TypeError(f"expected Ok or Err, got {type(result).__name__}")


def try_pot(f: Callable[[], T]) -> Pot[T]:
    """
    Run a loader and capture its outcome.

    Examples:
        >>> try_pot(lambda: 1 + 1)
        Ready(value=2)
        >>> try_pot(lambda: 1 / 0).is_failed
        True
    """
    try:
        return Ready(f())
    except Exception as e:
        return Failed(e)


__all__ = [
    "PotState",
    "Pot",
    "WithFilter",
    "Empty",
    "Ready",
    "Pending",
    "PendingStale",
    "Failed",
    "FailedStale",
    "from_optional",
    "from_result",
    "try_pot",
]

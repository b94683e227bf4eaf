"""
Partial functions for ``collect``, ``recover`` and ``recover_with``.

A partial function is a function paired with the domain it accepts. The pot
asks ``is_defined_at(x)`` first and only calls the function when the answer is
yes, so a handler never has to raise to say "not mine".

Examples:
    Handling only some exception types:

    >>> from potkit.core.partial import PartialFunction
    >>> pf = PartialFunction.on_types({TimeoutError: lambda e: "slow"})
    >>> pf.is_defined_at(TimeoutError())
    True
    >>> pf.lift(KeyError("x")) is None
    True

    Looking values up in a table:

    >>> pf = PartialFunction.from_mapping({"http": "HTTP"})
    >>> pf("http")
    'HTTP'

    Any plain callable is total:

    >>> as_partial(str.upper)("ftp")
    'FTP'
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar


A = TypeVar("A")
B = TypeVar("B")


def _always(_: Any) -> bool:
    return True


@dataclass(frozen=True, slots=True)
class PartialFunction(Generic[A, B]):
    """A function defined only where ``defined_at`` returns true."""

    defined_at: Callable[[A], bool]
    apply: Callable[[A], B]

    def is_defined_at(self, x: A) -> bool:
        return bool(self.defined_at(x))

    def __call__(self, x: A) -> B:
        return self.apply(x)

    def lift(self, x: A) -> B | None:
        """Apply if defined, else ``None``."""
        if self.is_defined_at(x):
            return self.apply(x)
        return None

    def or_else(self, other: PartialFunction[A, B]) -> PartialFunction[A, B]:
        """Fall back to ``other`` where this function is not defined."""
        return PartialFunction(
            lambda x: self.is_defined_at(x) or other.is_defined_at(x),
            lambda x: self.apply(x) if self.is_defined_at(x) else other.apply(x),
        )

    @classmethod
    def total(cls, f: Callable[[A], B]) -> PartialFunction[A, B]:
        return cls(_always, f)

    @classmethod
    def on_types(
        cls, handlers: Mapping[type | tuple[type, ...], Callable[[Any], B]]
    ) -> PartialFunction[Any, B]:
        """
        Dispatch on ``isinstance``; the first matching entry wins.

        Keys may be a single type or a tuple of types, as for ``isinstance``.
        """
        entries = list(handlers.items())

        def find(x: Any) -> Callable[[Any], B] | None:
            for types, handler in entries:
                if isinstance(x, types):
                    return handler
            return None

        def apply(x: Any) -> B:
            handler = find(x)
            if handler is None:
                raise TypeError(f"no handler for {type(x).__name__}")
            return handler(x)

        return cls(lambda x: find(x) is not None, apply)

    @classmethod
    def from_mapping(cls, table: Mapping[A, B]) -> PartialFunction[A, B]:
        """Defined on the keys of ``table``."""
        return cls(lambda x: x in table, lambda x: table[x])


def as_partial(f: PartialFunction[A, B] | Callable[[A], B]) -> PartialFunction[A, B]:
    """Coerce a plain callable into a total PartialFunction."""
    if isinstance(f, PartialFunction):
        return f
    return PartialFunction.total(f)


__all__ = ["PartialFunction", "as_partial"]

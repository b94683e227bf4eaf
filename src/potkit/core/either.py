"""
Left/Right pair for ``Pot.to_left()`` and ``Pot.to_right()``.

Unlike ``Result``, neither side means failure: ``to_right(alt)`` puts the
pot's value on the right and the alternative on the left, ``to_left(alt)``
does the opposite.

Examples:
    >>> from potkit.core.either import Left, Right
    >>> Right(3).fold(str, lambda v: v * 2)
    6
    >>> Left("missing").is_left()
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar


L = TypeVar("L")
R = TypeVar("R")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Left(Generic[L]):
    value: L

    def is_left(self) -> bool:
        return True

    def is_right(self) -> bool:
        return False

    def fold(self, if_left: Callable[[L], U], if_right: Callable[[R], U]) -> U:
        return if_left(self.value)

    def swap(self) -> Right[L]:
        return Right(self.value)

    def __repr__(self) -> str:
        return f"Left({self.value!r})"


@dataclass(frozen=True, slots=True)
class Right(Generic[R]):
    value: R

    def is_left(self) -> bool:
        return False

    def is_right(self) -> bool:
        return True

    def fold(self, if_left: Callable[[L], U], if_right: Callable[[R], U]) -> U:
        return if_right(self.value)

    def swap(self) -> Left[R]:
        return Left(self.value)

    def __repr__(self) -> str:
        return f"Right({self.value!r})"


Either = Left[L] | Right[R]


__all__ = ["Either", "Left", "Right"]

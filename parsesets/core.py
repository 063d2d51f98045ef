from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from functools import reduce
from typing import Any


class ReadonlyError(RuntimeError):
    """Raised when a frozen set is mutated or its readonly flag is cleared."""


class IntSet(ABC):
    """A set of integers: character codes or token types.

    Implementations provide the abstract operations; this base supplies the
    Python protocols (``in``, ``len``, iteration, truthiness) and the
    ``|``, ``&`` and ``-`` operators on top of them.
    """

    @abstractmethod
    def add(self, el: int) -> None:
        """Add a single element to the set."""
        pass

    @abstractmethod
    def add_all(self, elements: "IntSet | Iterable[int]") -> "IntSet":
        """Add every element of ``elements`` and return this set."""
        pass

    @abstractmethod
    def remove(self, el: int) -> None:
        """Remove ``el`` if present; absent elements are ignored."""
        pass

    @abstractmethod
    def union(self, other: "IntSet | Iterable[int]") -> "IntSet":
        pass

    @abstractmethod
    def intersection(self, other: "IntSet | Iterable[int]") -> "IntSet":
        pass

    @abstractmethod
    def subtract(self, other: "IntSet | Iterable[int]") -> "IntSet":
        """Return the elements of this set that are not in ``other``."""
        pass

    @abstractmethod
    def complement(self, elements: "IntSet | Iterable[int]") -> "IntSet":
        """Return the elements of ``elements`` that are not in this set."""
        pass

    @abstractmethod
    def contains(self, el: int) -> bool:
        pass

    @abstractmethod
    def size(self) -> int:
        pass

    @property
    @abstractmethod
    def is_nil(self) -> bool:
        """True if the set has no elements."""
        pass

    @abstractmethod
    def to_list(self) -> list[int]:
        """Return the elements in ascending order."""
        pass

    def __contains__(self, el: object) -> bool:
        return isinstance(el, int) and self.contains(el)

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return not self.is_nil

    def __iter__(self) -> Iterator[int]:
        return iter(self.to_list())

    def _check_operand(self, other: Any, symbol: str) -> None:
        if isinstance(other, (str, bytes)) or not isinstance(other, Iterable):
            raise TypeError(
                f"Cannot combine ({symbol}) a {type(self).__name__} with "
                f"{type(other).__name__!r}.\n"
                f"Got: {type(self).__name__} {symbol} {other!r}\n"
                f"Hint: Use another set or an iterable of ints: "
                f"s {symbol} IntervalSet.of(1, 5)  or  s {symbol} [1, 2, 3]"
            )

    def __or__(self, other: "IntSet | Iterable[int]") -> "IntSet":
        self._check_operand(other, "|")
        return self.union(other)

    def __and__(self, other: "IntSet | Iterable[int]") -> "IntSet":
        self._check_operand(other, "&")
        return self.intersection(other)

    def __sub__(self, other: "IntSet | Iterable[int]") -> "IntSet":
        self._check_operand(other, "-")
        return self.subtract(other)


def union(*sets: "IntSet") -> "IntSet":
    """Combine sets with union semantics (equivalent to chaining `|`).

    The result is always a new set; no operand is modified.
    """

    if not sets:
        raise ValueError(
            f"union() requires at least one set argument.\n"
            f"Example: union(digits, letters, underscore)"
        )

    def reducer(acc: "IntSet", nxt: "IntSet"):
        return acc | nxt

    return reduce(reducer, sets[1:], sets[0].union(()))


def intersection(*sets: "IntSet") -> "IntSet":
    """Combine sets with intersection semantics (equivalent to chaining `&`)."""

    if not sets:
        raise ValueError(
            f"intersection() requires at least one set argument.\n"
            f"Example: intersection(identifier_start, ascii)"
        )

    def reducer(acc: "IntSet", nxt: "IntSet"):
        return acc & nxt

    return reduce(reducer, sets[1:], sets[0].union(()))

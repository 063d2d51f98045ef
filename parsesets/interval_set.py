"""Sets of integers stored as sorted, disjoint, non-adjacent intervals.

This is the workhorse set type of the runtime. Character classes in a lexer
and "tokens expected here" sets in a parser are mostly runs of consecutive
values, so `{1, 2, 3, 4, 7, 8}` is kept as `{1..4, 7..8}`. Every mutation
restores that canonical form, which makes equality a plain comparison of
interval lists.
"""

import bisect
import logging
from array import array
from collections.abc import Iterable, Iterator
from typing import overload

from typing_extensions import override

from parsesets import murmur
from parsesets.core import IntSet, ReadonlyError
from parsesets.interval import Interval
from parsesets.util import (
    EOF,
    EPSILON,
    INVALID_ELEMENT,
    MAX_CHAR_VALUE,
    MIN_CHAR_VALUE,
)
from parsesets.vocabulary import Vocabulary

logger = logging.getLogger(__name__)


class IntervalSet(IntSet):
    """A set of integers backed by a sorted list of disjoint intervals.

    Any integer may be stored; negative values are used for token
    sentinels such as EOF. Once ``readonly`` is set, every mutating method
    raises ReadonlyError; copy with ``IntervalSet(frozen)`` to get a
    mutable derivative.

    Example:
        >>> s = IntervalSet.of(1, 5)
        >>> s.add(10, 20)
        >>> str(s)
        '{1..5, 10..20}'
        >>> 15 in s, 7 in s
        (True, False)
    """

    def __init__(self, elements: "IntSet | Iterable[int]" = ()) -> None:
        """Create an empty set, or a copy of ``elements``.

        Args:
            elements: Another IntervalSet (copied interval by interval) or
                any iterable of ints (added one element at a time)
        """
        self._intervals: list[Interval] = []
        self._readonly: bool = False

        if isinstance(elements, IntervalSet):
            # Already canonical; intervals are immutable so sharing them is safe
            self._intervals = list(elements._intervals)
        else:
            self.add_all(elements)

    @classmethod
    def of(cls, a: int, b: int | None = None) -> "IntervalSet":
        """Create a set holding ``a``, or every int in ``a..b`` inclusive."""
        s = cls()
        s.add(a, a if b is None else b)
        return s

    @classmethod
    def from_intervals(cls, *intervals: Interval) -> "IntervalSet":
        """Create a set from intervals given in any order; empty ones are skipped."""
        s = cls()
        for interval in intervals:
            s._add(interval)
        return s

    @classmethod
    def union_of(cls, *sets: "IntSet | Iterable[int]") -> "IntervalSet":
        """Combine all ``sets`` into one new set."""
        result = cls()
        for s in sets:
            result.add_all(s)
        return result

    @property
    def intervals(self) -> tuple[Interval, ...]:
        """The canonical intervals, in ascending order."""
        return tuple(self._intervals)

    @property
    def readonly(self) -> bool:
        return self._readonly

    @readonly.setter
    def readonly(self, value: bool) -> None:
        if self._readonly and not value:
            logger.debug("Refused to clear readonly flag on %r", self)
            raise ReadonlyError(
                "can't alter readonly IntervalSet: the readonly flag cannot be cleared.\n"
                "Hint: Make a mutable copy instead: IntervalSet(frozen_set)"
            )
        if value and not self._readonly:
            logger.debug("Freezing %r", self)
        self._readonly = value

    def freeze(self) -> "IntervalSet":
        """Set ``readonly`` and return this set."""
        self.readonly = True
        return self

    def _check_writable(self, operation: str) -> None:
        if self._readonly:
            logger.debug("Rejected %s() on readonly %r", operation, self)
            raise ReadonlyError(
                f"can't alter readonly IntervalSet ({operation}).\n"
                f"Hint: Make a mutable copy first: IntervalSet(frozen_set).{operation}(...)"
            )

    # Mutation

    def clear(self) -> None:
        self._check_writable("clear")
        self._intervals.clear()

    @overload
    def add(self, el: int) -> None: ...

    @overload
    def add(self, el: int, upper: int) -> None: ...

    @override
    def add(self, el: int, upper: int | None = None) -> None:
        """Add ``el``, or every int in ``el..upper`` inclusive.

        An inverted range (``upper < el``) adds nothing. Overlapping and
        adjacent intervals are merged, so if this is ``{1..5, 10..20}``,
        adding ``6..7`` yields ``{1..7, 10..20}`` and adding ``4..8`` yields
        ``{1..8, 10..20}``.
        """
        self._add(Interval.of(el, el if upper is None else upper))

    def _add(self, addition: Interval) -> None:
        self._check_writable("add")
        if addition.b < addition.a:
            return

        intervals = self._intervals
        for i, r in enumerate(intervals):
            if addition == r:
                return

            if addition.adjacent(r) or not addition.disjoint(r):
                # Merge, then swallow any following intervals the merged one now touches
                bigger = addition.union(r)
                j = i + 1
                while j < len(intervals):
                    nxt = intervals[j]
                    if not bigger.adjacent(nxt) and bigger.disjoint(nxt):
                        break
                    bigger = bigger.union(nxt)
                    j += 1
                intervals[i:j] = [bigger]
                return

            if addition.starts_before_disjoint(r):
                intervals.insert(i, addition)
                return

            # disjoint and after r; a later interval will place it

        intervals.append(addition)

    @override
    def add_all(self, elements: "IntSet | Iterable[int]") -> "IntervalSet":
        """Add every element of ``elements`` and return this set.

        IntervalSets are added a whole interval at a time; any other
        iterable of ints (including other IntSet implementations) is added
        element by element.
        """
        if isinstance(elements, IntervalSet):
            for interval in tuple(elements._intervals):
                self._add(interval)
        else:
            for value in elements:
                self.add(value)
        return self

    @override
    def remove(self, el: int) -> None:
        """Remove ``el``; a no-op when it is not in the set.

        Removing an interior element splits its interval in two.
        """
        self._check_writable("remove")

        intervals = self._intervals
        for i, interval in enumerate(intervals):
            a, b = interval.a, interval.b
            if el < a:
                # sorted, so el cannot appear further on
                break
            if el == a and el == b:
                del intervals[i]
                break
            if el == a:
                intervals[i] = Interval.of(a + 1, b)
                break
            if el == b:
                intervals[i] = Interval.of(a, b - 1)
                break
            if el < b:
                intervals[i : i + 1] = [Interval.of(a, el - 1), Interval.of(el + 1, b)]
                break

    # Algebra

    @staticmethod
    def _coerce(elements: "IntSet | Iterable[int]") -> "IntervalSet":
        if isinstance(elements, IntervalSet):
            return elements
        return IntervalSet(elements)

    @override
    def union(self, other: "IntSet | Iterable[int]") -> "IntervalSet":
        """Return a new set with the elements of both sets."""
        result = IntervalSet(self)
        result.add_all(other)
        return result

    @override
    def intersection(self, other: "IntSet | Iterable[int]") -> "IntervalSet":
        """Return a new set with the elements common to both sets.

        Walks both sorted interval lists once with a cursor each.
        """
        theirs_set = self._coerce(other)
        result = IntervalSet()
        if self.is_nil or theirs_set.is_nil:
            return result

        my_intervals = self._intervals
        their_intervals = theirs_set._intervals
        my_size = len(my_intervals)
        their_size = len(their_intervals)
        i = 0
        j = 0

        while i < my_size and j < their_size:
            mine = my_intervals[i]
            theirs = their_intervals[j]

            if mine.starts_before_disjoint(theirs):
                i += 1
            elif theirs.starts_before_disjoint(mine):
                j += 1
            elif mine.properly_contains(theirs):
                result._add(mine.intersection(theirs))
                j += 1
            elif theirs.properly_contains(mine):
                result._add(mine.intersection(theirs))
                i += 1
            elif not mine.disjoint(theirs):
                result._add(mine.intersection(theirs))
                # Advance whichever ends first; the other may still overlap
                # the next interval on the opposite side, e.g. mine=[0..115]
                # and theirs=[115..200] gives 115 and moves mine only.
                if mine.starts_after_non_disjoint(theirs):
                    j += 1
                elif theirs.starts_after_non_disjoint(mine):
                    i += 1

        return result

    @override
    def subtract(self, other: "IntSet | Iterable[int]") -> "IntervalSet":
        """Return a new set with the elements of this set not in ``other``."""
        return subtract(self, self._coerce(other))

    @overload
    def complement(self) -> "IntervalSet": ...

    @overload
    def complement(self, elements: "IntSet | Iterable[int]") -> "IntervalSet": ...

    @overload
    def complement(self, elements: int, maximum: int) -> "IntervalSet": ...

    @override
    def complement(
        self,
        elements: "IntSet | Iterable[int] | int | None" = None,
        maximum: int | None = None,
    ) -> "IntervalSet":
        """Return the elements of a universe that are not in this set.

        The universe is ``elements`` (a set or iterable of ints), the range
        ``elements..maximum`` when two ints are given, or every character
        value when called without arguments.
        """
        if elements is None:
            universe = COMPLETE_CHAR_SET
        elif isinstance(elements, int):
            if maximum is None:
                raise TypeError(
                    f"complement() got a single int ({elements}).\n"
                    f"Hint: Pass both bounds, complement(minimum, maximum), "
                    f"or a universe set: complement(vocabulary_set)"
                )
            universe = IntervalSet.of(elements, maximum)
        else:
            universe = self._coerce(elements)

        if universe.is_nil:
            return IntervalSet()
        return subtract(universe, self)

    # Queries

    @override
    def contains(self, el: int) -> bool:
        """Binary search for the interval that could hold ``el``."""
        i = bisect.bisect_right(self._intervals, el, key=lambda interval: interval.a) - 1
        return i >= 0 and el <= self._intervals[i].b

    @property
    @override
    def is_nil(self) -> bool:
        return not self._intervals

    @property
    def min_element(self) -> int:
        """Smallest element. Raises ValueError if the set is empty."""
        if not self._intervals:
            raise ValueError("set is empty: min_element is undefined")
        return self._intervals[0].a

    @property
    def max_element(self) -> int:
        """Largest element. Raises ValueError if the set is empty."""
        if not self._intervals:
            raise ValueError("set is empty: max_element is undefined")
        return self._intervals[-1].b

    @override
    def size(self) -> int:
        if len(self._intervals) == 1:
            return self._intervals[0].length
        return sum(interval.length for interval in self._intervals)

    def get(self, index: int) -> int:
        """Return the ``index``-th smallest element, or -1 if out of range.

        A linear scan; rarely needed, so not optimized.
        """
        if index < 0:
            return INVALID_ELEMENT
        for interval in self._intervals:
            if index < interval.length:
                return interval.a + index
            index -= interval.length
        return INVALID_ELEMENT

    # Conversions

    @override
    def __iter__(self) -> Iterator[int]:
        for interval in self._intervals:
            yield from range(interval.a, interval.b + 1)

    @override
    def to_list(self) -> list[int]:
        return list(self)

    def to_integer_list(self) -> "array[int]":
        """Expand into a growable array of 64-bit ints."""
        return array("q", self)

    def to_set(self) -> set[int]:
        return set(self)

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntervalSet):
            return NotImplemented
        return self._intervals == other._intervals

    @override
    def __hash__(self) -> int:
        hash = murmur.initialize()
        for interval in self._intervals:
            hash = murmur.update(hash, interval.a)
            hash = murmur.update(hash, interval.b)
        return murmur.finish(hash, len(self._intervals) * 2)

    # Rendering

    @overload
    def to_string(self, elements_are_chars: bool = False) -> str: ...

    @overload
    def to_string(self, *, vocabulary: Vocabulary) -> str: ...

    def to_string(
        self,
        elements_are_chars: bool = False,
        vocabulary: Vocabulary | None = None,
    ) -> str:
        """Render the set for people.

        Numbers by default (``{1..5, 10..20}``), quoted characters when
        ``elements_are_chars`` is set (``{'a'..'z', '_'}``), or token
        display names from ``vocabulary`` (``{ID, '(', <EOF>}``). Braces
        are omitted for a single element.
        """
        if not self._intervals:
            return "{}"

        if vocabulary is not None:
            items = [_element_name(vocabulary, value) for value in self]
        else:
            items = [_interval_text(interval, elements_are_chars) for interval in self._intervals]

        text = ", ".join(items)
        if self.size() > 1:
            return "{" + text + "}"
        return text

    @override
    def __str__(self) -> str:
        return self.to_string()

    @override
    def __repr__(self) -> str:
        suffix = ", readonly=True" if self._readonly else ""
        return f"{type(self).__name__}({self.to_string()!r}{suffix})"


def subtract(left: IntervalSet, right: IntervalSet) -> IntervalSet:
    """Compute ``left - right`` as a new set; neither input is modified.

    Algorithm: walk a copy of ``left`` and ``right`` with one cursor each,
    trimming or splitting the current result interval by the current right
    interval.
    """
    if left.is_nil:
        return IntervalSet()

    result = IntervalSet(left)
    if right.is_nil:
        return result

    intervals = result._intervals
    right_intervals = right._intervals
    result_i = 0
    right_i = 0

    while result_i < len(intervals) and right_i < len(right_intervals):
        result_interval = intervals[result_i]
        right_interval = right_intervals[right_i]

        if right_interval.b < result_interval.a:
            right_i += 1
            continue

        if right_interval.a > result_interval.b:
            result_i += 1
            continue

        before_current: Interval | None = None
        after_current: Interval | None = None

        if right_interval.a > result_interval.a:
            before_current = Interval.of(result_interval.a, right_interval.a - 1)

        if right_interval.b < result_interval.b:
            after_current = Interval.of(right_interval.b + 1, result_interval.b)

        if before_current is not None and after_current is not None:
            # split the current interval in two
            intervals[result_i : result_i + 1] = [before_current, after_current]
            result_i += 1
            right_i += 1
        elif before_current is not None:
            intervals[result_i] = before_current
            result_i += 1
        elif after_current is not None:
            intervals[result_i] = after_current
            right_i += 1
        else:
            # fully covered; the next interval slides into this slot
            del intervals[result_i]

    return result


def _char_text(value: int) -> str:
    if MIN_CHAR_VALUE <= value <= MAX_CHAR_VALUE:
        return "'" + chr(value) + "'"
    return str(value)


def _interval_text(interval: Interval, elements_are_chars: bool) -> str:
    a, b = interval.a, interval.b
    if a == b:
        if a == EOF:
            return "<EOF>"
        if a == EPSILON:
            return "<EPSILON>"
        if elements_are_chars:
            return _char_text(a)
        return str(a)
    if elements_are_chars:
        return f"{_char_text(a)}..{_char_text(b)}"
    return f"{a}..{b}"


def _element_name(vocabulary: Vocabulary, value: int) -> str:
    if value == EOF:
        return "<EOF>"
    if value == EPSILON:
        return "<EPSILON>"
    return vocabulary.get_display_name(value)


EMPTY_SET: IntervalSet = IntervalSet().freeze()
COMPLETE_CHAR_SET: IntervalSet = IntervalSet.of(MIN_CHAR_VALUE, MAX_CHAR_VALUE).freeze()

from dataclasses import dataclass

from parsesets.util import INTERVAL_CACHE_SIZE


@dataclass(frozen=True, kw_only=True)
class Interval:
    """Closed integer range [a, b]. Empty when b < a."""

    a: int
    b: int

    @classmethod
    def of(cls, a: int, b: int) -> "Interval":
        """Return an interval, sharing cached instances for small singletons."""
        if not isinstance(a, int) or not isinstance(b, int):
            raise TypeError(
                f"Interval bounds must be int, got "
                f"{type(a).__name__!r} and {type(b).__name__!r}.\n"
                f"Hint: pass code points, not characters: Interval.of(ord('a'), ord('z'))"
            )
        if a == b and 0 <= a <= INTERVAL_CACHE_SIZE:
            return _SINGLETONS[a]
        return cls(a=a, b=b)

    @property
    def length(self) -> int:
        if self.b < self.a:
            return 0
        return self.b - self.a + 1

    @property
    def is_empty(self) -> bool:
        return self.b < self.a

    def starts_before_disjoint(self, other: "Interval") -> bool:
        return self.a < other.a and self.b < other.a

    def starts_before_non_disjoint(self, other: "Interval") -> bool:
        return self.a <= other.a and self.b >= other.a

    def starts_after(self, other: "Interval") -> bool:
        return self.a > other.a

    def starts_after_disjoint(self, other: "Interval") -> bool:
        return self.a > other.b

    def starts_after_non_disjoint(self, other: "Interval") -> bool:
        return self.a > other.a and self.a <= other.b

    def disjoint(self, other: "Interval") -> bool:
        """True if the two ranges share no integer."""
        return self.starts_before_disjoint(other) or self.starts_after_disjoint(other)

    def adjacent(self, other: "Interval") -> bool:
        """True if one range starts exactly one past the other's end."""
        return self.a == other.b + 1 or self.b == other.a - 1

    def properly_contains(self, other: "Interval") -> bool:
        return other.a >= self.a and other.b <= self.b

    def union(self, other: "Interval") -> "Interval":
        """Smallest range covering both; meaningful only when they touch."""
        return Interval.of(min(self.a, other.a), max(self.b, other.b))

    def intersection(self, other: "Interval") -> "Interval":
        """Overlap of both ranges; empty when they are disjoint."""
        return Interval.of(max(self.a, other.a), min(self.b, other.b))

    def difference_not_properly_contained(self, other: "Interval") -> "Interval | None":
        """Part of this range left uncovered by ``other``.

        Only meaningful when ``other`` does not sit strictly inside this
        range; in that case just the left piece is returned. Returns None
        when the ranges are disjoint or nothing remains.
        """
        diff: Interval | None = None
        if other.starts_before_non_disjoint(self):
            # other.a to the left of this.a (or same)
            diff = Interval.of(max(self.a, other.b + 1), self.b)
        elif other.starts_after_non_disjoint(self):
            # other.a to the right of this.a
            diff = Interval.of(self.a, other.a - 1)
        if diff is not None and diff.is_empty:
            return None
        return diff

    def __str__(self) -> str:
        return f"{self.a}..{self.b}"


_SINGLETONS: tuple[Interval, ...] = tuple(
    Interval(a=v, b=v) for v in range(INTERVAL_CACHE_SIZE + 1)
)

"""Tests for IntervalSet construction, mutation and queries."""

import logging
from array import array

import pytest

from parsesets import (
    COMPLETE_CHAR_SET,
    EMPTY_SET,
    MAX_CHAR_VALUE,
    MIN_CHAR_VALUE,
    Interval,
    IntervalSet,
    ReadonlyError,
)


def bounds(s: IntervalSet) -> list[tuple[int, int]]:
    return [(interval.a, interval.b) for interval in s.intervals]


class TestAdd:
    def test_add_disjoint_ranges_in_order(self):
        s = IntervalSet()
        s.add(1, 5)
        s.add(10, 20)
        assert bounds(s) == [(1, 5), (10, 20)]
        assert str(s) == "{1..5, 10..20}"

    def test_adjacent_range_merges(self):
        s = IntervalSet.of(1, 5)
        s.add(10, 20)
        s.add(6, 7)
        assert bounds(s) == [(1, 7), (10, 20)]

    def test_overlap_absorbs_following_intervals(self):
        s = IntervalSet.of(1, 5)
        s.add(10, 20)
        s.add(6, 7)
        s.add(4, 8)
        assert str(s) == "{1..8, 10..20}"

    def test_bridging_range_merges_three(self):
        s = IntervalSet.from_intervals(
            Interval.of(1, 3), Interval.of(6, 8), Interval.of(11, 13), Interval.of(20, 21)
        )
        s.add(4, 12)
        assert bounds(s) == [(1, 13), (20, 21)]

    def test_insert_before(self):
        s = IntervalSet.of(10, 20)
        s.add(1, 3)
        s.add(5)
        assert bounds(s) == [(1, 3), (5, 5), (10, 20)]

    def test_append_after(self):
        s = IntervalSet.of(1, 3)
        s.add(30, 40)
        assert bounds(s) == [(1, 3), (30, 40)]

    def test_inverted_range_is_ignored(self):
        s = IntervalSet.of(1, 3)
        s.add(9, 5)
        assert bounds(s) == [(1, 3)]

    def test_add_is_idempotent(self):
        s = IntervalSet.of(1, 5)
        s.add(10, 20)
        before = bounds(s)
        s.add(10, 20)
        s.add(1, 5)
        s.add(3)
        assert bounds(s) == before

    def test_negative_sentinels(self):
        s = IntervalSet.of(-2)
        s.add(-1)
        s.add(0, 4)
        assert bounds(s) == [(-2, 4)]

    def test_add_all_from_interval_set_and_iterable(self):
        s = IntervalSet.of(1, 2)
        result = s.add_all(IntervalSet.of(10, 12))
        assert result is s
        s.add_all([3, 4, 20])
        assert bounds(s) == [(1, 4), (10, 12), (20, 20)]

    def test_add_all_self(self):
        s = IntervalSet.from_intervals(Interval.of(1, 3), Interval.of(7, 9))
        s.add_all(s)
        assert bounds(s) == [(1, 3), (7, 9)]


class TestRemove:
    def test_remove_edges_and_interior(self):
        s = IntervalSet.of(1, 10)
        s.remove(1)
        assert str(s) == "{2..10}"
        s.remove(10)
        assert str(s) == "{2..9}"
        s.remove(5)
        assert str(s) == "{2..4, 6..9}"

    def test_remove_singleton(self):
        s = IntervalSet.from_intervals(Interval.of(1, 3), Interval.of(5, 5), Interval.of(7, 9))
        s.remove(5)
        assert bounds(s) == [(1, 3), (7, 9)]

    def test_remove_absent_is_noop(self):
        s = IntervalSet.from_intervals(Interval.of(1, 3), Interval.of(7, 9))
        s.remove(5)
        s.remove(0)
        s.remove(100)
        assert bounds(s) == [(1, 3), (7, 9)]

    def test_remove_does_not_touch_shared_intervals(self):
        first = IntervalSet.of(7)
        first.add(8, 9)
        second = IntervalSet(first)
        second.remove(7)
        assert bounds(first) == [(7, 9)]
        assert bounds(second) == [(8, 9)]

    def test_add_then_remove_restores(self):
        s = IntervalSet.from_intervals(Interval.of(1, 3), Interval.of(7, 9))
        s.add(5)
        s.remove(5)
        assert bounds(s) == [(1, 3), (7, 9)]


class TestReadonly:
    def test_mutations_fail_once_frozen(self):
        s = IntervalSet.of(1, 5).freeze()
        assert s.readonly
        with pytest.raises(ReadonlyError, match="readonly"):
            s.add(7)
        with pytest.raises(ReadonlyError):
            s.add(9, 2)
        with pytest.raises(ReadonlyError):
            s.remove(3)
        with pytest.raises(ReadonlyError):
            s.clear()
        with pytest.raises(ReadonlyError):
            s.add_all([8])
        assert bounds(s) == [(1, 5)]

    def test_flag_cannot_be_cleared(self):
        s = IntervalSet()
        s.readonly = True
        s.readonly = True
        with pytest.raises(ReadonlyError, match="cannot be cleared"):
            s.readonly = False

    def test_clearing_unset_flag_is_allowed(self):
        s = IntervalSet()
        s.readonly = False
        s.add(1)
        assert s.to_list() == [1]

    def test_singletons_are_frozen(self):
        assert EMPTY_SET.readonly
        assert COMPLETE_CHAR_SET.readonly
        with pytest.raises(ReadonlyError):
            EMPTY_SET.add(1)
        with pytest.raises(ReadonlyError):
            COMPLETE_CHAR_SET.remove(65)
        assert bounds(COMPLETE_CHAR_SET) == [(MIN_CHAR_VALUE, MAX_CHAR_VALUE)]

    def test_copy_of_frozen_set_is_mutable(self):
        copy = IntervalSet(COMPLETE_CHAR_SET)
        assert not copy.readonly
        copy.remove(65)
        assert 65 not in copy
        assert 65 in COMPLETE_CHAR_SET

    def test_intervals_view_is_immutable(self):
        assert isinstance(EMPTY_SET.intervals, tuple)

    def test_rejected_mutation_is_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="parsesets.interval_set")
        s = IntervalSet.of(1).freeze()
        assert "Freezing" in caplog.text
        with pytest.raises(ReadonlyError):
            s.remove(1)
        assert "Rejected remove()" in caplog.text


class TestQueries:
    def test_contains(self):
        s = IntervalSet.of(1, 5)
        s.add(10, 20)
        assert not s.contains(7)
        assert s.contains(15)
        assert 1 in s
        assert 5 in s
        assert 10 in s
        assert 20 in s
        assert 0 not in s
        assert 21 not in s
        assert "a" not in s
        assert not IntervalSet().contains(0)

    def test_contains_many_intervals(self):
        s = IntervalSet(range(0, 200, 2))
        assert len(s.intervals) == 100
        assert all(s.contains(x) for x in range(0, 200, 2))
        assert not any(s.contains(x) for x in range(1, 200, 2))

    def test_size(self):
        assert IntervalSet().size() == 0
        assert IntervalSet.of(3, 7).size() == 5
        s = IntervalSet.from_intervals(Interval.of(1, 5), Interval.of(10, 20))
        assert s.size() == 16
        assert len(s) == 16
        assert COMPLETE_CHAR_SET.size() == MAX_CHAR_VALUE - MIN_CHAR_VALUE + 1

    def test_is_nil(self):
        assert IntervalSet().is_nil
        assert not IntervalSet()
        assert not IntervalSet.of(4).is_nil
        assert IntervalSet.of(4)

    def test_min_and_max(self):
        s = IntervalSet.from_intervals(Interval.of(10, 20), Interval.of(-1, 3))
        assert s.min_element == -1
        assert s.max_element == 20

    def test_min_and_max_of_empty_set_fail(self):
        with pytest.raises(ValueError, match="set is empty"):
            IntervalSet().min_element
        with pytest.raises(ValueError, match="set is empty"):
            EMPTY_SET.max_element

    def test_get(self):
        s = IntervalSet.from_intervals(Interval.of(1, 3), Interval.of(10, 11))
        assert [s.get(i) for i in range(5)] == [1, 2, 3, 10, 11]
        assert s.get(5) == -1
        assert s.get(-1) == -1
        assert IntervalSet().get(0) == -1

    def test_clear(self):
        s = IntervalSet.of(1, 5)
        s.clear()
        assert s.is_nil


class TestConversions:
    def test_expansions(self):
        s = IntervalSet.from_intervals(Interval.of(5, 6), Interval.of(1, 2))
        assert s.to_list() == [1, 2, 5, 6]
        assert list(s) == [1, 2, 5, 6]
        assert s.to_set() == {1, 2, 5, 6}
        assert s.to_integer_list() == array("q", [1, 2, 5, 6])

    def test_constructors(self):
        assert bounds(IntervalSet([5, 3, 4, 9])) == [(3, 5), (9, 9)]
        assert bounds(IntervalSet.of(7)) == [(7, 7)]
        assert bounds(IntervalSet.from_intervals(Interval.of(4, 2))) == []
        assert bounds(IntervalSet.union_of(IntervalSet.of(1), [2], IntervalSet.of(9))) == [
            (1, 2),
            (9, 9),
        ]


class TestEquality:
    def test_equal_sets_compare_and_hash_equal(self):
        left = IntervalSet([1, 2, 3, 10])
        right = IntervalSet.of(10)
        right.add(1, 3)
        assert left == right
        assert hash(left) == hash(right)

    def test_readonly_does_not_affect_equality(self):
        assert IntervalSet() == EMPTY_SET
        assert IntervalSet.of(MIN_CHAR_VALUE, MAX_CHAR_VALUE) == COMPLETE_CHAR_SET

    def test_different_sets(self):
        assert IntervalSet.of(1, 3) != IntervalSet.of(1, 4)
        assert IntervalSet.of(1, 3) != [1, 2, 3]
        assert hash(IntervalSet.of(1, 3)) != hash(IntervalSet.of(3, 1))

    def test_hash_differs_for_different_bounds(self):
        a = IntervalSet.from_intervals(Interval.of(1, 2), Interval.of(5, 9))
        b = IntervalSet.from_intervals(Interval.of(1, 5), Interval.of(7, 9))
        assert hash(a) != hash(b)

"""Tests for interval intersection, union and emptiness."""

import itertools
import random

import pytest

from versioning.intervals import intersect, intersect_all, is_empty, union, union_all
from versioning.models import NO_LOWER, NO_UPPER, UNBOUNDED, Bound, Interval
from versioning.parser import parse_range
from versioning.version import Version


def ver(text):
    return Version.parse(text)


def span(lo, lo_inc, hi, hi_inc):
    return Interval(Bound(ver(lo), lo_inc), Bound(ver(hi), hi_inc))


class TestEmptiness:
    """Boundary-equality cases, every inclusivity combination."""

    @pytest.mark.parametrize("lo_inc,hi_inc,expected_empty", [
        (True, True, False),
        (True, False, True),
        (False, True, True),
        (False, False, True),
    ])
    def test_lower_equals_upper(self, lo_inc, hi_inc, expected_empty):
        assert is_empty(span("14.0.0", lo_inc, "14.0.0", hi_inc)) is expected_empty

    @pytest.mark.parametrize("lo_inc,hi_inc", list(itertools.product([True, False], repeat=2)))
    def test_lower_above_upper_always_empty(self, lo_inc, hi_inc):
        assert is_empty(span("16.0.0", lo_inc, "14.0.0", hi_inc))

    @pytest.mark.parametrize("lo_inc,hi_inc", list(itertools.product([True, False], repeat=2)))
    def test_lower_below_upper_never_empty(self, lo_inc, hi_inc):
        assert not is_empty(span("14.0.0", lo_inc, "16.0.0", hi_inc))

    def test_unbounded_is_not_empty(self):
        assert not is_empty(UNBOUNDED)
        assert not is_empty(Interval(NO_LOWER, Bound.excluding(ver("0.0.1"))))

    def test_unbounded_bound_is_never_inclusive(self):
        assert Bound(NO_LOWER.value, True).inclusive is False


class TestIntersect:
    """AND semantics."""

    def test_range_meets_range(self):
        result = intersect(parse_range(">=14.0.0").interval, parse_range("<16.0.0").interval)
        assert result == span("14.0.0", True, "16.0.0", False)
        assert not result.is_empty

    def test_exclusive_wins_on_tie(self):
        a = span("14.0.0", True, "16.0.0", True)
        b = span("14.0.0", False, "16.0.0", False)
        assert intersect(a, b) == b
        assert intersect(b, a) == b

    def test_adjacent_ranges_conflict(self):
        result = intersect(parse_range("<14.0.0").interval, parse_range(">=14.0.0").interval)
        assert result.is_empty
        assert str(result.lower.value) == "14.0.0"
        assert str(result.upper.value) == "14.0.0"

    def test_touching_inclusive_ranges_meet_at_a_point(self):
        result = intersect(parse_range("<=14.0.0").interval, parse_range(">=14.0.0").interval)
        assert result == span("14.0.0", True, "14.0.0", True)
        assert not result.is_empty

    def test_empty_stays_empty(self):
        empty = parse_range(">=3.0.0 <2.0.0").interval
        assert intersect(empty, UNBOUNDED).is_empty
        assert intersect(parse_range("^2.0.0").interval, empty).is_empty

    def test_intersect_all_of_nothing_is_unbounded(self):
        assert intersect_all([]) == UNBOUNDED


class TestUnion:
    """OR semantics used when collapsing alternatives."""

    def test_hull(self):
        a = span("14.0.0", True, "16.0.0", False)
        b = span("18.0.0", True, "19.0.0", False)
        assert union(a, b) == span("14.0.0", True, "19.0.0", False)

    def test_inclusive_wins_on_tie(self):
        a = span("14.0.0", False, "16.0.0", False)
        b = span("14.0.0", True, "16.0.0", True)
        assert union(a, b) == b
        assert union(b, a) == b

    def test_empty_operand_is_dropped(self):
        empty = span("3.0.0", True, "2.0.0", True)
        real = span("14.0.0", True, "15.0.0", False)
        assert union(empty, real) == real
        assert union(real, empty) == real

    def test_both_empty_returns_first(self):
        first = span("3.0.0", True, "2.0.0", True)
        second = span("5.0.0", True, "4.0.0", True)
        assert union(first, second) == first

    def test_union_all(self):
        parts = [parse_range(r).interval for r in ("^14.0.0", "^16.0.0", ">=18.0.0")]
        assert union_all(parts) == Interval(Bound.including(ver("14.0.0")), NO_UPPER)


EXPRESSIONS = [
    "*", ">=14.0.0", ">14.0.0", "<16.0.0", "<=16.0.0", "14.0.0", "^14.0.0", "~14.2.3",
    "^0.0.3", ">=12.0.0 <15.0.0", ">=14.0.0 <16.0.0 || >=18.0.0", "<14.0.0", "<=14.0.0",
    ">=16.0.0", ">=3.0.0 <2.0.0", "14.x", "1.2.3 - 16.1.0",
]


class TestAlgebraProperties:
    """Commutativity, associativity, identity and idempotence."""

    intervals = [parse_range(e).interval for e in EXPRESSIONS]

    def test_commutative(self):
        for a, b in itertools.product(self.intervals, repeat=2):
            assert intersect(a, b) == intersect(b, a)

    def test_associative(self):
        rng = random.Random(42)
        for _ in range(500):
            a, b, c = (rng.choice(self.intervals) for _ in range(3))
            assert intersect(intersect(a, b), c) == intersect(a, intersect(b, c))

    def test_identity(self):
        for a in self.intervals:
            assert intersect(a, UNBOUNDED) == a
            assert intersect(UNBOUNDED, a) == a

    def test_idempotent(self):
        for a in self.intervals:
            assert intersect(a, a) == a

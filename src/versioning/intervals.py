"""Interval algebra: intersection (AND) and union (OR) of version intervals."""

from functools import reduce
from typing import Iterable

from .models import UNBOUNDED, Bound, Interval
from .version import Ordering, compare


def is_empty(interval: Interval) -> bool:
    """True when no version satisfies ``interval``."""
    return interval.is_empty


def _tighter_lower(a: Bound, b: Bound) -> Bound:
    order = compare(a.value, b.value)
    if order is Ordering.EQUAL:
        return a if not a.inclusive else b
    return a if order is Ordering.GREATER else b


def _tighter_upper(a: Bound, b: Bound) -> Bound:
    order = compare(a.value, b.value)
    if order is Ordering.EQUAL:
        return a if not a.inclusive else b
    return a if order is Ordering.LESS else b


def _looser_lower(a: Bound, b: Bound) -> Bound:
    order = compare(a.value, b.value)
    if order is Ordering.EQUAL:
        return a if a.inclusive else b
    return a if order is Ordering.LESS else b


def _looser_upper(a: Bound, b: Bound) -> Bound:
    order = compare(a.value, b.value)
    if order is Ordering.EQUAL:
        return a if a.inclusive else b
    return a if order is Ordering.GREATER else b


def intersect(a: Interval, b: Interval) -> Interval:
    """Versions satisfying both ``a`` and ``b``. The result may be empty."""
    return Interval(_tighter_lower(a.lower, b.lower), _tighter_upper(a.upper, b.upper))


def union(a: Interval, b: Interval) -> Interval:
    """Smallest single interval covering ``a`` and ``b``.

    Empty operands contribute nothing; when both are empty ``a`` is
    returned. Disjoint operands are bridged, so the hull may admit versions
    neither operand admits.
    """
    if b.is_empty:
        return a
    if a.is_empty:
        return b
    return Interval(_looser_lower(a.lower, b.lower), _looser_upper(a.upper, b.upper))


def intersect_all(intervals: Iterable[Interval]) -> Interval:
    """Fold ``intersect`` over ``intervals``; no intervals means no constraint."""
    return reduce(intersect, intervals, UNBOUNDED)


def union_all(intervals: Iterable[Interval]) -> Interval:
    """Fold ``union`` over at least one interval."""
    return reduce(union, intervals)

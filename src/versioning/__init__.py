"""Version range parsing and interval resolution."""

from .aggregator import Aggregator, aggregate
from .intervals import intersect, is_empty, union
from .models import (
    UNBOUNDED,
    AggregationResult,
    AggregationStep,
    Bound,
    ConstraintSet,
    Interval,
)
from .parser import parse_range
from .version import NO_CEILING, NO_FLOOR, Ordering, Version, compare, max_version, min_version

__all__ = [
    "Aggregator",
    "aggregate",
    "intersect",
    "is_empty",
    "union",
    "UNBOUNDED",
    "AggregationResult",
    "AggregationStep",
    "Bound",
    "ConstraintSet",
    "Interval",
    "parse_range",
    "NO_CEILING",
    "NO_FLOOR",
    "Ordering",
    "Version",
    "compare",
    "max_version",
    "min_version",
]

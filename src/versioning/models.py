"""Data models for version ranges and their aggregation."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .version import NO_CEILING, NO_FLOOR, Comparable, Ordering, Unbounded, Version, compare


@dataclass(frozen=True)
class Bound:
    """One edge of an interval: a value plus an inclusive/exclusive flag.

    Unbounded edges are never inclusive.
    """
    value: Comparable
    inclusive: bool = False

    def __post_init__(self):
        if isinstance(self.value, Unbounded) and self.inclusive:
            object.__setattr__(self, "inclusive", False)

    @staticmethod
    def including(version: Version) -> "Bound":
        return Bound(version, True)

    @staticmethod
    def excluding(version: Version) -> "Bound":
        return Bound(version, False)

    @property
    def unbounded(self) -> bool:
        return isinstance(self.value, Unbounded)

    @property
    def version(self) -> Optional[Version]:
        """The concrete version, or None for an unbounded edge."""
        return None if self.unbounded else self.value  # type: ignore[return-value]


NO_LOWER = Bound(NO_FLOOR)
NO_UPPER = Bound(NO_CEILING)


@dataclass(frozen=True)
class Interval:
    """All versions between ``lower`` and ``upper``, honoring inclusivity."""
    lower: Bound = NO_LOWER
    upper: Bound = NO_UPPER

    @property
    def is_empty(self) -> bool:
        order = compare(self.lower.value, self.upper.value)
        if order is Ordering.GREATER:
            return True
        if order is Ordering.EQUAL:
            return not (self.lower.inclusive and self.upper.inclusive)
        return False

    @property
    def is_unbounded(self) -> bool:
        return self.lower.unbounded and self.upper.unbounded

    def __str__(self) -> str:
        if self.is_unbounded:
            return "*"
        parts = []
        if not self.lower.unbounded:
            parts.append(f"{'>=' if self.lower.inclusive else '>'}{self.lower.value}")
        if not self.upper.unbounded:
            parts.append(f"{'<=' if self.upper.inclusive else '<'}{self.upper.value}")
        return " ".join(parts)


UNBOUNDED = Interval(NO_LOWER, NO_UPPER)


@dataclass(frozen=True)
class ConstraintSet:
    """A parsed engine-range expression.

    ``groups`` holds one interval per ``||`` branch; ``interval`` is their
    collapsed union. A malformed expression resolves to ``UNBOUNDED`` with
    ``well_formed`` False and the reasons in ``diagnostics``.
    """
    raw: Optional[str]
    groups: Tuple[Interval, ...]
    interval: Interval
    well_formed: bool = True
    diagnostics: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AggregationStep:
    """Trace entry for one participant folded into the aggregate."""
    name: str
    raw: Optional[str]
    interval: Interval
    running: Interval
    well_formed: bool = True


@dataclass(frozen=True)
class AggregationResult:
    """Intersection of every participant's interval."""
    global_lower: Bound
    global_upper: Bound
    conflict: bool
    steps: Tuple[AggregationStep, ...] = field(default=())
    malformed: Tuple[str, ...] = field(default=())

    @property
    def interval(self) -> Interval:
        return Interval(self.global_lower, self.global_upper)

    @property
    def global_min(self) -> Optional[str]:
        version = self.global_lower.version
        return None if version is None else str(version)

    @property
    def global_max(self) -> Optional[str]:
        version = self.global_upper.version
        return None if version is None else str(version)

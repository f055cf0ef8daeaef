"""Version value type and the total ordering used by the range engine.

Versions are dotted component sequences with an optional pre-release tag.
``NO_FLOOR`` and ``NO_CEILING`` stand in for a missing lower or upper edge
and order below and above every concrete version respectively.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple, Union

Component = Union[int, str]


class Ordering(IntEnum):
    """Outcome of :func:`compare`."""
    LESS = -1
    EQUAL = 0
    GREATER = 1

    @classmethod
    def of(cls, delta: int) -> "Ordering":
        if delta < 0:
            return cls.LESS
        if delta > 0:
            return cls.GREATER
        return cls.EQUAL


@dataclass(frozen=True)
class Version:
    """Comparable dotted version.

    ``components`` always has at least three entries. Integer entries are
    numeric components; string entries keep a non-numeric component as
    written (for example the ``beta`` in ``1.beta.0``).
    """
    components: Tuple[Component, ...]
    prerelease: Optional[str] = None

    @staticmethod
    def parse(text: str) -> "Version":
        """Parse ``text`` into a Version.

        Accepts an optional leading ``v``/``=``, ignores ``+build`` metadata
        and zero-pads to three components.

        Raises:
            ValueError: if the text is empty or has an empty component.
        """
        if not isinstance(text, str):
            raise ValueError(f"Invalid version: {text!r}")
        body = text.strip().lstrip("=").lstrip("vV").split("+", 1)[0]
        core, _, prerelease = body.partition("-")
        if not core:
            raise ValueError(f"Invalid version: {text!r}")

        parts = core.split(".")
        if any(p == "" for p in parts):
            raise ValueError(f"Invalid version: {text!r}")
        components = [int(p) if p.isdigit() else p for p in parts]
        return Version.of(components, prerelease or None)

    @staticmethod
    def of(components, prerelease: Optional[str] = None) -> "Version":
        """Build a normalized Version from raw components."""
        comps = list(components)
        while len(comps) < 3:
            comps.append(0)
        # 1.2.3.0 and 1.2.3 are the same version
        while len(comps) > 3 and comps[-1] == 0:
            comps.pop()
        return Version(tuple(comps), prerelease)

    @property
    def major(self) -> Component:
        return self.components[0]

    @property
    def minor(self) -> Component:
        return self.components[1]

    @property
    def patch(self) -> Component:
        return self.components[2]

    def __str__(self) -> str:
        text = ".".join(str(c) for c in self.components)
        if self.prerelease:
            text = f"{text}-{self.prerelease}"
        return text


@dataclass(frozen=True)
class Unbounded:
    """A missing edge. Which edge it is decides where it sorts."""
    side: str

    def __str__(self) -> str:
        return "*"


NO_FLOOR = Unbounded("floor")
NO_CEILING = Unbounded("ceiling")

Comparable = Union[Version, Unbounded]


def _rank(value: Comparable) -> int:
    if isinstance(value, Unbounded):
        return -1 if value.side == NO_FLOOR.side else 1
    return 0


def _compare_component(a: Component, b: Component) -> int:
    a_num = isinstance(a, int)
    b_num = isinstance(b, int)
    if a_num and b_num:
        return (a > b) - (a < b)
    if a_num:
        return 1
    if b_num:
        return -1
    # non-numeric against non-numeric is a tie at this position
    return 0


def compare(a: Comparable, b: Comparable) -> Ordering:
    """Order two versions or unbounded edges.

    Missing trailing components count as zero. At equal components a
    pre-release sorts before the plain release and two pre-release tags
    compare by code point.
    """
    rank_a, rank_b = _rank(a), _rank(b)
    if rank_a or rank_b:
        return Ordering.of(rank_a - rank_b)

    width = max(len(a.components), len(b.components))
    for i in range(width):
        ca = a.components[i] if i < len(a.components) else 0
        cb = b.components[i] if i < len(b.components) else 0
        delta = _compare_component(ca, cb)
        if delta:
            return Ordering.of(delta)

    if a.prerelease and not b.prerelease:
        return Ordering.LESS
    if b.prerelease and not a.prerelease:
        return Ordering.GREATER
    pa, pb = a.prerelease or "", b.prerelease or ""
    return Ordering.of((pa > pb) - (pa < pb))


def min_version(a: Comparable, b: Comparable) -> Comparable:
    """Return the lesser of ``a`` and ``b`` (``a`` on ties)."""
    return a if compare(a, b) <= Ordering.EQUAL else b


def max_version(a: Comparable, b: Comparable) -> Comparable:
    """Return the greater of ``a`` and ``b`` (``a`` on ties)."""
    return a if compare(a, b) >= Ordering.EQUAL else b

"""Engine-range parsing: constraint strings to canonical intervals.

Grammar::

    expression := and_group ("||" and_group)*
    and_group  := atom+                  (whitespace separated)
    atom       := op? version            op in <, <=, >, >=, =, ^, ~

``A - B`` hyphen ranges and ``1.x``/``1.2.*`` x-ranges are accepted as well.
Parsing never raises: a malformed expression resolves to the unbounded
interval and is flagged through ``ConstraintSet.well_formed``.
"""

import logging
import re
from typing import List, Optional, Sequence

import semantic_version

from common.logging_utils import extra_context, is_debug_enabled
from .intervals import intersect_all, union_all
from .models import NO_LOWER, NO_UPPER, UNBOUNDED, Bound, ConstraintSet, Interval
from .version import Version

logger = logging.getLogger(__name__)

_OR_SPLIT = re.compile(r"\s*\|\|\s*")
_HYPHEN = re.compile(r"^(\S+)\s+-\s+(\S+)$")
_OPERATOR_GAP = re.compile(r"(<=|>=|<|>|=|\^|~)\s+")
_ATOM = re.compile(
    r"^(?P<op><=|>=|<|>|=|\^|~)?"
    r"[vV]?(?P<major>\d+|[xX*])"
    r"(?:\.(?P<minor>\d+|[xX*]))?"
    r"(?:\.(?P<patch>\d+|[xX*]))?"
    r"(?:-(?P<pre>[0-9A-Za-z][0-9A-Za-z.-]*))?"
    r"(?:\+[0-9A-Za-z.-]+)?$"
)
_PARTIAL = re.compile(r"^[vV]?\d+(?:\.\d+)?$")
_WILDCARDS = {"x", "X", "*"}
_MAX_COMPONENT_DIGITS = 64


class RangeSyntaxError(ValueError):
    """Raised internally for a token the grammar does not accept."""


def _semver(components: Sequence[int]) -> semantic_version.Version:
    major, minor, patch = components
    return semantic_version.Version(major=major, minor=minor, patch=patch)


def _from_semver(version: semantic_version.Version) -> Version:
    return Version.of((version.major, version.minor, version.patch))


def caret_ceiling(components: Sequence[int]) -> Version:
    """Exclusive upper edge implied by ``^major.minor.patch``."""
    major, minor, _ = components
    base = _semver(components)
    if major > 0:
        return _from_semver(base.next_major())
    if minor > 0:
        return _from_semver(base.next_minor())
    return _from_semver(base.next_patch())


def tilde_ceiling(components: Sequence[int]) -> Version:
    """Exclusive upper edge implied by ``~major.minor.patch``."""
    major, minor, _ = components
    base = _semver(components)
    if major > 0 or minor > 0:
        return _from_semver(base.next_minor())
    return _from_semver(base.next_patch())


def _x_ceiling(fixed: List[int]) -> Version:
    """Exclusive upper edge of a ``1.x`` style range given the numeric prefix."""
    padded = list(Version.of(fixed).components[:3])
    if len(fixed) == 1:
        return _from_semver(_semver(padded).next_major())
    return _from_semver(_semver(padded).next_minor())


def _x_range(fixed: List[int]) -> Interval:
    """Interval for ``1.x`` style ranges given the numeric prefix."""
    return Interval(Bound.including(Version.of(fixed)), Bound.excluding(_x_ceiling(fixed)))


def _to_int(part: str, token: str) -> int:
    if len(part) > _MAX_COMPONENT_DIGITS:
        raise RangeSyntaxError(f"Version component too large in '{token}'")
    try:
        return int(part)
    except ValueError as exc:
        raise RangeSyntaxError(f"Version component too large in '{token}'") from exc


def parse_atom(token: str) -> Interval:
    """Interval implied by a single ``op version`` token.

    Raises:
        RangeSyntaxError: if the token is not a recognised comparator.
    """
    match = _ATOM.match(token)
    if not match:
        raise RangeSyntaxError(f"Unrecognized constraint token '{token}'")

    op = match.group("op") or "="
    raw_parts = [match.group("major"), match.group("minor"), match.group("patch")]
    prerelease = match.group("pre")

    if raw_parts[0] in _WILDCARDS:
        return UNBOUNDED

    wildcard_at = next(
        (i for i, p in enumerate(raw_parts) if p is not None and p in _WILDCARDS), None
    )
    if wildcard_at is not None and prerelease:
        raise RangeSyntaxError(f"Pre-release tag on wildcard version '{token}'")

    if op == "=" and wildcard_at is not None:
        return _x_range([_to_int(p, token) for p in raw_parts[:wildcard_at]])

    if op == "<=" and wildcard_at is not None:
        ceiling = _x_ceiling([_to_int(p, token) for p in raw_parts[:wildcard_at]])
        return Interval(NO_LOWER, Bound.excluding(ceiling))

    # remaining wildcard components after a comparison operator are zero filled
    components = [0 if p is None or p in _WILDCARDS else _to_int(p, token) for p in raw_parts]
    version = Version.of(components, prerelease)

    if op in (">=", ">"):
        # ">" is treated as inclusive at the version itself
        return Interval(Bound.including(version), NO_UPPER)
    if op == "<=":
        return Interval(NO_LOWER, Bound.including(version))
    if op == "<":
        return Interval(NO_LOWER, Bound.excluding(version))
    if op == "^":
        return Interval(Bound.including(version), Bound.excluding(caret_ceiling(components)))
    if op == "~":
        return Interval(Bound.including(version), Bound.excluding(tilde_ceiling(components)))
    return Interval(Bound.including(version), Bound.including(version))


def _split_atoms(group: str) -> List[str]:
    hyphen = _HYPHEN.match(group)
    if hyphen:
        upper = hyphen.group(2)
        if _PARTIAL.match(upper):
            # a partial upper end covers its whole major or minor line
            upper += ".x"
        return [f">={hyphen.group(1)}", f"<={upper}"]
    return _OPERATOR_GAP.sub(r"\1", group).split()


def parse_group(group: str) -> Interval:
    """Intersection of the atoms of one AND-group; may be empty."""
    group = group.strip()
    if not group:
        return UNBOUNDED
    return intersect_all(parse_atom(token) for token in _split_atoms(group))


def parse_range(expression: Optional[str]) -> ConstraintSet:
    """Parse an engine-range expression into a :class:`ConstraintSet`.

    ``None``, empty and whitespace-only expressions mean no constraint.
    Disjoint ``||`` branches are collapsed into their hull.
    """
    if expression is None or (isinstance(expression, str) and not expression.strip()):
        return ConstraintSet(raw=expression, groups=(UNBOUNDED,), interval=UNBOUNDED)

    if not isinstance(expression, str):
        return ConstraintSet(
            raw=None,
            groups=(),
            interval=UNBOUNDED,
            well_formed=False,
            diagnostics=(f"Expected a string range, got {type(expression).__name__}",),
        )

    groups: List[Interval] = []
    diagnostics: List[str] = []
    for part in _OR_SPLIT.split(expression.strip()):
        try:
            groups.append(parse_group(part))
        except RangeSyntaxError as exc:
            diagnostics.append(str(exc))

    if diagnostics:
        if is_debug_enabled(logger):
            logger.debug(
                "Malformed range",
                extra=extra_context(
                    event="parse",
                    component="range_parser",
                    action="parse_range",
                    outcome="malformed",
                    expression=expression,
                    reasons="; ".join(diagnostics),
                ),
            )
        return ConstraintSet(
            raw=expression,
            groups=(),
            interval=UNBOUNDED,
            well_formed=False,
            diagnostics=tuple(diagnostics),
        )

    interval = union_all(groups)
    if is_debug_enabled(logger):
        logger.debug(
            "Parsed range",
            extra=extra_context(
                event="parse",
                component="range_parser",
                action="parse_range",
                outcome="empty" if interval.is_empty else "success",
                expression=expression,
                groups=len(groups),
                interval=str(interval),
            ),
        )
    return ConstraintSet(raw=expression, groups=tuple(groups), interval=interval)

"""Fold every participant's engine range into one global interval."""

import logging
from typing import List, Optional, Sequence, Union

from common.logging_utils import extra_context, is_debug_enabled
from .intervals import intersect
from .models import UNBOUNDED, AggregationResult, AggregationStep, ConstraintSet, Interval
from .parser import parse_range

logger = logging.getLogger(__name__)

ConstraintInput = Union[ConstraintSet, Optional[str]]


def _as_constraint_set(constraint: ConstraintInput) -> ConstraintSet:
    if isinstance(constraint, ConstraintSet):
        return constraint
    return parse_range(constraint)


class Aggregator:
    """Running intersection over participants, fed one at a time.

    Participants are folded in the order they are added; the order only
    affects the trace, never the final interval.
    """

    def __init__(self) -> None:
        self._running: Interval = UNBOUNDED
        self._steps: List[AggregationStep] = []
        self._malformed: List[str] = []

    @property
    def running(self) -> Interval:
        return self._running

    def add(self, name: str, constraint: ConstraintInput) -> AggregationStep:
        """Intersect the running interval with ``constraint``.

        A missing constraint contributes no restriction.
        """
        parsed = _as_constraint_set(constraint)
        self._running = intersect(self._running, parsed.interval)
        if not parsed.well_formed:
            self._malformed.append(name)

        step = AggregationStep(
            name=name,
            raw=parsed.raw,
            interval=parsed.interval,
            running=self._running,
            well_formed=parsed.well_formed,
        )
        self._steps.append(step)

        if is_debug_enabled(logger):
            logger.debug(
                "Folded participant",
                extra=extra_context(
                    event="aggregate",
                    component="aggregator",
                    action="add",
                    outcome="empty" if self._running.is_empty else "ok",
                    participant=name,
                    constraint=parsed.raw,
                    interval=str(parsed.interval),
                    running=str(self._running),
                ),
            )
        return step

    def result(self) -> AggregationResult:
        return AggregationResult(
            global_lower=self._running.lower,
            global_upper=self._running.upper,
            conflict=self._running.is_empty,
            steps=tuple(self._steps),
            malformed=tuple(self._malformed),
        )


def aggregate(
    constraints: Sequence[ConstraintInput],
    names: Optional[Sequence[str]] = None,
) -> AggregationResult:
    """Intersect all ``constraints`` left to right.

    The first entry is conventionally the project's own range. ``names``
    labels the trace; entries default to their position.
    """
    aggregator = Aggregator()
    for index, constraint in enumerate(constraints):
        name = names[index] if names is not None and index < len(names) else f"#{index}"
        aggregator.add(name, constraint)
    return aggregator.result()

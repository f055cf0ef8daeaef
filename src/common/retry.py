"""Retry helper for flaky local reads.

The policy is passed in explicitly by the caller; nothing here keeps
process-wide state.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Tuple, Type, TypeVar

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to retry and how long to wait between attempts."""
    max_retries: int = Constants.READ_RETRY_MAX
    delay_sec: float = Constants.READ_RETRY_DELAY_SEC


NO_RETRY = RetryPolicy(max_retries=0, delay_sec=0.0)


def with_retries(
    func: Callable[[], T],
    policy: RetryPolicy,
    operation_name: str = "Unnamed operation",
    *,
    retry_on: Tuple[Type[BaseException], ...] = (OSError,),
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``func`` until it succeeds or ``policy.max_retries`` retries are used.

    Only exceptions in ``retry_on`` are retried; the last one is re-raised
    unchanged once the retries are exhausted.
    """
    failures = 0
    while True:
        try:
            result = func()
        except retry_on as exc:
            failures += 1
            if failures > policy.max_retries:
                logger.error(
                    "%s failed after %d attempt(s): %s",
                    operation_name,
                    policy.max_retries + 1,
                    exc,
                )
                raise
            logger.warning(
                "%s failed (attempt %d of %d), retrying in %ss: %s",
                operation_name,
                failures,
                policy.max_retries + 1,
                policy.delay_sec,
                exc,
            )
            sleep(policy.delay_sec)
            continue
        if failures and is_debug_enabled(logger):
            logger.debug(
                "Retry succeeded",
                extra=extra_context(
                    event="retry",
                    component="retry",
                    action=operation_name,
                    outcome="success",
                    attempts=failures + 1,
                ),
            )
        return result

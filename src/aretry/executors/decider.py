r"""Retry decision logic.

This module provides the RetryDecider class that decides whether a
failed attempt is retried, based on the time budget, the retry budget,
and the ``should_retry`` predicate.
"""

from __future__ import annotations

__all__ = ["RetryDecider"]

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aretry.context import RetryContext
    from aretry.core.config import RetryConfig

logger: logging.Logger = logging.getLogger(__name__)


class RetryDecider:
    """Decides whether a failed attempt should be retried.

    The budget checks are split from the ``should_retry`` predicate so the
    executors can skip the predicate, which may be a coroutine function,
    once a budget is exhausted.

    Args:
        config: The retry policy.
    """

    def __init__(self, config: RetryConfig) -> None:
        self.config = config

    def time_left(self, start_time: float) -> float:
        """Compute the time left in the budget of the run.

        Args:
            start_time: Clock reading captured before the first attempt.

        Returns:
            Milliseconds left, possibly negative or ``math.inf``.
        """
        elapsed = (self.config.clock() - start_time) * 1000
        return self.config.max_retry_time - elapsed

    def budget_allows_retry(self, context: RetryContext, time_left: float) -> bool:
        """Check the time budget and the retry budget.

        Args:
            context: The context of the failed attempt.
            time_left: Milliseconds left in the time budget.

        Returns:
            ``True`` if time is left and the failure was skipped or retries
            are left.
        """
        if time_left <= 0:
            logger.debug(f"Attempt {context.attempt_number}: time budget exhausted")
            return False
        if not context.skip and context.retries_left <= 0:
            logger.debug(f"Attempt {context.attempt_number}: no retries left")
            return False
        return True

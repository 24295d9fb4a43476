r"""Retry strategy for calculating backoff delays.

This module provides the RetryStrategy class for calculating retry
delays.
"""

from __future__ import annotations

__all__ = ["RetryStrategy"]

import logging
from typing import TYPE_CHECKING

from aretry.backoff import ExponentialBackoff

if TYPE_CHECKING:
    from aretry.context import RetryContext
    from aretry.core.config import RetryConfig

logger: logging.Logger = logging.getLogger(__name__)


class RetryStrategy:
    """Strategy for calculating the delay awaited before the next attempt.

    Skipped failures do not count toward the backoff index, and the
    delay never extends past the time budget of the run.

    Args:
        config: The retry policy.

    Attributes:
        backoff: The exponential backoff built from the policy.
    """

    def __init__(self, config: RetryConfig) -> None:
        self.backoff = ExponentialBackoff(
            min_timeout=config.min_timeout,
            factor=config.factor,
            max_timeout=config.max_timeout,
            randomize=config.randomize,
            random_source=config.random,
        )

    def calculate_delay(self, context: RetryContext, time_left: float) -> float:
        """Calculate delay before next attempt.

        Args:
            context: The context of the failed attempt.
            time_left: Milliseconds left in the time budget.

        Returns:
            Delay in milliseconds.
        """
        attempt = context.attempt_number - context.skipped_retries
        delay = self.backoff.calculate(attempt)
        if delay > time_left:
            logger.debug(f"Capping delay from {delay}ms to {time_left:.0f}ms (time budget)")
            return time_left
        return delay

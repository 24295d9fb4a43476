r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

import math
import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class ExponentialBackoff:
    """Exponential backoff strategy with optional jitter.

    Calculates delay as: round(jitter * min_timeout * factor ** (attempt - 1)),
    capped at max_timeout. The jitter is 1 unless ``randomize`` is set, in
    which case it is drawn uniformly from [1, 2).

    Args:
        min_timeout: The delay in milliseconds before the first retry.
        factor: The exponential factor. Must be positive.
        max_timeout: The maximum delay in milliseconds.
        randomize: Whether to apply jitter.
        random_source: Source of random numbers in [0, 1).

    Example:
        ```pycon
        >>> from aretry.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(min_timeout=100, factor=2)
        >>> backoff.calculate(1)  # First retry
        100
        >>> backoff.calculate(2)  # Second retry
        200
        >>> backoff.calculate(3)  # Third retry
        400
        >>> # With max_timeout cap
        >>> backoff = ExponentialBackoff(min_timeout=100, factor=3, max_timeout=150)
        >>> backoff.calculate(3)  # Would be 900, but capped
        150

        ```
    """

    def __init__(
        self,
        min_timeout: float = 1000.0,
        factor: float = 2.0,
        max_timeout: float = math.inf,
        randomize: bool = False,
        random_source: Callable[[], float] = random.random,
    ) -> None:
        if min_timeout < 0:
            msg = f"min_timeout must be non-negative, got {min_timeout}"
            raise ValueError(msg)
        if factor <= 0:
            msg = f"factor must be positive, got {factor}"
            raise ValueError(msg)
        if max_timeout < 0:
            msg = f"max_timeout must be non-negative, got {max_timeout}"
            raise ValueError(msg)

        self.min_timeout = min_timeout
        self.factor = factor
        self.max_timeout = max_timeout
        self.randomize = randomize
        self.random_source = random_source

    def calculate(self, attempt: int) -> float:
        """Calculate the delay before the next attempt.

        Args:
            attempt: The backoff index (1-indexed). Values below 1 are
                treated as 1.

        Returns:
            The delay in whole milliseconds, capped at ``max_timeout``.
        """
        attempt = max(1, attempt)
        jitter = 1 + self.random_source() if self.randomize else 1
        try:
            delay = round(jitter * self.min_timeout * self.factor ** (attempt - 1))
        except OverflowError:
            delay = math.inf if self.min_timeout > 0 else 0
        return min(delay, self.max_timeout)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(min_timeout={self.min_timeout}, "
            f"factor={self.factor}, max_timeout={self.max_timeout}, randomize={self.randomize})"
        )

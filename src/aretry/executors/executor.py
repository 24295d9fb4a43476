r"""Synchronous retry executor.

This module provides the RetryExecutor class, the blocking counterpart
of AsyncRetryExecutor. Callbacks must be plain functions and delays
block the calling thread.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
from typing import TYPE_CHECKING, TypeVar

from aretry.core.classifier import classify_error
from aretry.executors.decider import RetryDecider
from aretry.executors.executor_core import RunState, build_context, mark_skipped
from aretry.executors.manager import CallbackManager
from aretry.executors.strategy import RetryStrategy
from aretry.utils.cancellation import raise_if_cancelled
from aretry.utils.sleep import sleep

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.core.config import RetryConfig

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Runs a blocking operation until it succeeds or the retry policy
    stops it.

    A running attempt cannot be interrupted: the cancellation signal is
    checked before and after each attempt, and it interrupts delays.

    Attributes:
        config: The retry policy.
        strategy: Strategy for calculating retry delays.
        decider: Logic for deciding whether to retry.
        callbacks: Manager for invoking callbacks.

    Example:
        ```pycon
        >>> from aretry.core.config import RetryConfig
        >>> from aretry.executors import RetryExecutor
        >>> def read(attempt: int) -> str:
        ...     if attempt < 2:
        ...         raise OSError("resource busy")
        ...     return "data"
        ...
        >>> RetryExecutor(RetryConfig(min_timeout=10)).execute(read)
        'data'

        ```
    """

    def __init__(self, config: RetryConfig) -> None:
        self.config = config
        self.strategy: RetryStrategy = RetryStrategy(config)
        self.decider: RetryDecider = RetryDecider(config)
        self.callbacks: CallbackManager = CallbackManager(config)

    def execute(self, operation: Callable[[int], T]) -> T:
        """Run ``operation`` with automatic retry logic.

        Args:
            operation: The operation to run. It receives the attempt
                number (1-indexed).

        Returns:
            The value returned by the first successful attempt.

        Raises:
            BaseException: The last classified error when retrying stops,
                the cancellation error, or the exception raised by a
                callback.
        """
        signal = self.config.signal
        raise_if_cancelled(signal)
        state = RunState(start_time=self.config.clock())

        while True:
            state.attempt_number += 1
            raise_if_cancelled(signal)
            try:
                result = operation(state.attempt_number)
            except Exception as exc:  # noqa: BLE001
                error: BaseException = exc
            else:
                raise_if_cancelled(signal)
                logger.debug(f"Attempt {state.attempt_number} succeeded")
                return result

            self._on_attempt_failure(error, state)

    def _on_attempt_failure(self, error: BaseException, state: RunState) -> None:
        failure = classify_error(error, self.config.is_network_error, self.config.signal)
        if failure.is_terminal:
            logger.debug(
                f"Attempt {state.attempt_number} failed with {failure.kind.value} error "
                f"{type(failure.error).__name__}: {failure.error}"
            )
            raise failure.error

        context = build_context(self.config, state, failure.error)
        try:
            skip = self.callbacks.should_skip(context)
        except Exception:
            self.callbacks.on_failed_attempt(context)
            raise
        if skip:
            context = mark_skipped(context)
            logger.debug(f"Attempt {state.attempt_number} failure skipped")

        logger.debug(
            f"Attempt {context.attempt_number} failed with {type(context.error).__name__}: "
            f"{context.error} ({context.retries_left} retries left)"
        )
        self.callbacks.on_failed_attempt(context)

        time_left = self.decider.time_left(state.start_time)
        if not self.decider.budget_allows_retry(
            context, time_left
        ) or not self.callbacks.should_retry(context):
            raise failure.error

        if context.skip:
            logger.debug(f"Retrying skipped attempt {state.attempt_number} without delay")
        else:
            state.retries_used += 1
            delay = self.strategy.calculate_delay(context, time_left)
            if delay > 0:
                logger.debug(f"Waiting {delay}ms before attempt {state.attempt_number + 1}")
                sleep(delay, self.config.signal)
        raise_if_cancelled(self.config.signal)

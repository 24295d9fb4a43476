r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that runs an operation
under a retry policy, awaiting user callbacks and cancellable delays on
the running event loop.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from aretry.core.classifier import classify_error
from aretry.executors.decider import RetryDecider
from aretry.executors.executor_core import RunState, build_context, mark_skipped
from aretry.executors.manager import CallbackManager, resolve
from aretry.executors.strategy import RetryStrategy
from aretry.utils.cancellation import raise_if_cancelled, run_cancellable
from aretry.utils.sleep import sleep_async

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.core.config import RetryConfig

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Runs an operation until it succeeds or the retry policy stops it.

    The executor orchestrates the following components:
    - RetryStrategy: Calculates the delay before the next attempt
    - RetryDecider: Checks the time budget and the retry budget
    - CallbackManager: Invokes ``on_failed_attempt``, ``should_retry`` and
      ``should_skip``

    Attributes:
        config: The retry policy.
        strategy: Strategy for calculating retry delays.
        decider: Logic for deciding whether to retry.
        callbacks: Manager for invoking callbacks.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.core.config import RetryConfig
        >>> from aretry.executors import AsyncRetryExecutor
        >>> async def fetch(attempt: int) -> str:
        ...     if attempt < 3:
        ...         raise ConnectionError("connection reset")
        ...     return f"succeeded on attempt {attempt}"
        ...
        >>> executor = AsyncRetryExecutor(RetryConfig(min_timeout=10))
        >>> asyncio.run(executor.execute(fetch))
        'succeeded on attempt 3'

        ```
    """

    def __init__(self, config: RetryConfig) -> None:
        self.config = config
        self.strategy: RetryStrategy = RetryStrategy(config)
        self.decider: RetryDecider = RetryDecider(config)
        self.callbacks: CallbackManager = CallbackManager(config)

    async def execute(self, operation: Callable[[int], Awaitable[T] | T]) -> T:
        """Run ``operation`` with automatic retry logic.

        The operation receives the attempt number (1-indexed) and may be a
        coroutine function or a plain function. Any returned value,
        including ``None``, is a success.

        The retry loop handles:
        - ``AbortError``: Raises its original error immediately
        - ``TypeError`` that is not a network error: Raises immediately
        - Other exceptions: Invokes the callbacks, then retries with backoff
          while the retry budget, the time budget and ``should_retry``
          allow it

        Cancellation through the policy signal is checked before each
        attempt, and it interrupts both a running attempt and a delay.

        Args:
            operation: The operation to run.

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
                result = await run_cancellable(self._call(operation, state.attempt_number), signal)
            except Exception as exc:  # noqa: BLE001
                error: BaseException = exc
            else:
                raise_if_cancelled(signal)
                logger.debug(f"Attempt {state.attempt_number} succeeded")
                return result

            await self._on_attempt_failure(error, state)

    async def _call(self, operation: Callable[[int], Any], attempt_number: int) -> Any:
        return await resolve(operation(attempt_number))

    async def _on_attempt_failure(self, error: BaseException, state: RunState) -> None:
        """Process a failed attempt.

        Returns normally when the next attempt should run.

        Raises:
            BaseException: The error ending the run.
        """
        failure = classify_error(error, self.config.is_network_error, self.config.signal)
        if failure.is_terminal:
            logger.debug(
                f"Attempt {state.attempt_number} failed with {failure.kind.value} error "
                f"{type(failure.error).__name__}: {failure.error}"
            )
            raise failure.error

        context = build_context(self.config, state, failure.error)
        try:
            skip = await self.callbacks.should_skip_async(context)
        except Exception:
            await self.callbacks.on_failed_attempt_async(context)
            raise
        if skip:
            context = mark_skipped(context)
            logger.debug(f"Attempt {state.attempt_number} failure skipped")

        logger.debug(
            f"Attempt {context.attempt_number} failed with {type(context.error).__name__}: "
            f"{context.error} ({context.retries_left} retries left)"
        )
        await self.callbacks.on_failed_attempt_async(context)

        time_left = self.decider.time_left(state.start_time)
        if not self.decider.budget_allows_retry(
            context, time_left
        ) or not await self.callbacks.should_retry_async(context):
            raise failure.error

        if context.skip:
            logger.debug(f"Retrying skipped attempt {state.attempt_number} without delay")
        else:
            state.retries_used += 1
            delay = self.strategy.calculate_delay(context, time_left)
            if delay > 0:
                logger.debug(f"Waiting {delay}ms before attempt {state.attempt_number + 1}")
                await sleep_async(delay, self.config.signal, self.config.unref)
        raise_if_cancelled(self.config.signal)

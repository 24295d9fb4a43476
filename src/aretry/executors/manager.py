r"""Callback manager for the retry lifecycle.

This module provides the CallbackManager class that invokes the
user-defined callbacks of a retry policy. Each callback has a sync and an
async entry point; the async one also awaits callbacks returning an
awaitable.
"""

from __future__ import annotations

__all__ = ["CallbackManager", "resolve"]

import inspect
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from aretry.context import RetryContext
    from aretry.core.config import RetryConfig


async def resolve(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it.

    Args:
        value: A plain value or an awaitable.

    Returns:
        The value, or the result of awaiting it.
    """
    if inspect.isawaitable(value):
        return await value
    return value


class CallbackManager:
    """Invokes the callbacks of a retry policy.

    Exceptions raised by a callback are never caught here; they end the
    run and replace the failure of the attempt.

    Attributes:
        config: The retry policy holding the callbacks.
    """

    def __init__(self, config: RetryConfig) -> None:
        """Initialize callback manager.

        Args:
            config: The retry policy.
        """
        self.config = config

    def on_failed_attempt(self, context: RetryContext) -> None:
        """Invoke ``on_failed_attempt``.

        Args:
            context: The context of the failed attempt.
        """
        self.config.on_failed_attempt(context)

    def should_retry(self, context: RetryContext) -> bool:
        """Invoke ``should_retry``.

        Args:
            context: The context of the failed attempt.

        Returns:
            The truthiness of the predicate result.
        """
        return bool(self.config.should_retry(context))

    def should_skip(self, context: RetryContext) -> bool:
        """Invoke ``should_skip``.

        Args:
            context: The context of the failed attempt, with ``skip`` unset.

        Returns:
            The truthiness of the predicate result.
        """
        return bool(self.config.should_skip(context))

    async def on_failed_attempt_async(self, context: RetryContext) -> None:
        """Invoke ``on_failed_attempt`` and await its result if needed."""
        await resolve(self.config.on_failed_attempt(context))

    async def should_retry_async(self, context: RetryContext) -> bool:
        """Invoke ``should_retry`` and await its result if needed."""
        return bool(await resolve(self.config.should_retry(context)))

    async def should_skip_async(self, context: RetryContext) -> bool:
        """Invoke ``should_skip`` and await its result if needed."""
        return bool(await resolve(self.config.should_skip(context)))

r"""Retry an async or sync operation from a coroutine.

This module provides ``retry_async``, the main entry point of aretry, and
``make_retriable_async`` which wraps a function so that every call is
retried.
"""

from __future__ import annotations

__all__ = ["make_retriable_async", "retry_async"]

import functools
from typing import TYPE_CHECKING, Any, TypeVar

from aretry.core.config import normalize_options
from aretry.executors.executor_async import AsyncRetryExecutor
from aretry.executors.manager import resolve

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Coroutine

    from aretry.core.config import RetryConfig

T = TypeVar("T")


async def retry_async(
    operation: Callable[[int], Awaitable[T] | T],
    *,
    config: RetryConfig | None = None,
    **options: Any,
) -> T:
    """Run ``operation`` until it succeeds or the retry policy stops it.

    The operation receives the attempt number (1-indexed). It is retried
    when it raises, except for ``AbortError`` (its original error is
    raised instead) and ``TypeError`` that is not a network error.
    Callbacks may be coroutine functions.

    Args:
        operation: A coroutine function or plain function of the attempt
            number.
        config: Optional retry policy. Defaults to ``RetryConfig()``.
        **options: Policy fields overriding ``config``, for example
            ``retries=5`` or ``min_timeout=100``.

    Returns:
        The value returned by the first successful attempt.

    Raises:
        ValidationError: If the options are invalid. Raised before the
            first attempt.
        BaseException: The last error of the operation when retrying stops,
            the cancellation error, or the exception raised by a callback.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry import AbortError, retry_async
        >>> async def run(attempt: int) -> str:
        ...     if attempt < 3:
        ...         raise ConnectionError("connection reset")
        ...     return "done"
        ...
        >>> asyncio.run(retry_async(run, retries=5, min_timeout=10))
        'done'

        ```
    """
    effective = normalize_options(config, **options)
    return await AsyncRetryExecutor(effective).execute(operation)


def make_retriable_async(
    func: Callable[..., Awaitable[T] | T],
    *,
    config: RetryConfig | None = None,
    **options: Any,
) -> Callable[..., Coroutine[Any, Any, T]]:
    """Wrap ``func`` so that every call is retried.

    Calling the wrapper with some arguments retries ``func`` called with
    the same arguments. The wrapper is a plain function, so decorating a
    method forwards ``self`` unchanged.

    Args:
        func: The function to wrap. It may be a coroutine function.
        config: Optional retry policy.
        **options: Policy fields overriding ``config``.

    Returns:
        A coroutine function with the signature of ``func``.

    Raises:
        ValidationError: If the options are invalid.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry import make_retriable_async
        >>> calls = []
        >>> async def add(a: int, b: int) -> int:
        ...     calls.append((a, b))
        ...     if len(calls) < 2:
        ...         raise ConnectionError("connection reset")
        ...     return a + b
        ...
        >>> add_with_retry = make_retriable_async(add, min_timeout=10)
        >>> asyncio.run(add_with_retry(1, 2))
        3

        ```
    """
    effective = normalize_options(config, **options)

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        return await AsyncRetryExecutor(effective).execute(
            lambda attempt: resolve(func(*args, **kwargs))  # noqa: ARG005
        )

    return wrapper

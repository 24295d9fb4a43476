r"""Retry a blocking operation.

This module provides ``retry`` and ``make_retriable``, the blocking
counterparts of ``retry_async`` and ``make_retriable_async``.
"""

from __future__ import annotations

__all__ = ["make_retriable", "retry"]

import functools
from typing import TYPE_CHECKING, Any, TypeVar

from aretry.core.config import normalize_options
from aretry.executors.executor import RetryExecutor

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.core.config import RetryConfig

T = TypeVar("T")


def retry(
    operation: Callable[[int], T],
    *,
    config: RetryConfig | None = None,
    **options: Any,
) -> T:
    """Run ``operation`` until it succeeds or the retry policy stops it.

    Args:
        operation: A function of the attempt number (1-indexed).
        config: Optional retry policy. Defaults to ``RetryConfig()``.
        **options: Policy fields overriding ``config``. Callbacks must be
            plain functions.

    Returns:
        The value returned by the first successful attempt.

    Raises:
        ValidationError: If the options are invalid. Raised before the
            first attempt.
        BaseException: The last error of the operation when retrying stops,
            the cancellation error, or the exception raised by a callback.

    Example:
        ```pycon
        >>> from aretry import retry
        >>> retry(lambda attempt: attempt * 10)
        10

        ```
    """
    return RetryExecutor(normalize_options(config, **options)).execute(operation)


def make_retriable(
    func: Callable[..., T],
    *,
    config: RetryConfig | None = None,
    **options: Any,
) -> Callable[..., T]:
    """Wrap ``func`` so that every call is retried.

    Args:
        func: The function to wrap.
        config: Optional retry policy.
        **options: Policy fields overriding ``config``.

    Returns:
        A function with the signature of ``func``.

    Raises:
        ValidationError: If the options are invalid.

    Example:
        ```pycon
        >>> from aretry import make_retriable
        >>> def parse(text: str) -> int:
        ...     return int(text)
        ...
        >>> parse_with_retry = make_retriable(parse, retries=3, min_timeout=10)
        >>> parse_with_retry("42")
        42

        ```
    """
    effective = normalize_options(config, **options)

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        return RetryExecutor(effective).execute(lambda attempt: func(*args, **kwargs))  # noqa: ARG005

    return wrapper

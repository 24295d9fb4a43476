r"""aretry - Retry async and sync operations with exponential backoff.

This package re-invokes a fallible operation according to a backoff
policy until it succeeds, exhausts its retry budget, is explicitly
aborted, is cancelled, or exceeds a wall-clock deadline.

Key Features:
    - Exponential backoff with optional jitter and delay cap
    - Retry budget, with failures that can be skipped without consuming it
    - Wall-clock time budget for the whole run
    - Cooperative cancellation through ``AbortController``
    - ``AbortError`` to stop retrying from inside the operation
    - Callbacks to observe each failure and override each decision
    - Async and sync entry points, and function wrappers

Example:
    ```pycon
    >>> import asyncio
    >>> from aretry import AbortError, retry_async
    >>> async def run(attempt: int) -> str:
    ...     if attempt == 1:
    ...         raise ConnectionError("connection reset")
    ...     return "done"
    ...
    >>> asyncio.run(retry_async(run, retries=5, min_timeout=10))
    'done'

    ```
"""

from __future__ import annotations

__all__ = [
    "AbortController",
    "AbortError",
    "AbortSignal",
    "NonErrorRaisedError",
    "OperationAbortedError",
    "RetryConfig",
    "RetryContext",
    "ValidationError",
    "__version__",
    "is_network_error",
    "make_retriable",
    "make_retriable_async",
    "retry",
    "retry_async",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.context import RetryContext
from aretry.core.config import RetryConfig
from aretry.exceptions import (
    AbortError,
    NonErrorRaisedError,
    OperationAbortedError,
    ValidationError,
)
from aretry.network import is_network_error
from aretry.runner import make_retriable, retry
from aretry.runner_async import make_retriable_async, retry_async
from aretry.signal import AbortController, AbortSignal

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"

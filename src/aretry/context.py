r"""Attempt context handed to user callbacks.

A fresh ``RetryContext`` is built every time an attempt fails. It is
frozen, so a callback can keep a reference to it without later attempts
altering what it sees.

Example:
    ```pycon
    >>> from aretry import retry
    >>> from aretry.context import RetryContext
    >>> def log_failure(context: RetryContext) -> None:
    ...     print(f"Attempt {context.attempt_number} failed, {context.retries_left} retries left")
    ...
    >>> retry(lambda attempt: "ok", on_failed_attempt=log_failure)
    'ok'

    ```
"""

from __future__ import annotations

__all__ = ["RetryContext"]

from dataclasses import dataclass


@dataclass(frozen=True)
class RetryContext:
    """Information passed to ``on_failed_attempt``, ``should_retry`` and
    ``should_skip``.

    Attributes:
        error: The classified exception raised by the failed attempt.
        attempt_number: The attempt that failed (1-indexed).
        retries_left: Remaining retries, or ``math.inf`` when ``retries``
            is unbounded. Skipped failures do not consume retries.
        skipped_retries: Number of failures skipped so far, including this
            one when ``skip`` is ``True``.
        skip: Whether ``should_skip`` marked this failure as skipped.
        start_time: Clock reading captured before the first attempt.
        max_retry_time: Wall-clock budget of the run in milliseconds.
    """

    error: BaseException
    attempt_number: int
    retries_left: float
    skipped_retries: int
    skip: bool
    start_time: float
    max_retry_time: float

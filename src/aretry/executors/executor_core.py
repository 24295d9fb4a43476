r"""Shared core logic for retry executors.

This module provides the run state and the context construction shared
by the synchronous and asynchronous executors.
"""

from __future__ import annotations

__all__ = ["RunState", "build_context", "mark_skipped"]

import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from aretry.context import RetryContext

if TYPE_CHECKING:
    from aretry.core.config import RetryConfig


@dataclass
class RunState:
    """Mutable state of one run, owned by a single executor call.

    Attributes:
        start_time: Clock reading captured before the first attempt.
        attempt_number: The current attempt (1-indexed once started).
        retries_used: Retries consumed by non-skipped failures.
    """

    start_time: float
    attempt_number: int = 0
    retries_used: int = 0


def build_context(config: RetryConfig, state: RunState, error: BaseException) -> RetryContext:
    """Build the context of the failed attempt, before ``should_skip`` runs.

    Args:
        config: The retry policy.
        state: The run state at the failed attempt.
        error: The classified error.

    Returns:
        A fresh context with ``skip`` unset. ``skipped_retries`` counts the
        earlier skipped failures only.
    """
    if math.isinf(config.retries):
        retries_left: float = config.retries
    else:
        retries_left = max(0, config.retries - state.retries_used)
    return RetryContext(
        error=error,
        attempt_number=state.attempt_number,
        retries_left=retries_left,
        skipped_retries=max(0, state.attempt_number - 1 - state.retries_used),
        skip=False,
        start_time=state.start_time,
        max_retry_time=config.max_retry_time,
    )


def mark_skipped(context: RetryContext) -> RetryContext:
    """Return a copy of ``context`` describing a skipped failure.

    Args:
        context: The context built by ``build_context``.

    Returns:
        A new context with ``skip`` set and this failure counted in
        ``skipped_retries``.
    """
    return replace(context, skip=True, skipped_retries=context.skipped_retries + 1)

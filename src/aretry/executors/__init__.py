r"""Attempt loops of aretry.

The async and sync executors run an operation until it succeeds or the
policy stops it. Each executor delegates delays to a strategy, budget
checks to a decider and user callbacks to a callback manager.

Public API:
    - RetryStrategy: Strategy for calculating retry delays
    - RetryDecider: Logic for deciding whether to retry
    - CallbackManager: Manager for callback invocations
    - RetryExecutor: Synchronous retry executor
    - AsyncRetryExecutor: Asynchronous retry executor
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "CallbackManager",
    "RetryDecider",
    "RetryExecutor",
    "RetryStrategy",
]

from aretry.executors.decider import RetryDecider
from aretry.executors.executor import RetryExecutor
from aretry.executors.executor_async import AsyncRetryExecutor
from aretry.executors.manager import CallbackManager
from aretry.executors.strategy import RetryStrategy

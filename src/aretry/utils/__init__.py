r"""Utilities for cancellable waits and signal handling."""

from __future__ import annotations

__all__ = ["raise_if_cancelled", "run_cancellable", "sleep", "sleep_async", "watch_signal"]

from aretry.utils.cancellation import raise_if_cancelled, run_cancellable, watch_signal
from aretry.utils.sleep import sleep, sleep_async

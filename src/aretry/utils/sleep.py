r"""Cancellable delays between attempts.

The async delay races a timer against the cancellation signal and always
clears the timer and the signal listener, whichever finishes first. With
``unref`` the timer runs on a daemon ``threading.Timer`` so a pending
delay never keeps the interpreter alive.
"""

from __future__ import annotations

__all__ = ["sleep", "sleep_async"]

import asyncio
import logging
import threading
import time
from typing import TYPE_CHECKING

from aretry.utils.cancellation import raise_if_cancelled, watch_signal

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.signal import CancellationSignal

logger: logging.Logger = logging.getLogger(__name__)


def _start_timer(
    loop: asyncio.AbstractEventLoop, delay: float, callback: Callable[[], None], unref: bool
) -> asyncio.TimerHandle | threading.Timer:
    if unref:
        timer = threading.Timer(delay, loop.call_soon_threadsafe, args=(callback,))
        timer.daemon = True
        timer.start()
        return timer
    return loop.call_later(delay, callback)


async def sleep_async(
    delay: float, signal: CancellationSignal | None = None, unref: bool = False
) -> None:
    """Wait ``delay`` milliseconds unless ``signal`` aborts first.

    Args:
        delay: The delay in milliseconds.
        signal: Optional cancellation signal.
        unref: Whether the timer should let the interpreter exit.

    Raises:
        BaseException: The cancellation error if the signal aborted before
            or during the wait.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.utils.sleep import sleep_async
        >>> asyncio.run(sleep_async(10))

        ```
    """
    raise_if_cancelled(signal)
    loop = asyncio.get_running_loop()
    elapsed: asyncio.Future[None] = loop.create_future()

    def _on_timeout() -> None:
        if not elapsed.done():
            elapsed.set_result(None)

    timer = _start_timer(loop, delay / 1000, _on_timeout, unref)
    try:
        if signal is None:
            await elapsed
        else:
            aborted, release = watch_signal(loop, signal)
            try:
                await asyncio.wait({elapsed, aborted}, return_when=asyncio.FIRST_COMPLETED)
            finally:
                release()
    finally:
        timer.cancel()
        elapsed.cancel()
    if signal is not None and signal.aborted:
        logger.debug("Delay interrupted, signal aborted")
    raise_if_cancelled(signal)


def sleep(delay: float, signal: CancellationSignal | None = None) -> None:
    """Block ``delay`` milliseconds unless ``signal`` aborts first.

    Args:
        delay: The delay in milliseconds.
        signal: Optional cancellation signal.

    Raises:
        BaseException: The cancellation error if the signal aborted before
            or during the wait.
    """
    if signal is None:
        time.sleep(delay / 1000)
        return

    event = threading.Event()
    unsubscribe = signal.add_listener(event.set)
    try:
        raise_if_cancelled(signal)
        event.wait(delay / 1000)
    finally:
        unsubscribe()
    raise_if_cancelled(signal)

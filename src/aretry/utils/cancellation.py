r"""Bridges between cancellation signals and asyncio.

Signal listeners may fire from any thread, so they only post back to the
event loop with ``call_soon_threadsafe``.
"""

from __future__ import annotations

__all__ = ["raise_if_cancelled", "run_cancellable", "watch_signal"]

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from aretry.signal import cancellation_error

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.signal import CancellationSignal

logger: logging.Logger = logging.getLogger(__name__)


def raise_if_cancelled(signal: CancellationSignal | None) -> None:
    """Raise the cancellation error if ``signal`` was aborted.

    Args:
        signal: Optional cancellation signal.

    Raises:
        BaseException: The signal reason, or ``OperationAbortedError`` when
            the reason is not an exception.
    """
    if signal is not None and signal.aborted:
        raise cancellation_error(signal)


def watch_signal(
    loop: asyncio.AbstractEventLoop, signal: CancellationSignal
) -> tuple[asyncio.Future[None], Callable[[], None]]:
    """Expose the abort of ``signal`` as a future of ``loop``.

    Args:
        loop: The running event loop.
        signal: The cancellation signal to watch.

    Returns:
        A future resolved when the signal aborts (immediately if it already
        did), and a callable releasing the listener and the future. The
        callable must always be called once the future is not needed.
    """
    aborted: asyncio.Future[None] = loop.create_future()

    def _resolve() -> None:
        if not aborted.done():
            aborted.set_result(None)

    def _on_abort() -> None:
        loop.call_soon_threadsafe(_resolve)

    unsubscribe = signal.add_listener(_on_abort)
    if signal.aborted:
        _resolve()

    def release() -> None:
        unsubscribe()
        aborted.cancel()

    return aborted, release


async def run_cancellable(awaitable: Awaitable[Any], signal: CancellationSignal | None) -> Any:
    """Await ``awaitable`` unless ``signal`` aborts first.

    When the signal aborts, the task running ``awaitable`` is cancelled.
    The task may ignore the cancellation; it is not awaited.

    Args:
        awaitable: The awaitable to run.
        signal: Optional cancellation signal.

    Returns:
        The result of ``awaitable``.

    Raises:
        BaseException: The cancellation error if the signal aborted, even
            when ``awaitable`` completed at the same time. Otherwise, the
            exception raised by ``awaitable``.
    """
    if signal is None:
        return await awaitable

    loop = asyncio.get_running_loop()
    task = asyncio.ensure_future(awaitable)
    aborted, release = watch_signal(loop, signal)
    try:
        await asyncio.wait({task, aborted}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        release()
        if not task.done():
            task.cancel()

    if signal.aborted:
        if task.done() and not task.cancelled():
            # Mark the result as retrieved, the cancellation wins
            task.exception()
        logger.debug("Operation abandoned, signal aborted")
        raise cancellation_error(signal)
    return task.result()

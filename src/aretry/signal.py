r"""Cooperative cancellation primitives.

The retry loop consumes cancellation through the ``CancellationSignal``
protocol: it polls ``aborted`` and ``reason`` and registers one-shot
listeners that fire when the signal is aborted. ``AbortController`` is
the bundled, thread-safe implementation.

Example:
    ```pycon
    >>> from aretry.signal import AbortController
    >>> controller = AbortController()
    >>> controller.signal.aborted
    False
    >>> controller.abort(RuntimeError("user clicked cancel"))
    >>> controller.signal.aborted
    True
    >>> controller.signal.reason
    RuntimeError('user clicked cancel')

    ```
"""

from __future__ import annotations

__all__ = ["AbortController", "AbortSignal", "CancellationSignal", "cancellation_error"]

import logging
import threading
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from aretry.exceptions import OperationAbortedError

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


@runtime_checkable
class CancellationSignal(Protocol):
    """Capability observed by the retry loop to detect cancellation."""

    @property
    def aborted(self) -> bool:
        """Whether the signal has already been aborted."""

    @property
    def reason(self) -> object:
        """The cancellation reason, meaningful only once aborted."""

    def add_listener(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a one-shot listener invoked when the signal aborts.

        Args:
            listener: Callable invoked without arguments on abort.

        Returns:
            A callable that unregisters the listener. Calling it more
            than once, or after the listener fired, has no effect.
        """


class AbortSignal:
    """Signal half of an ``AbortController``.

    Listeners registered after the signal aborted are not invoked; callers
    are expected to poll ``aborted`` first. An exception raised by a
    listener is logged and does not stop the other listeners.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._aborted = False
        self._reason: object = None
        self._listeners: list[Callable[[], None]] = []

    @property
    def aborted(self) -> bool:
        return self._aborted

    @property
    def reason(self) -> object:
        return self._reason

    def add_listener(self, listener: Callable[[], None]) -> Callable[[], None]:
        with self._lock:
            if not self._aborted:
                self._listeners.append(listener)

        def remove() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return remove

    def throw_if_aborted(self) -> None:
        """Raise the cancellation error if the signal was aborted.

        Raises:
            BaseException: The reason, or ``OperationAbortedError`` when the
                reason is not an exception.
        """
        if self._aborted:
            raise cancellation_error(self)

    def _abort(self, reason: object) -> None:
        with self._lock:
            if self._aborted:
                return
            self._aborted = True
            self._reason = reason
            listeners, self._listeners = self._listeners, []
        logger.debug(f"Signal aborted with reason {reason!r}, notifying {len(listeners)} listener(s)")
        for listener in listeners:
            try:
                listener()
            except Exception as exc:  # noqa: BLE001
                # Fails once the event loop of the listener is closed
                logger.debug(f"Abort listener {listener!r} failed: {type(exc).__name__}: {exc}")

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(aborted={self._aborted})"


class AbortController:
    """Owner of an ``AbortSignal`` that can abort it.

    Attributes:
        signal: The controlled signal, passed to ``retry_async`` or ``retry``.
    """

    def __init__(self) -> None:
        self.signal = AbortSignal()

    def abort(self, reason: object = None) -> None:
        """Abort the signal.

        Only the first call has an effect.

        Args:
            reason: The cancellation reason. When it is not an exception,
                the retry loop raises ``OperationAbortedError`` instead.
        """
        self.signal._abort(OperationAbortedError() if reason is None else reason)


def cancellation_error(signal: CancellationSignal) -> BaseException:
    """Return the exception to raise for an aborted signal.

    Args:
        signal: An aborted signal.

    Returns:
        The signal reason when it is an exception, otherwise an
        ``OperationAbortedError`` carrying the reason.

    Example:
        ```pycon
        >>> from aretry.signal import AbortController, cancellation_error
        >>> controller = AbortController()
        >>> controller.abort("user clicked cancel")
        >>> cancellation_error(controller.signal)
        OperationAbortedError('This operation was aborted: user clicked cancel')

        ```
    """
    reason = signal.reason
    if isinstance(reason, BaseException):
        return reason
    return OperationAbortedError(reason)

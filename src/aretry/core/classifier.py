r"""Classification of attempt failures.

The retry loop never branches on exception types directly. Every failure
goes through ``classify_error``, which returns a ``ClassifiedFailure``
tagged with a ``FailureKind``. The loop then decides based on that tag.
"""

from __future__ import annotations

__all__ = ["ClassifiedFailure", "FailureKind", "classify_error", "normalize_error"]

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from aretry.exceptions import AbortError, NonErrorRaisedError
from aretry.network import is_network_error as default_is_network_error
from aretry.signal import cancellation_error

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.signal import CancellationSignal

logger: logging.Logger = logging.getLogger(__name__)


class FailureKind(Enum):
    """Disposition of a failure.

    Attributes:
        RETRYABLE: The failure goes through the callbacks and the retry
            decision.
        TERMINAL: The failure is raised immediately, without callbacks.
        ABORT: The operation raised ``AbortError``; its original error is
            raised immediately, without callbacks.
        CANCELLED: The signal of the run aborted; the cancellation error
            is raised instead of the failure, without callbacks.
    """

    RETRYABLE = "retryable"
    TERMINAL = "terminal"
    ABORT = "abort"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ClassifiedFailure:
    """A failure tagged with its disposition.

    Attributes:
        kind: The disposition of the failure.
        error: The exception to hand to callbacks or to raise. For
            ``ABORT`` this is the original error wrapped by ``AbortError``.
    """

    kind: FailureKind
    error: BaseException

    @property
    def is_terminal(self) -> bool:
        """Whether the failure ends the run without invoking callbacks."""
        return self.kind is not FailureKind.RETRYABLE


def normalize_error(value: object) -> BaseException:
    """Return ``value`` as an exception.

    Args:
        value: A raised exception or any other failure value.

    Returns:
        ``value`` itself when it is an exception, otherwise a
        ``NonErrorRaisedError`` carrying it.

    Example:
        ```pycon
        >>> from aretry.core.classifier import normalize_error
        >>> normalize_error(ValueError("bad"))
        ValueError('bad')
        >>> normalize_error("foo")
        NonErrorRaisedError('Non-error was raised: "foo". You should only raise errors.')

        ```
    """
    if isinstance(value, BaseException):
        return value
    return NonErrorRaisedError(value)


def classify_error(
    value: object,
    is_network_error: Callable[[BaseException], bool] = default_is_network_error,
    signal: CancellationSignal | None = None,
) -> ClassifiedFailure:
    """Classify a failure of the operation.

    Args:
        value: The exception raised by the operation, or any other
            failure value.
        is_network_error: Predicate recognizing network-shaped
            ``TypeError``.
        signal: Optional cancellation signal of the run. Once it has
            aborted, every failure is ``CANCELLED``.

    Returns:
        The classified failure.

    Example:
        ```pycon
        >>> from aretry.core.classifier import classify_error
        >>> from aretry.exceptions import AbortError
        >>> classify_error(ValueError("bad")).kind
        <FailureKind.RETRYABLE: 'retryable'>
        >>> classify_error(TypeError("unsupported operand")).kind
        <FailureKind.TERMINAL: 'terminal'>
        >>> classify_error(TypeError("Failed to fetch")).kind
        <FailureKind.RETRYABLE: 'retryable'>
        >>> failure = classify_error(AbortError(KeyError("missing")))
        >>> failure.kind, failure.error
        (<FailureKind.ABORT: 'abort'>, KeyError('missing'))
        >>> from aretry.signal import AbortController
        >>> controller = AbortController()
        >>> controller.abort("shutdown")
        >>> failure = classify_error(ValueError("bad"), signal=controller.signal)
        >>> failure.kind
        <FailureKind.CANCELLED: 'cancelled'>
        >>> failure.error
        OperationAbortedError('This operation was aborted: shutdown')

        ```
    """
    if signal is not None and signal.aborted:
        logger.debug(f"Failure superseded by cancellation: {value!r}")
        return ClassifiedFailure(FailureKind.CANCELLED, cancellation_error(signal))
    error = normalize_error(value)
    if isinstance(error, AbortError):
        return ClassifiedFailure(FailureKind.ABORT, error.original_error)
    if isinstance(error, NonErrorRaisedError):
        return ClassifiedFailure(FailureKind.RETRYABLE, error)
    if isinstance(error, TypeError) and not is_network_error(error):
        logger.debug(f"{type(error).__name__} is not a network error, not retrying: {error}")
        return ClassifiedFailure(FailureKind.TERMINAL, error)
    return ClassifiedFailure(FailureKind.RETRYABLE, error)

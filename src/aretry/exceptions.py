r"""Exceptions raised or recognized by the retry loop.

This module defines the error taxonomy of aretry: validation errors raised
before the first attempt, the ``AbortError`` wrapper that operations raise
to stop retrying, the wrapper used for raised values that are not
exceptions, and the generic error surfaced when a run is cancelled with a
reason that is not itself an exception.
"""

from __future__ import annotations

__all__ = [
    "AbortError",
    "NonErrorRaisedError",
    "OperationAbortedError",
    "ValidationError",
]


class ValidationError(ValueError):
    """Exception raised when retry options are malformed.

    Validation happens synchronously when the options are normalized, so
    this error is always raised before the operation runs.

    Example:
        ```pycon
        >>> from aretry.exceptions import ValidationError
        >>> raise ValidationError("retries must be a non-negative number, got -1")
        Traceback (most recent call last):
            ...
        aretry.exceptions.ValidationError: retries must be a non-negative number, got -1

        ```
    """


class AbortError(Exception):
    """Exception raised by an operation to stop retrying immediately.

    The retry loop never retries an ``AbortError`` and never invokes the
    ``on_failed_attempt`` or ``should_retry`` callbacks for it. Instead, the
    wrapped ``original_error`` is raised to the caller.

    Args:
        message: An error message or an exception to wrap.

    Attributes:
        original_error: The exception raised to the caller. When ``message``
            is a string, a plain ``Exception`` carrying that message.

    Example:
        ```pycon
        >>> from aretry.exceptions import AbortError
        >>> error = AbortError("resource does not exist")
        >>> error.original_error
        Exception('resource does not exist')
        >>> error = AbortError(KeyError("missing"))
        >>> error.original_error
        KeyError('missing')

        ```
    """

    def __init__(self, message: str | BaseException) -> None:
        if isinstance(message, BaseException):
            self.original_error: BaseException = message
            message = str(message)
        else:
            self.original_error = Exception(message)
        super().__init__(message)
        self.message = message


class NonErrorRaisedError(TypeError):
    """Exception wrapping a failure value that is not an exception.

    Args:
        value: The original value.

    Attributes:
        value: The original value.
    """

    def __init__(self, value: object) -> None:
        super().__init__(f'Non-error was raised: "{value}". You should only raise errors.')
        self.value = value


class OperationAbortedError(Exception):
    """Exception raised when a run is cancelled without an exception reason.

    Args:
        reason: The cancellation reason, or ``None`` when the signal was
            aborted without one.

    Attributes:
        reason: The cancellation reason.

    Example:
        ```pycon
        >>> from aretry.exceptions import OperationAbortedError
        >>> str(OperationAbortedError())
        'This operation was aborted'
        >>> str(OperationAbortedError("user clicked cancel"))
        'This operation was aborted: user clicked cancel'

        ```
    """

    def __init__(self, reason: object = None) -> None:
        message = "This operation was aborted"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.reason = reason

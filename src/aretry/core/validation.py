r"""Validation utilities for retry options.

This module provides the validation functions used when normalizing
retry options, so malformed options fail before the operation runs.
"""

from __future__ import annotations

__all__ = ["validate_callable", "validate_number_option", "validate_retries"]

import math
from numbers import Real

from aretry.exceptions import ValidationError


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_retries(retries: object) -> None:
    """Validate the ``retries`` option.

    Args:
        retries: Maximum number of retries. Must be a non-negative number or
            ``math.inf`` for unbounded retries.

    Raises:
        ValidationError: If ``retries`` is not a number, is NaN, or is
            negative.

    Example:
        ```pycon
        >>> import math
        >>> from aretry.core.validation import validate_retries
        >>> validate_retries(3)
        >>> validate_retries(math.inf)
        >>> validate_retries(-1)
        Traceback (most recent call last):
        ...
        aretry.exceptions.ValidationError: retries must be a non-negative number, got -1

        ```
    """
    if not _is_number(retries):
        msg = f"retries must be a number or math.inf, got {retries!r}"
        raise ValidationError(msg)
    if math.isnan(retries):
        msg = "retries must be a valid number or math.inf, got nan"
        raise ValidationError(msg)
    if retries < 0:
        msg = f"retries must be a non-negative number, got {retries}"
        raise ValidationError(msg)


def validate_number_option(
    name: str, value: object, minimum: float = 0, allow_infinity: bool = False
) -> None:
    """Validate a numeric option.

    Args:
        name: The option name, used in error messages.
        value: The option value.
        minimum: The smallest accepted value.
        allow_infinity: Whether ``math.inf`` is accepted.

    Raises:
        ValidationError: If the value is not a number, is NaN, is infinite
            while ``allow_infinity`` is ``False``, or is below ``minimum``.

    Example:
        ```pycon
        >>> import math
        >>> from aretry.core.validation import validate_number_option
        >>> validate_number_option("min_timeout", 100)
        >>> validate_number_option("max_timeout", math.inf, allow_infinity=True)
        >>> validate_number_option("min_timeout", math.inf)
        Traceback (most recent call last):
        ...
        aretry.exceptions.ValidationError: min_timeout must be a finite number, got inf

        ```
    """
    if not _is_number(value) or math.isnan(value):
        kind = "a number or math.inf" if allow_infinity else "a number"
        msg = f"{name} must be {kind}, got {value!r}"
        raise ValidationError(msg)
    if not allow_infinity and math.isinf(value):
        msg = f"{name} must be a finite number, got {value}"
        raise ValidationError(msg)
    if value < minimum:
        msg = f"{name} must be >= {minimum}, got {value}"
        raise ValidationError(msg)


def validate_callable(name: str, value: object) -> None:
    """Validate a callback option.

    Args:
        name: The option name, used in error messages.
        value: The option value.

    Raises:
        ValidationError: If the value is not callable.
    """
    if not callable(value):
        msg = f"{name} must be callable, got {type(value).__name__}"
        raise ValidationError(msg)

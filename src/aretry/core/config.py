r"""Defaults and configuration dataclass for the retry loop.

This module provides the default policy constants, the immutable
``RetryConfig`` policy object, and ``normalize_options`` which turns raw
keyword options into a validated ``RetryConfig``.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_FACTOR",
    "DEFAULT_MAX_RETRY_TIME",
    "DEFAULT_MAX_TIMEOUT",
    "DEFAULT_MIN_TIMEOUT",
    "DEFAULT_RETRIES",
    "RetryConfig",
    "normalize_options",
]

import math
import random
import time
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any

from aretry.core.validation import validate_callable, validate_number_option, validate_retries
from aretry.exceptions import ValidationError
from aretry.network import is_network_error

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.context import RetryContext
    from aretry.signal import CancellationSignal


# Default maximum number of retries
# Total attempts = retries + 1 (initial attempt)
DEFAULT_RETRIES = 10

# Default exponential factor
# Delay = min_timeout * factor ** (attempt - 1)
DEFAULT_FACTOR = 2.0

# Default delay in milliseconds before the first retry
# With the default factor: 1s, 2s, 4s, 8s, ...
DEFAULT_MIN_TIMEOUT = 1000.0

# Default cap in milliseconds on a single delay (unbounded)
DEFAULT_MAX_TIMEOUT = math.inf

# Default wall-clock budget in milliseconds for the whole run (unbounded)
DEFAULT_MAX_RETRY_TIME = math.inf


def _on_failed_attempt_noop(context: RetryContext) -> None:  # noqa: ARG001
    return None


def _always_retry(context: RetryContext) -> bool:  # noqa: ARG001
    return True


def _never_skip(context: RetryContext) -> bool:  # noqa: ARG001
    return False


@dataclass(frozen=True)
class RetryConfig:
    """Immutable retry policy.

    All durations are in milliseconds. Fields are validated when the
    config is created, and a non-positive ``factor`` is replaced by 1 so
    the delay never shrinks.

    Args:
        retries: Maximum number of retries. Must be >= 0, or ``math.inf``
            to retry until another condition stops the run.
        factor: Exponential factor applied to the delay at each retry.
        min_timeout: Delay before the first retry. Must be >= 0.
        max_timeout: Cap on a single delay. Must be >= 0.
        max_retry_time: Wall-clock budget for the whole run. Must be >= 0.
        randomize: Whether to multiply delays by a random factor in [1, 2).
        unref: Whether pending delay timers should let the process exit.
        signal: Optional cancellation signal.
        on_failed_attempt: Callback invoked with a ``RetryContext`` after
            each failed attempt.
        should_retry: Predicate deciding whether a failed attempt is
            retried. Only consulted while the budget is not exhausted.
        should_skip: Predicate marking a failure as skipped. A skipped
            failure does not consume a retry.
        is_network_error: Predicate recognizing network-shaped
            ``TypeError``, which are retried instead of raised.
        random: Source of random numbers in [0, 1) used by ``randomize``.
        clock: Monotonic clock in seconds used for the time budget.

    Example:
        ```pycon
        >>> from aretry.core.config import RetryConfig
        >>> config = RetryConfig()
        >>> config.retries
        10
        >>> config = RetryConfig(retries=3, factor=0)
        >>> config.factor
        1.0
        >>> merged = config.merge(retries=5)
        >>> merged.retries
        5
        >>> config.retries
        3

        ```
    """

    retries: float = DEFAULT_RETRIES
    factor: float = DEFAULT_FACTOR
    min_timeout: float = DEFAULT_MIN_TIMEOUT
    max_timeout: float = DEFAULT_MAX_TIMEOUT
    max_retry_time: float = DEFAULT_MAX_RETRY_TIME
    randomize: bool = False
    unref: bool = False
    signal: CancellationSignal | None = None
    on_failed_attempt: Callable[[RetryContext], Any] = field(default=_on_failed_attempt_noop)
    should_retry: Callable[[RetryContext], Any] = field(default=_always_retry)
    should_skip: Callable[[RetryContext], Any] = field(default=_never_skip)
    is_network_error: Callable[[BaseException], bool] = field(default=is_network_error)
    random: Callable[[], float] = field(default=random.random, repr=False)
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    def __post_init__(self) -> None:
        validate_retries(self.retries)
        validate_number_option("factor", self.factor, minimum=-math.inf)
        validate_number_option("min_timeout", self.min_timeout)
        validate_number_option("max_timeout", self.max_timeout, allow_infinity=True)
        validate_number_option("max_retry_time", self.max_retry_time, allow_infinity=True)
        for name in (
            "on_failed_attempt",
            "should_retry",
            "should_skip",
            "is_network_error",
            "random",
            "clock",
        ):
            validate_callable(name, getattr(self, name))
        if self.factor <= 0:
            object.__setattr__(self, "factor", 1.0)

    def merge(self, **overrides: Any) -> RetryConfig:
        """Create a new config with some fields overridden.

        Args:
            **overrides: Fields to override. ``None`` values are ignored,
                so ``merge`` cannot clear a field such as ``signal``.
                Create a new ``RetryConfig`` to drop it.

        Returns:
            A new validated ``RetryConfig``. The original is unchanged.

        Raises:
            TypeError: If an override is not a known option.
            ValidationError: If an override is invalid.
        """
        _check_option_names(overrides)
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


_OPTION_NAMES = frozenset(f.name for f in fields(RetryConfig))


def _check_option_names(options: dict[str, Any]) -> None:
    if "forever" in options:
        msg = (
            "The forever option is no longer supported. For many use-cases, "
            "you can set retries=math.inf instead."
        )
        raise ValidationError(msg)
    unknown = sorted(set(options) - _OPTION_NAMES)
    if unknown:
        msg = f"Unexpected retry option(s): {', '.join(unknown)}"
        raise TypeError(msg)


def normalize_options(config: RetryConfig | None = None, **options: Any) -> RetryConfig:
    """Validate raw options and fill in defaults.

    Args:
        config: Optional base config. Defaults to ``RetryConfig()``.
        **options: Options overriding the base config. ``None`` values keep
            the base value.

    Returns:
        The effective ``RetryConfig``.

    Raises:
        TypeError: If an option name is unknown.
        ValidationError: If an option is invalid, or if the legacy
            ``forever`` option is passed.

    Example:
        ```pycon
        >>> import math
        >>> from aretry.core.config import normalize_options
        >>> normalize_options(retries=math.inf, min_timeout=100).retries
        inf
        >>> normalize_options(forever=True)  # doctest: +ELLIPSIS
        Traceback (most recent call last):
        ...
        aretry.exceptions.ValidationError: The forever option is no longer supported. ...

        ```
    """
    _check_option_names(options)
    if config is None:
        return RetryConfig(**{k: v for k, v in options.items() if v is not None})
    return config.merge(**options)

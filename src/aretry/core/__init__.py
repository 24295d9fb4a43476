r"""Core policy normalization and failure classification shared by the
sync and async retry loops."""

from __future__ import annotations

__all__ = [
    "DEFAULT_FACTOR",
    "DEFAULT_MAX_RETRY_TIME",
    "DEFAULT_MAX_TIMEOUT",
    "DEFAULT_MIN_TIMEOUT",
    "DEFAULT_RETRIES",
    "ClassifiedFailure",
    "FailureKind",
    "RetryConfig",
    "classify_error",
    "normalize_error",
    "normalize_options",
    "validate_number_option",
    "validate_retries",
]

from aretry.core.classifier import ClassifiedFailure, FailureKind, classify_error, normalize_error
from aretry.core.config import (
    DEFAULT_FACTOR,
    DEFAULT_MAX_RETRY_TIME,
    DEFAULT_MAX_TIMEOUT,
    DEFAULT_MIN_TIMEOUT,
    DEFAULT_RETRIES,
    RetryConfig,
    normalize_options,
)
from aretry.core.validation import validate_number_option, validate_retries

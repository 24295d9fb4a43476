r"""Default predicate recognizing network failures.

``TypeError`` is normally terminal for the retry loop, because it usually
signals a programming error. Some HTTP stacks raise ``TypeError`` for
connectivity problems though, so the loop asks this predicate before
giving up on one. The predicate also recognizes httpx transport errors and
builtin ``ConnectionError``, which makes it reusable in ``should_retry``.
"""

from __future__ import annotations

__all__ = ["NETWORK_ERROR_MESSAGES", "is_network_error"]

import httpx

# Messages used by the major runtimes and browsers for fetch
# connectivity failures
NETWORK_ERROR_MESSAGES = frozenset(
    {
        "Failed to fetch",  # Chrome
        "NetworkError when attempting to fetch resource.",  # Firefox
        "The Internet connection appears to be offline.",  # Safari
        "Network request failed",  # cross-fetch
        "fetch failed",  # undici
    }
)

_HTTPX_NETWORK_ERRORS = (
    httpx.NetworkError,
    httpx.TimeoutException,
    httpx.RemoteProtocolError,
    httpx.ProxyError,
)


def is_network_error(error: BaseException) -> bool:
    """Indicate whether an exception looks like a network failure.

    Args:
        error: The exception to inspect.

    Returns:
        ``True`` for a ``TypeError`` carrying one of
        ``NETWORK_ERROR_MESSAGES``, an httpx transport failure, or a
        ``ConnectionError``, otherwise ``False``.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretry.network import is_network_error
        >>> is_network_error(TypeError("Failed to fetch"))
        True
        >>> is_network_error(TypeError("unsupported operand"))
        False
        >>> is_network_error(httpx.ConnectError("connection refused"))
        True

        ```
    """
    if isinstance(error, TypeError):
        return str(error) in NETWORK_ERROR_MESSAGES
    return isinstance(error, (*_HTTPX_NETWORK_ERRORS, ConnectionError))

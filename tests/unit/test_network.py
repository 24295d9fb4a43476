r"""Unit tests for the network error predicate."""

from __future__ import annotations

import httpx
import pytest

from aretry.network import NETWORK_ERROR_MESSAGES, is_network_error


@pytest.mark.parametrize("message", sorted(NETWORK_ERROR_MESSAGES))
def test_is_network_error_type_error_messages(message: str) -> None:
    """Test that TypeError with a known message is a network error."""
    assert is_network_error(TypeError(message))


@pytest.mark.parametrize(
    "message",
    ["unsupported operand type(s)", "failed to fetch", "Failed to fetch!", ""],
)
def test_is_network_error_type_error_other_messages(message: str) -> None:
    """Test that other TypeError messages are not network errors."""
    assert not is_network_error(TypeError(message))


@pytest.mark.parametrize(
    "error",
    [
        httpx.ConnectError("connection refused"),
        httpx.ReadError("connection reset"),
        httpx.ConnectTimeout("timed out"),
        httpx.ReadTimeout("timed out"),
        httpx.RemoteProtocolError("server disconnected"),
        httpx.ProxyError("proxy unreachable"),
        ConnectionResetError("reset by peer"),
        ConnectionRefusedError("refused"),
    ],
)
def test_is_network_error_transport_errors(error: BaseException) -> None:
    """Test that transport errors are network errors."""
    assert is_network_error(error)


@pytest.mark.parametrize(
    "error",
    [
        ValueError("Failed to fetch"),
        RuntimeError("boom"),
        httpx.UnsupportedProtocol("ftp"),
        KeyError("missing"),
    ],
)
def test_is_network_error_other_errors(error: BaseException) -> None:
    """Test that other errors are not network errors."""
    assert not is_network_error(error)

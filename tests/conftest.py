from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, patch

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


class FakeClock:
    """Clock returning a controllable time in seconds."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch the blocking delay of the sync executor to make tests run
    faster."""
    with patch("aretry.executors.executor.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_asleep() -> Generator[AsyncMock, None, None]:
    """Patch the async delay of the async executor to make tests run
    faster."""
    with patch("aretry.executors.executor_async.sleep_async", new_callable=AsyncMock) as mock:
        yield mock


@pytest.fixture
def fake_clock() -> FakeClock:
    """Create a controllable clock for time budget tests."""
    return FakeClock()


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks."""
    return Mock(return_value=None)

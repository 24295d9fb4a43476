r"""Unit tests for synchronous retry executor."""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING
from unittest.mock import Mock

import pytest

from aretry.core.config import RetryConfig
from aretry.exceptions import AbortError, OperationAbortedError
from aretry.executors import RetryExecutor
from aretry.signal import AbortController

if TYPE_CHECKING:
    from aretry.context import RetryContext
    from tests.conftest import FakeClock


def delays_of(mock_sleep: Mock) -> list[float]:
    return [call.args[0] for call in mock_sleep.call_args_list]


def test_retry_executor_creation() -> None:
    """Test RetryExecutor initialization."""
    config = RetryConfig(retries=3)
    executor = RetryExecutor(config)
    assert executor.config is config
    assert executor.strategy is not None
    assert executor.decider is not None
    assert executor.callbacks is not None


def test_retry_executor_success_first_attempt(mock_sleep: Mock) -> None:
    """Test a successful first attempt is returned without delay."""
    operation = Mock(return_value="ok")
    assert RetryExecutor(RetryConfig()).execute(operation) == "ok"
    operation.assert_called_once_with(1)
    mock_sleep.assert_not_called()


def test_retry_executor_success_after_failures(mock_sleep: Mock) -> None:
    """Test the result of the first successful attempt is returned."""
    operation = Mock(side_effect=[ConnectionError("1"), ConnectionError("2"), {"id": 1}])
    assert RetryExecutor(RetryConfig()).execute(operation) == {"id": 1}
    assert [call.args for call in operation.call_args_list] == [(1,), (2,), (3,)]
    assert mock_sleep.call_count == 2


def test_retry_executor_none_result_is_success(mock_sleep: Mock) -> None:  # noqa: ARG001
    """Test that returning None is a success."""
    operation = Mock(return_value=None)
    assert RetryExecutor(RetryConfig()).execute(operation) is None
    operation.assert_called_once()


def test_retry_executor_retries_plus_one_attempts(mock_sleep: Mock) -> None:
    """Test an always failing operation runs retries + 1 times."""
    operation = Mock(side_effect=ValueError("boom"))
    with pytest.raises(ValueError, match=r"boom"):
        RetryExecutor(RetryConfig(retries=4)).execute(operation)
    assert operation.call_count == 5
    assert mock_sleep.call_count == 4


def test_retry_executor_retries_zero(mock_sleep: Mock, mock_callback: Mock) -> None:
    """Test retries=0 runs a single attempt."""
    operation = Mock(side_effect=ValueError("boom"))
    with pytest.raises(ValueError, match=r"boom"):
        RetryExecutor(RetryConfig(retries=0, on_failed_attempt=mock_callback)).execute(operation)
    operation.assert_called_once()
    mock_callback.assert_called_once()
    mock_sleep.assert_not_called()


def test_retry_executor_type_error_is_terminal(mock_sleep: Mock, mock_callback: Mock) -> None:
    """Test a TypeError is raised without retry or callback."""
    operation = Mock(side_effect=TypeError("'NoneType' object is not subscriptable"))
    with pytest.raises(TypeError, match=r"not subscriptable"):
        RetryExecutor(RetryConfig(on_failed_attempt=mock_callback)).execute(operation)
    operation.assert_called_once()
    mock_callback.assert_not_called()
    mock_sleep.assert_not_called()


def test_retry_executor_network_type_error_is_retried(mock_sleep: Mock) -> None:
    """Test a network-shaped TypeError is retried."""
    operation = Mock(side_effect=[TypeError("Network request failed"), "ok"])
    assert RetryExecutor(RetryConfig()).execute(operation) == "ok"
    assert mock_sleep.call_count == 1


def test_retry_executor_abort_error_unwrapped(mock_sleep: Mock) -> None:
    """Test AbortError stops the run with its original error."""
    original = KeyError("missing")
    operation = Mock(side_effect=AbortError(original))
    with pytest.raises(KeyError, match=r"missing") as exc_info:
        RetryExecutor(RetryConfig()).execute(operation)
    assert exc_info.value is original
    mock_sleep.assert_not_called()


def test_retry_executor_base_exception_propagates(mock_sleep: Mock) -> None:
    """Test KeyboardInterrupt is never retried."""
    operation = Mock(side_effect=KeyboardInterrupt)
    with pytest.raises(KeyboardInterrupt):
        RetryExecutor(RetryConfig()).execute(operation)
    operation.assert_called_once()
    mock_sleep.assert_not_called()


def test_retry_executor_exponential_delays(mock_sleep: Mock) -> None:
    """Test the delays grow exponentially."""
    operation = Mock(side_effect=ValueError("boom"))
    with pytest.raises(ValueError, match=r"boom"):
        RetryExecutor(RetryConfig(retries=3, min_timeout=100)).execute(operation)
    assert delays_of(mock_sleep) == [100, 200, 400]


def test_retry_executor_delays_capped(mock_sleep: Mock) -> None:
    """Test the delays are capped at max_timeout."""
    operation = Mock(side_effect=ValueError("boom"))
    config = RetryConfig(retries=3, min_timeout=100, factor=3, max_timeout=150)
    with pytest.raises(ValueError, match=r"boom"):
        RetryExecutor(config).execute(operation)
    assert delays_of(mock_sleep) == [100, 150, 150]


def test_retry_executor_delay_arguments(mock_sleep: Mock) -> None:
    """Test the signal is passed to the delay."""
    controller = AbortController()
    operation = Mock(side_effect=[ValueError("boom"), "ok"])
    config = RetryConfig(min_timeout=100, signal=controller.signal)
    assert RetryExecutor(config).execute(operation) == "ok"
    mock_sleep.assert_called_once_with(100, controller.signal)


def test_retry_executor_max_retry_time(mock_sleep: Mock, fake_clock: FakeClock) -> None:
    """Test the run stops once the time budget is spent."""

    def operation(attempt: int) -> None:
        fake_clock.advance(0.5)
        msg = f"attempt {attempt}"
        raise ValueError(msg)

    config = RetryConfig(min_timeout=100, max_retry_time=1200, clock=fake_clock)
    with pytest.raises(ValueError, match=r"attempt 3"):
        RetryExecutor(config).execute(operation)
    assert delays_of(mock_sleep) == [100, 200]


def test_retry_executor_on_failed_attempt_contexts(mock_sleep: Mock) -> None:  # noqa: ARG001
    """Test on_failed_attempt receives a context for each failure."""
    contexts: list[RetryContext] = []
    operation = Mock(side_effect=[ValueError("1"), ValueError("2"), "ok"])
    config = RetryConfig(retries=5, on_failed_attempt=contexts.append)
    assert RetryExecutor(config).execute(operation) == "ok"
    assert [ctx.attempt_number for ctx in contexts] == [1, 2]
    assert [ctx.retries_left for ctx in contexts] == [5, 4]
    assert [str(ctx.error) for ctx in contexts] == ["1", "2"]


def test_retry_executor_on_failed_attempt_raises(mock_sleep: Mock) -> None:
    """Test an exception raised by on_failed_attempt ends the run."""
    operation = Mock(side_effect=ValueError("boom"))
    config = RetryConfig(on_failed_attempt=Mock(side_effect=RuntimeError("callback")))
    with pytest.raises(RuntimeError, match=r"callback"):
        RetryExecutor(config).execute(operation)
    operation.assert_called_once()
    mock_sleep.assert_not_called()


def test_retry_executor_should_retry_false(mock_sleep: Mock) -> None:
    """Test should_retry returning False stops the run."""
    operation = Mock(side_effect=ValueError("boom"))
    with pytest.raises(ValueError, match=r"boom"):
        RetryExecutor(RetryConfig(should_retry=lambda ctx: False)).execute(operation)
    operation.assert_called_once()
    mock_sleep.assert_not_called()


def test_retry_executor_should_skip(mock_sleep: Mock) -> None:
    """Test skipped failures do not consume retries."""
    contexts: list[RetryContext] = []
    operation = Mock(side_effect=ValueError("boom"))
    config = RetryConfig(
        retries=1,
        min_timeout=100,
        on_failed_attempt=contexts.append,
        should_skip=lambda ctx: ctx.attempt_number == 1,
    )
    with pytest.raises(ValueError, match=r"boom"):
        RetryExecutor(config).execute(operation)
    assert operation.call_count == 3
    assert [ctx.skip for ctx in contexts] == [True, False, False]
    assert [ctx.retries_left for ctx in contexts] == [1, 1, 0]
    assert delays_of(mock_sleep) == [100]


def test_retry_executor_skipped_failures_not_delayed(mock_sleep: Mock) -> None:
    """Test skipped failures are retried at once."""
    operation = Mock(side_effect=[OSError("busy"), OSError("busy"), "ok"])
    config = RetryConfig(retries=0, min_timeout=500, should_skip=lambda ctx: True)
    assert RetryExecutor(config).execute(operation) == "ok"
    assert operation.call_count == 3
    mock_sleep.assert_not_called()


def test_retry_executor_already_aborted(mock_sleep: Mock) -> None:
    """Test an aborted signal prevents the first attempt."""
    controller = AbortController()
    controller.abort("shutdown")
    operation = Mock(return_value="ok")
    with pytest.raises(OperationAbortedError, match=r"shutdown"):
        RetryExecutor(RetryConfig(signal=controller.signal)).execute(operation)
    operation.assert_not_called()
    mock_sleep.assert_not_called()


def test_retry_executor_abort_after_success(mock_sleep: Mock) -> None:  # noqa: ARG001
    """Test an abort during the attempt wins over its result."""
    controller = AbortController()

    def operation(attempt: int) -> str:  # noqa: ARG001
        controller.abort()
        return "ok"

    with pytest.raises(OperationAbortedError):
        RetryExecutor(RetryConfig(signal=controller.signal)).execute(operation)


def test_retry_executor_abort_during_delay() -> None:
    """Test aborting from another thread interrupts the delay."""
    controller = AbortController()
    operation = Mock(side_effect=ValueError("boom"))
    config = RetryConfig(min_timeout=500, signal=controller.signal)
    timer = threading.Timer(0.05, controller.abort)
    timer.start()
    start = time.monotonic()
    try:
        with pytest.raises(OperationAbortedError):
            RetryExecutor(config).execute(operation)
    finally:
        timer.join()
    assert time.monotonic() - start < 0.4
    operation.assert_called_once()


def test_retry_executor_failure_after_abort(mock_sleep: Mock, mock_callback: Mock) -> None:
    """Test a failure raised after an abort ends the run with the
    cancellation error, without callbacks."""
    controller = AbortController()

    def operation(attempt: int) -> str:  # noqa: ARG001
        controller.abort("shutdown")
        msg = "boom"
        raise ValueError(msg)

    config = RetryConfig(signal=controller.signal, on_failed_attempt=mock_callback)
    with pytest.raises(OperationAbortedError, match=r"shutdown"):
        RetryExecutor(config).execute(operation)
    mock_callback.assert_not_called()
    mock_sleep.assert_not_called()

import inspect
import logging
import threading

import pytest

from autocomplete.utils import wrappers


@pytest.mark.asyncio
async def test_executor_function(caplog: pytest.LogCaptureFixture) -> None:
    """Test the executor_function decorator"""
    caplog.set_level(logging.DEBUG, logger=wrappers.__name__)

    @wrappers.executor_function
    def double(x: int) -> tuple[int, str]:
        return x * 2, threading.current_thread().name

    assert inspect.iscoroutinefunction(double)
    result, thread_name = await double(21)
    assert result == 42
    assert thread_name != threading.main_thread().name
    assert any("double took" in record.message for record in caplog.records)


def test_time_it(caplog: pytest.LogCaptureFixture) -> None:
    """Test the time_it context manager"""
    caplog.set_level(logging.DEBUG, logger=wrappers.__name__)

    with wrappers.time_it("test_function"):
        pass

    [record] = caplog.records
    assert record.levelno == logging.DEBUG
    assert record.message.startswith("test_function took")
    assert record.message.endswith("seconds")


def test_time_it_warns_when_slow(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger=wrappers.__name__)

    with pytest.raises(RuntimeError), wrappers.time_it("failing", slow=0.0):
        raise RuntimeError

    [record] = caplog.records
    assert record.levelno == logging.WARNING
    assert "failing took" in record.message

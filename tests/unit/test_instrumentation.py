"""
Unit tests for instrumentation module.

Tests the timing decorator used on connection services.
"""

import asyncio
import logging
import time
from unittest.mock import patch

import pytest

from esphome_native_client.instrumentation import measure_time, timed_async
from esphome_native_client.logging_abstraction import configure_logging


@pytest.fixture(autouse=True)
def debug_logging() -> None:
    """Configure package logging up front so timing records are not filtered"""
    _ = configure_logging(log_format="human", level=logging.DEBUG)


class TestMeasureTime:
    """Tests for measure_time function"""

    def test_measure_time_returns_milliseconds(self):
        """Test that measure_time returns elapsed time in milliseconds"""
        start = time.perf_counter()
        time.sleep(0.01)
        elapsed_ms = measure_time(start)

        assert 5 < elapsed_ms < 200

    def test_measure_time_zero_elapsed(self):
        """Test measure_time with no elapsed time"""
        assert 0 <= measure_time(time.perf_counter()) < 5


class TestTimedAsyncDecorator:
    """Tests for timed_async decorator"""

    def test_preserves_function_name(self):
        """Test that timed_async decorator preserves function name"""

        @timed_async()
        async def device_info_service():
            pass

        assert device_info_service.__name__ == "device_info_service"

    @pytest.mark.asyncio
    async def test_returns_result_when_tracking_disabled(self):
        """Test the wrapped coroutine runs unchanged when tracking is off"""

        @timed_async("add")
        async def add(a, b):
            await asyncio.sleep(0)
            return a + b

        with patch("esphome_native_client.const.CLIENT_PERF_TRACKING", False):
            assert await add(5, 7) == 12

    @pytest.mark.asyncio
    async def test_slow_call_logs_warning(self, caplog: pytest.LogCaptureFixture):
        """Test calls over the threshold are logged as warnings"""

        @timed_async("list_entities")
        async def slow():
            await asyncio.sleep(0.02)
            return "done"

        with (
            patch("esphome_native_client.const.CLIENT_PERF_TRACKING", True),
            patch("esphome_native_client.const.CLIENT_PERF_THRESHOLD_MS", 1),
            caplog.at_level(logging.DEBUG, logger="esphome_native_client"),
        ):
            assert await slow() == "done"

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING and "list_entities" in r.getMessage()]
        assert len(warnings) == 1
        assert warnings[0].exceeded_threshold is True

    @pytest.mark.asyncio
    async def test_fast_call_logs_debug(self, caplog: pytest.LogCaptureFixture):
        """Test calls under the threshold are logged at debug level"""

        @timed_async("ping")
        async def fast():
            return 1

        with (
            patch("esphome_native_client.const.CLIENT_PERF_TRACKING", True),
            patch("esphome_native_client.const.CLIENT_PERF_THRESHOLD_MS", 10_000),
            caplog.at_level(logging.DEBUG, logger="esphome_native_client"),
        ):
            _ = await fast()

        records = [r for r in caplog.records if "[ping]" in r.getMessage()]
        assert [r.levelno for r in records] == [logging.DEBUG]

    @pytest.mark.asyncio
    async def test_timing_logged_when_call_raises(self, caplog: pytest.LogCaptureFixture):
        """Test failures are timed and still propagate"""

        @timed_async("hello")
        async def failing():
            raise ValueError("nope")

        with (
            patch("esphome_native_client.const.CLIENT_PERF_TRACKING", True),
            caplog.at_level(logging.DEBUG, logger="esphome_native_client"),
            pytest.raises(ValueError, match="nope"),
        ):
            _ = await failing()

        assert any("[hello]" in r.getMessage() for r in caplog.records)

"""Tests for retry and timing decorators."""

from unittest.mock import patch

import pytest

from quill.decorators import timed, with_retry


class TestWithRetry:
    async def test_retries_then_succeeds(self) -> None:
        calls: list[int] = []

        @with_retry(max_retries=3, base_delay=0.001, max_delay=0.01)
        async def flaky() -> str:
            calls.append(1)
            if len(calls) < 2:
                raise ConnectionError("down")
            return "ok"

        assert await flaky() == "ok"
        assert len(calls) == 2

    async def test_gives_up_and_reraises(self) -> None:
        calls: list[int] = []

        @with_retry(max_retries=2, base_delay=0.001, max_delay=0.01)
        async def always_slow() -> None:
            calls.append(1)
            raise TimeoutError("slow")

        with pytest.raises(TimeoutError):
            await always_slow()
        assert len(calls) == 2

    async def test_non_retriable_raised_immediately(self) -> None:
        calls: list[int] = []

        @with_retry(max_retries=3, base_delay=0.001)
        async def bad_input() -> None:
            calls.append(1)
            raise ValueError("bad")

        with pytest.raises(ValueError, match="bad"):
            await bad_input()
        assert len(calls) == 1


class TestTimed:
    async def test_returns_result_and_logs(self) -> None:
        @timed("/things")
        async def handler(x: int) -> int:
            return x * 2

        with patch("quill.decorators.timing.logger") as logger:
            assert await handler(21) == 42

        assert logger.debug.call_args.kwargs["endpoint"] == "/things"

    async def test_logs_on_failure(self) -> None:
        @timed()
        async def broken() -> None:
            raise RuntimeError("boom")

        with patch("quill.decorators.timing.logger") as logger, pytest.raises(RuntimeError):
            await broken()

        assert logger.debug.call_args.kwargs["endpoint"] == "broken"

"""Unit tests for the retry wrapper."""

import asyncio

import pytest

from translatrix.core.translation.retry import retry


class TestRetry:
    """Tests for exponential backoff"""

    def test_truthy_result_returns_immediately(self, recording_sleep):
        calls = []

        async def operation():
            calls.append(1)
            return "done"

        result = asyncio.run(retry(operation, max_attempts=3, base_delay=2.0, sleep=recording_sleep))

        assert result == "done"
        assert len(calls) == 1
        assert recording_sleep.delays == []

    def test_fails_twice_then_succeeds(self, recording_sleep):
        calls = []

        async def operation():
            calls.append(1)
            if len(calls) < 3:
                raise RuntimeError("temporary failure")
            return "translated"

        result = asyncio.run(retry(operation, max_attempts=3, base_delay=2.0, sleep=recording_sleep))

        assert result == "translated"
        assert len(calls) == 3
        assert recording_sleep.delays == [2.0, 4.0]

    def test_falsy_results_count_as_failures(self, recording_sleep):
        results = iter(["", None, "third time"])

        async def operation():
            return next(results)

        result = asyncio.run(retry(operation, max_attempts=3, base_delay=1.0, sleep=recording_sleep))

        assert result == "third time"
        assert recording_sleep.delays == [1.0, 2.0]

    def test_exhausted_with_empty_results_returns_none(self, recording_sleep):
        calls = []

        async def operation():
            calls.append(1)
            return ""

        result = asyncio.run(retry(operation, max_attempts=3, base_delay=0.5, sleep=recording_sleep))

        assert result is None
        assert len(calls) == 3
        assert recording_sleep.delays == [0.5, 1.0]

    def test_exhausted_with_error_reraises_last_error(self, recording_sleep):
        calls = []

        async def operation():
            calls.append(1)
            raise ValueError(f"failure {len(calls)}")

        with pytest.raises(ValueError, match="failure 2"):
            asyncio.run(retry(operation, max_attempts=2, base_delay=1.0, sleep=recording_sleep))

        assert len(calls) == 2
        assert recording_sleep.delays == [1.0]

    def test_error_then_empty_final_attempt_returns_none(self, recording_sleep):
        outcomes = iter([RuntimeError("boom"), ""])

        async def operation():
            outcome = next(outcomes)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        result = asyncio.run(retry(operation, max_attempts=2, base_delay=1.0, sleep=recording_sleep))

        assert result is None

    def test_never_exceeds_max_attempts(self, recording_sleep):
        calls = []

        async def operation():
            calls.append(1)
            return None

        asyncio.run(retry(operation, max_attempts=1, base_delay=1.0, sleep=recording_sleep))

        assert len(calls) == 1
        assert recording_sleep.delays == []

    def test_rejects_zero_attempts(self):
        async def operation():
            return "x"

        with pytest.raises(ValueError):
            asyncio.run(retry(operation, max_attempts=0))

    def test_plain_callable_returning_coroutine(self, recording_sleep):
        calls = []

        async def complete(prompt):
            calls.append(prompt)
            if len(calls) < 2:
                return ""
            return f"translated {prompt}"

        result = asyncio.run(
            retry(lambda: complete("hola"), max_attempts=3, base_delay=2.0, sleep=recording_sleep)
        )

        assert result == "translated hola"
        assert calls == ["hola", "hola"]
        assert recording_sleep.delays == [2.0]

    def test_plain_callable_errors_are_retried(self, recording_sleep):
        calls = []

        async def complete():
            calls.append(1)
            raise ConnectionError("refused")

        with pytest.raises(ConnectionError):
            asyncio.run(retry(lambda: complete(), max_attempts=2, base_delay=1.0, sleep=recording_sleep))

        assert len(calls) == 2
        assert recording_sleep.delays == [1.0]

from __future__ import annotations

import random

import pytest

from hotel_content.services import MalformedResponseError, TransportError
from hotel_content.utils.backoff import backoff_delay, with_retries


class _Flaky:
    def __init__(self, failures: list[Exception], result: str = "ok") -> None:
        self.failures = list(failures)
        self.result = result
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.failures:
            raise self.failures.pop(0)
        return self.result


def _recorder(delays: list[float]):
    async def fake_sleep(delay: float) -> None:
        delays.append(delay)

    return fake_sleep


def test_backoff_delay_doubles_with_bounded_jitter():
    rng = random.Random(7)
    first = backoff_delay(0, 0.3, rng=rng)
    third = backoff_delay(2, 0.3, rng=rng)
    assert 0.3 <= first <= 0.4
    assert 1.2 <= third <= 1.3


@pytest.mark.asyncio
async def test_retryable_errors_are_retried_until_success():
    delays: list[float] = []
    operation = _Flaky([TransportError(503, "unavailable", retryable=True)] * 2)

    result = await with_retries(operation, retries=2, base_delay=0.3, sleep=_recorder(delays))

    assert result == "ok"
    assert operation.calls == 3
    assert len(delays) == 2
    assert delays[1] >= 0.6


@pytest.mark.asyncio
async def test_non_retryable_errors_raise_immediately():
    delays: list[float] = []
    operation = _Flaky([TransportError(404, "missing")])

    with pytest.raises(TransportError):
        await with_retries(operation, retries=3, sleep=_recorder(delays))

    assert operation.calls == 1
    assert delays == []


@pytest.mark.asyncio
async def test_malformed_responses_are_not_retried():
    operation = _Flaky([MalformedResponseError("bad json")])

    with pytest.raises(MalformedResponseError):
        await with_retries(operation, retries=3, sleep=_recorder([]))

    assert operation.calls == 1


@pytest.mark.asyncio
async def test_gives_up_after_configured_retries():
    operation = _Flaky([TransportError(None, "timed out", retryable=True)] * 5)

    with pytest.raises(TransportError):
        await with_retries(operation, retries=1, sleep=_recorder([]))

    assert operation.calls == 2

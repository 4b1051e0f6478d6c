"""Tests for the concurrent fan-out."""

import asyncio

import pytest

from streambyter.domain.models import MatchResult
from streambyter.infrastructure.parallel import MatchFanOut


class TestMatchFanOut:

    async def test_results_follow_input_order(self):
        delays = [0.05, 0.0, 0.03, 0.01]

        async def operation(index):
            await asyncio.sleep(delays[index])
            return index

        results = await MatchFanOut().run(list(range(len(delays))), operation)
        assert results == [0, 1, 2, 3]

    async def test_unbounded_runs_everything_at_once(self):
        in_flight = 0
        peak = 0

        async def operation(_):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1

        await MatchFanOut().run(list(range(20)), operation)
        assert peak == 20

    async def test_max_concurrency_caps_in_flight_operations(self):
        in_flight = 0
        peak = 0

        async def operation(_):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1

        await MatchFanOut(max_concurrency=3).run(list(range(20)), operation)
        assert peak == 3

    async def test_failure_propagates_and_cancels_siblings(self):
        cancelled = []

        async def operation(index):
            if index == 1:
                await asyncio.sleep(0.01)
                raise OSError("boom")
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(index)
                raise

        fan_out = MatchFanOut()
        with pytest.raises(OSError, match="boom"):
            await fan_out.run([0, 1, 2], operation)

        assert sorted(cancelled) == [0, 2]
        assert fan_out.get_stats()["failed"] is True

    async def test_empty_targets(self):
        async def operation(_):
            raise AssertionError("not called")

        assert await MatchFanOut().run([], operation) == []

    async def test_stats_count_matches(self):
        async def operation(index):
            return MatchResult(context={"i": index}, result=index % 2 == 0)

        fan_out = MatchFanOut()
        await fan_out.run(list(range(5)), operation)
        stats = fan_out.get_stats()
        assert stats["targets"] == 5
        assert stats["matched"] == 3
        assert stats["failed"] is False

    def test_rejects_invalid_limit(self):
        with pytest.raises(ValueError):
            MatchFanOut(max_concurrency=0)

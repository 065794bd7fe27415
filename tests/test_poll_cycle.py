import asyncio
from unittest.mock import AsyncMock

import pytest

from snipecord.core import FixedRateTicker, PollCycle, SuppressionTable
from snipecord.exceptions import SOCAPIError


class FakeClock:
    """Monotonic clock that only moves when told to (or when slept on)."""

    def __init__(self, start=100.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def table():
    return SuppressionTable({"01234": "CALCULUS I Section 01 (Index 01234)"}, cooldown_length=3)


def make_cycle(table, fetch, send_alert=None):
    return PollCycle(
        table=table,
        fetch_open_sections=fetch,
        send_alert=send_alert or AsyncMock(return_value=True),
        interval_sec=1.0,
    )


def test_tick_fires_alert_with_label(table):
    send_alert = AsyncMock(return_value=True)
    cycle = make_cycle(table, AsyncMock(return_value=["01234"]), send_alert)

    fired = asyncio.run(cycle.tick())

    assert fired == ["01234"]
    send_alert.assert_awaited_once_with("01234", "CALCULUS I Section 01 (Index 01234)")
    assert table.cooldown("01234") == 3


def test_tick_sequence_suppresses_then_reopens(table):
    fetch = AsyncMock(side_effect=[["01234"], ["01234"], [], ["01234"]])
    send_alert = AsyncMock(return_value=True)
    cycle = make_cycle(table, fetch, send_alert)

    async def run_ticks():
        return [await cycle.tick() for _ in range(4)]

    results = asyncio.run(run_ticks())

    assert results == [["01234"], [], [], ["01234"]]
    assert send_alert.await_count == 2


def test_fetch_error_leaves_table_untouched(table):
    fetch = AsyncMock(side_effect=[
        ["01234"],
        SOCAPIError("connection reset"),
        ["01234"],
    ])
    send_alert = AsyncMock(return_value=True)
    cycle = make_cycle(table, fetch, send_alert)

    async def scenario():
        await cycle.tick()
        before = table.snapshot()
        fired = await cycle.tick()
        assert fired == []
        assert table.snapshot() == before
        return await cycle.tick()

    fired = asyncio.run(scenario())

    # The next tick counts down normally from where the table was left
    assert fired == []
    assert table.cooldown("01234") == 2
    assert cycle.failed_ticks == 1
    assert send_alert.await_count == 1


def test_fetch_error_is_logged(table, caplog):
    cycle = make_cycle(table, AsyncMock(side_effect=SOCAPIError("bad json")))
    with caplog.at_level("ERROR"):
        asyncio.run(cycle.tick())
    assert "Failed to query open sections" in caplog.text


def test_failed_delivery_still_arms_cooldown(table):
    send_alert = AsyncMock(side_effect=RuntimeError("webhook down"))
    cycle = make_cycle(table, AsyncMock(return_value=["01234"]), send_alert)

    fired = asyncio.run(cycle.tick())

    assert fired == ["01234"]
    assert table.cooldown("01234") == 3


def test_undelivered_alert_is_not_retried(table):
    fetch = AsyncMock(return_value=["01234"])
    send_alert = AsyncMock(return_value=False)
    cycle = make_cycle(table, fetch, send_alert)

    async def run_ticks():
        for _ in range(3):
            await cycle.tick()

    asyncio.run(run_ticks())
    assert send_alert.await_count == 1


def test_ticker_first_tick_is_immediate():
    clock = FakeClock()
    ticker = FixedRateTicker(1.0, clock=clock, sleep=clock.sleep)

    asyncio.run(ticker.wait())

    assert clock.sleeps == []
    assert clock.now == 100.0


def test_ticker_waits_out_the_rest_of_the_interval():
    clock = FakeClock()
    ticker = FixedRateTicker(1.0, clock=clock, sleep=clock.sleep)

    async def scenario():
        await ticker.wait()
        clock.now += 0.25
        await ticker.wait()

    asyncio.run(scenario())

    assert clock.sleeps == [pytest.approx(0.75)]
    assert clock.now == pytest.approx(101.0)


def test_ticker_skips_missed_ticks_instead_of_bursting():
    clock = FakeClock()
    ticker = FixedRateTicker(1.0, clock=clock, sleep=clock.sleep)

    async def scenario():
        await ticker.wait()             # t=100
        await ticker.wait()             # t=101
        clock.now += 2.5                # slow iteration, t=103.5
        await ticker.wait()             # one catch-up tick, no sleep
        assert clock.sleeps == [pytest.approx(1.0)]
        await ticker.wait()             # back on the grid at t=104

    asyncio.run(scenario())

    assert ticker.skipped == 1
    assert clock.sleeps == [pytest.approx(1.0), pytest.approx(0.5)]
    assert clock.now == pytest.approx(104.0)


def test_ticker_rejects_bad_interval():
    with pytest.raises(ValueError):
        FixedRateTicker(0)


class StopPolling(Exception):
    pass


def test_run_ticks_until_stopped(table):
    clock = FakeClock()
    ticker = FixedRateTicker(1.0, clock=clock, sleep=clock.sleep)
    calls = []

    async def fetch():
        calls.append(clock.now)
        if len(calls) == 3:
            raise StopPolling()
        return []

    cycle = PollCycle(
        table=table,
        fetch_open_sections=fetch,
        send_alert=AsyncMock(),
        ticker=ticker,
    )

    with pytest.raises(StopPolling):
        asyncio.run(cycle.run())

    assert calls == [pytest.approx(100.0), pytest.approx(101.0), pytest.approx(102.0)]

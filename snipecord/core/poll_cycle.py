"""
Poll Cycle
==========

Fixed-rate loop that polls open sections and fires alerts.

Each tick:
1. Wait for the next tick (missed ticks are skipped, never replayed)
2. Fetch the open sections snapshot; on failure log it and skip the tick
3. Apply the snapshot to the suppression table
4. Send an alert for every index that fired
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Iterable, List, Optional

from ..exceptions import SOCAPIError
from .suppression import SuppressionTable

logger = logging.getLogger(__name__)

FetchOpenSections = Callable[[], Awaitable[Iterable[str]]]
SendAlert = Callable[[str, str], Awaitable[object]]


class FixedRateTicker:
    """
    Fixed-rate timer on a monotonic clock.

    The first wait() returns immediately. Later waits return on a fixed grid
    of start + n * interval. If the caller overran one or more grid points,
    the next wait() returns at once for a single catch-up tick and the
    missed points are dropped, so there is never a burst of ticks.
    """

    def __init__(
        self,
        interval_sec: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if interval_sec <= 0:
            raise ValueError("interval_sec must be positive")
        self.interval = interval_sec
        self._clock = clock
        self._sleep = sleep
        self._deadline: Optional[float] = None
        self.skipped = 0

    async def wait(self) -> None:
        """Block until the next tick is due."""
        now = self._clock()
        if self._deadline is None:
            self._deadline = now

        if now < self._deadline:
            await self._sleep(self._deadline - now)
            now = self._deadline

        missed = int((now - self._deadline) // self.interval)
        if missed:
            self.skipped += missed
            logger.debug(f"Poll cycle fell behind, skipping {missed} tick(s)")

        self._deadline += self.interval * (missed + 1)


class PollCycle:
    """
    Sequential poll/alert loop over a SuppressionTable.

    Only this loop reads or writes the table, one tick at a time.
    """

    def __init__(
        self,
        table: SuppressionTable,
        fetch_open_sections: FetchOpenSections,
        send_alert: SendAlert,
        interval_sec: float = 1.0,
        log: Optional[logging.Logger] = None,
        ticker: Optional[FixedRateTicker] = None,
    ):
        """
        Args:
            table: Suppression table seeded with the watched indexes
            fetch_open_sections: Coroutine returning open indexes; raises
                SOCAPIError on failure
            send_alert: Coroutine called with (index, label) for each alert.
                Expected to log and swallow its own delivery errors.
            interval_sec: Seconds between ticks
            log: Logger (default: module logger)
            ticker: Override the tick timer (tests)
        """
        self.table = table
        self.fetch_open_sections = fetch_open_sections
        self.send_alert = send_alert
        self.ticker = ticker or FixedRateTicker(interval_sec)
        self._log = log or logger
        self.ticks = 0
        self.failed_ticks = 0

    async def tick(self) -> List[str]:
        """
        Run one iteration.

        Returns:
            Indexes that alerted this tick (empty if the fetch failed)
        """
        self.ticks += 1
        try:
            open_indexes = await self.fetch_open_sections()
        except SOCAPIError as e:
            self.failed_ticks += 1
            self._log.error(f"Failed to query open sections: {e}")
            return []

        # Cooldowns are armed before delivery, whether or not the send succeeds
        fired = self.table.apply(open_indexes)

        for index in fired:
            label = self.table.label(index)
            try:
                await self.send_alert(index, label)
            except Exception as e:
                self._log.error(f"Failed to send alert for index {index}: {e!r}")

        return fired

    async def run(self) -> None:
        """Tick until the task is cancelled."""
        self._log.info(
            f"Watching {len(self.table)} indexes every {self.ticker.interval}s "
            f"(repeat timeout {self.table.cooldown_length} ticks)"
        )
        while True:
            await self.ticker.wait()
            await self.tick()

"""Refresh scheduler -- runs a refresh cycle at startup and on a fixed period.

Ticks fire every ``interval`` seconds measured from the start, whether the
previous cycle succeeded, fell back, or raised. A single-flight guard keeps
cycles from overlapping: a tick that lands while a cycle is still running
(e.g. waiting out a 4s backoff) is skipped, not queued.

The manual "retry" action goes through ``refresh_now()``, which joins the
in-flight cycle when there is one instead of starting a second request.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

import structlog

from longshort.exceptions import AcquisitionCancelled
from longshort.logging import get_logger
from longshort.market_data.acquisition import MarketDataAcquirer
from longshort.models import RefreshResult

logger = get_logger(__name__)

SnapshotListener = Callable[[RefreshResult], Awaitable[None]]


class RefreshScheduler:
    """Periodic, single-flight driver for MarketDataAcquirer.

    Args:
        acquirer: The acquisition component to drive.
        interval: Seconds between ticks (first tick runs immediately).
    """

    def __init__(self, acquirer: MarketDataAcquirer, interval: float = 5.0) -> None:
        self._acquirer = acquirer
        self._interval = interval
        self._running = False
        self._task: asyncio.Task | None = None  # type: ignore[type-arg]
        self._cycle: asyncio.Task | None = None  # type: ignore[type-arg]
        self._listeners: list[SnapshotListener] = []
        self._cycles_started = 0
        self._ticks_skipped = 0

    @property
    def is_running(self) -> bool:
        """Whether the periodic timer is active."""
        return self._running

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def cycles_started(self) -> int:
        return self._cycles_started

    @property
    def ticks_skipped(self) -> int:
        return self._ticks_skipped

    @property
    def cycle_in_flight(self) -> bool:
        return self._cycle is not None and not self._cycle.done()

    def add_listener(self, listener: SnapshotListener) -> None:
        """Register an async callback invoked with every published snapshot."""
        self._listeners.append(listener)

    async def start(self) -> None:
        """Start the timer; the first cycle begins immediately."""
        if self._running:
            logger.warning("refresh_scheduler_already_running")
            return
        self._running = True
        self._task = asyncio.create_task(self._tick_loop())
        logger.info("refresh_scheduler_started", interval=self._interval)

    async def stop(self) -> None:
        """Stop the timer, cancel any in-flight cycle and close the acquirer.

        Closing the acquirer trips its cancellation token, so backoff retries
        scheduled before shutdown never reach the network.
        """
        self._running = False
        for task in (self._task, self._cycle):
            if task is None or task.done():
                continue
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._task = None
        self._cycle = None
        await self._acquirer.close()
        logger.info(
            "refresh_scheduler_stopped",
            cycles_started=self._cycles_started,
            ticks_skipped=self._ticks_skipped,
        )

    async def refresh_now(self) -> RefreshResult | None:
        """Run a cycle right away, or wait for the one already running.

        Returns:
            The published RefreshResult, or None if the cycle was cancelled
            or failed unexpectedly.
        """
        if self.cycle_in_flight:
            logger.info("manual_refresh_joined_in_flight_cycle")
            cycle = self._cycle
        else:
            logger.info("manual_refresh_started")
            cycle = self._start_cycle()
        # Shield: a dropped HTTP request must not cancel the shared cycle
        return await asyncio.shield(cycle)  # type: ignore[arg-type]

    async def _tick_loop(self) -> None:
        """Fire a tick every interval on a fixed grid; never exits on cycle errors."""
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while self._running:
            try:
                self._on_tick()
            except Exception:
                logger.warning("refresh_tick_error", exc_info=True)
            next_tick += self._interval
            await asyncio.sleep(max(0.0, next_tick - loop.time()))

    def _on_tick(self) -> None:
        if self.cycle_in_flight:
            self._ticks_skipped += 1
            logger.info("refresh_tick_skipped", reason="cycle_in_flight")
            return
        self._start_cycle()

    def _start_cycle(self) -> asyncio.Task:  # type: ignore[type-arg]
        self._cycles_started += 1
        self._cycle = asyncio.create_task(self._run_cycle(self._cycles_started))
        return self._cycle

    async def _run_cycle(self, cycle: int) -> RefreshResult | None:
        with structlog.contextvars.bound_contextvars(cycle=cycle):
            try:
                result = await self._acquirer.refresh()
            except AcquisitionCancelled:
                logger.info("refresh_cycle_cancelled")
                return None
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.error("refresh_cycle_error", exc_info=True)
                return None

            await self._notify(result)
            return result

    async def _notify(self, result: RefreshResult) -> None:
        for listener in list(self._listeners):
            try:
                await listener(result)
            except Exception:
                logger.warning("snapshot_listener_error", exc_info=True)

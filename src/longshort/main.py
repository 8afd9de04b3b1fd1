"""Entry point for the Long or Short market signal poller.

Wires all components together and either embeds the FastAPI dashboard or
runs headless. With the dashboard enabled (default) the refresh scheduler and
the API share a single asyncio event loop via uvicorn's programmatic API and
FastAPI's lifespan context manager.

Component wiring order (in build_components):
1. CoinGeckoClient (markets endpoint)
2. SimulatedFundingRates (funding rate source)
3. MarketDataAcquirer (fetch, retry, fallback, publish)
4. RefreshScheduler (5s single-flight timer)
5. SignalEngine (read-only signals over the latest snapshot)
"""

import asyncio
import signal
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from longshort.config import AppSettings
from longshort.logging import get_logger, setup_logging
from longshort.market_data.acquisition import MarketDataAcquirer
from longshort.market_data.coingecko import CoinGeckoClient
from longshort.market_data.funding import SimulatedFundingRates
from longshort.models import RefreshResult
from longshort.scheduler import RefreshScheduler
from longshort.signals.engine import SignalEngine, derive_signal


def build_components(settings: AppSettings) -> dict[str, Any]:
    """Build all components from settings.

    Args:
        settings: Application-wide settings.

    Returns:
        Dict mapping component names to instances.
    """
    md = settings.market_data

    client = CoinGeckoClient(
        base_url=md.base_url,
        api_key=md.api_key.get_secret_value(),
        timeout_seconds=md.timeout_seconds,
    )
    funding_source = SimulatedFundingRates()
    acquirer = MarketDataAcquirer(
        client=client,
        funding_source=funding_source,
        max_retries=md.max_retries,
        retry_base_delay=md.retry_base_delay,
        max_empty_refetches=md.max_empty_refetches,
    )
    scheduler = RefreshScheduler(acquirer, interval=settings.refresh.interval)
    signal_engine = SignalEngine(acquirer)

    return {
        "client": client,
        "funding_source": funding_source,
        "acquirer": acquirer,
        "scheduler": scheduler,
        "signal_engine": signal_engine,
    }


async def log_snapshot(result: RefreshResult) -> None:
    """Snapshot listener for headless mode: one log line per refresh."""
    logger = get_logger("longshort.main")
    logger.info(
        "signals_updated",
        source=result.source.value,
        error=result.error,
        signals={s: derive_signal(s, result).value for s in result.symbols},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage component lifecycle within the FastAPI application.

    On startup: stores components on app.state, starts the refresh scheduler
    (first cycle runs immediately) and the WebSocket update loop.

    On shutdown: cancels the update loop and stops the scheduler, which also
    cancels any in-flight cycle and pending retries.
    """
    from longshort.dashboard.update_loop import dashboard_update_loop

    logger = get_logger("longshort.main")
    settings = app.state.settings
    components = app.state.components

    app.state.acquirer = components["acquirer"]
    app.state.scheduler = components["scheduler"]
    app.state.signal_engine = components["signal_engine"]
    app.state.update_interval = settings.dashboard.update_interval

    await components["scheduler"].start()
    update_task = asyncio.create_task(dashboard_update_loop(app))

    logger.info("lifespan_started", refresh_interval=settings.refresh.interval)

    yield

    update_task.cancel()
    try:
        await update_task
    except asyncio.CancelledError:
        pass

    await components["scheduler"].stop()

    logger.info("longshort_stopped")


async def run() -> None:
    """Run the poller.

    When dashboard is enabled (DASHBOARD_ENABLED=true, the default):
    - Creates the FastAPI dashboard app with lifespan
    - Runs scheduler and API in a single asyncio event loop via uvicorn

    When dashboard is disabled (DASHBOARD_ENABLED=false):
    - Runs the scheduler directly and logs signals after every refresh
    - SIGINT/SIGTERM stop the scheduler gracefully
    """
    settings = AppSettings()

    setup_logging(settings.log_level)
    logger = get_logger("longshort.main")

    components = build_components(settings)

    if settings.dashboard.enabled:
        from longshort.dashboard.app import create_dashboard_app

        app = create_dashboard_app(lifespan=lifespan)
        app.state.settings = settings
        app.state.components = components

        logger.info(
            "starting_with_dashboard",
            host=settings.dashboard.host,
            port=settings.dashboard.port,
        )

        config = uvicorn.Config(
            app,
            host=settings.dashboard.host,
            port=settings.dashboard.port,
            log_level="warning",  # Suppress uvicorn access logs
        )
        server = uvicorn.Server(config)
        await server.serve()
        return

    scheduler: RefreshScheduler = components["scheduler"]
    scheduler.add_listener(log_snapshot)

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop_event.set)

    logger.info("starting_without_dashboard", refresh_interval=settings.refresh.interval)

    await scheduler.start()
    try:
        await stop_event.wait()
    finally:
        await scheduler.stop()
        logger.info("longshort_stopped")


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()

"""Periodic WebSocket update loop for real-time dashboard refresh.

Pushes the latest snapshot (status, assets, signals) as one JSON message to
all connected WebSocket clients whenever the acquirer has published a new
RefreshResult since the last push.
"""

from __future__ import annotations

import asyncio

import structlog
from fastapi import FastAPI

from longshort.dashboard.routes.api import snapshot_payload
from longshort.models import RefreshResult

log = structlog.get_logger(__name__)


async def dashboard_update_loop(app: FastAPI) -> None:
    """Periodically broadcast the latest snapshot via WebSocket.

    Runs until the application shuts down. Each iteration:
    1. Sleeps for the configured update interval
    2. Skips when no client is connected or nothing new was published
    3. Serializes the snapshot and broadcasts it to all clients

    Args:
        app: The FastAPI application with state containing hub, acquirer
             and scheduler.
    """
    update_interval = getattr(app.state, "update_interval", 5)
    last_sent: RefreshResult | None = None

    log.info("dashboard_update_loop_started", interval=update_interval)

    while True:
        try:
            await asyncio.sleep(update_interval)

            hub = app.state.hub
            if not hub.connections:
                continue

            result = app.state.acquirer.latest
            if result is None or result is last_sent:
                continue

            scheduler = app.state.scheduler
            await hub.broadcast(
                snapshot_payload(result, scheduler.is_running, scheduler.interval)
            )
            last_sent = result

        except asyncio.CancelledError:
            log.info("dashboard_update_loop_cancelled")
            break
        except Exception:
            log.warning("dashboard_update_loop_error", exc_info=True)
            # Continue loop on error -- don't crash the update loop
            await asyncio.sleep(1)

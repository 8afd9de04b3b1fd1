"""FastAPI dashboard application factory with JSON API and WebSocket hub."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI

from longshort.dashboard.routes import actions, api, ws
from longshort.dashboard.routes.ws import DashboardHub


def create_dashboard_app(lifespan: Any = None) -> FastAPI:
    """Create and configure the FastAPI dashboard application.

    Args:
        lifespan: Optional async context manager for application lifespan events.
                  Used by main.py to start and stop the refresh scheduler.

    Returns:
        Configured FastAPI application with a WebSocket hub and routes. The
        caller stores ``acquirer``, ``scheduler`` and ``signal_engine`` on
        ``app.state`` before serving requests.
    """
    app = FastAPI(
        title="Long or Short",
        description="Crypto prices and funding-rate trading signals",
        lifespan=lifespan,
    )

    # One hub per app so separate apps (e.g. in tests) never share clients
    app.state.hub = DashboardHub()

    app.include_router(api.router, prefix="/api")
    app.include_router(actions.router, prefix="/actions")
    app.include_router(ws.router)

    return app

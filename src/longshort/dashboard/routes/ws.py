"""WebSocket hub for real-time snapshot broadcast to dashboard clients."""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from longshort.dashboard.routes.api import snapshot_payload

log = structlog.get_logger(__name__)

router = APIRouter()


class DashboardHub:
    """Manages WebSocket connections and broadcasts JSON snapshots to all clients."""

    def __init__(self) -> None:
        self.connections: list[WebSocket] = []

    async def connect(self, ws: WebSocket) -> None:
        """Accept a WebSocket connection and add it to the active connections list."""
        await ws.accept()
        self.connections.append(ws)
        log.info("dashboard_ws_connected", total=len(self.connections))

    def disconnect(self, ws: WebSocket) -> None:
        """Remove a WebSocket connection from the active connections list."""
        if ws in self.connections:
            self.connections.remove(ws)
        log.info("dashboard_ws_disconnected", total=len(self.connections))

    async def broadcast(self, payload: dict[str, Any]) -> None:
        """Send a JSON payload to all connected clients, removing broken connections."""
        for ws in self.connections.copy():
            try:
                await ws.send_json(payload)
            except Exception:
                self.connections.remove(ws)
                log.warning("dashboard_ws_broadcast_error", remaining=len(self.connections))


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """WebSocket endpoint for real-time dashboard updates.

    New clients get the current snapshot right away instead of waiting
    for the next periodic push.
    """
    state = websocket.app.state
    ws_hub: DashboardHub = state.hub
    await ws_hub.connect(websocket)
    try:
        result = state.acquirer.latest
        if result is not None:
            await websocket.send_json(
                snapshot_payload(result, state.scheduler.is_running, state.scheduler.interval)
            )
        while True:
            # Consume messages to keep connection alive
            await websocket.receive_text()
    except WebSocketDisconnect:
        ws_hub.disconnect(websocket)

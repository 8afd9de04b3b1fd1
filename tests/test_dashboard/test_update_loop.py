"""Tests for the periodic WebSocket update loop."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from longshort.dashboard.update_loop import dashboard_update_loop

from conftest import make_result


def _app(latest, connections):
    hub = MagicMock(connections=connections)
    hub.broadcast = AsyncMock()
    state = SimpleNamespace(
        hub=hub,
        acquirer=MagicMock(latest=latest),
        scheduler=MagicMock(is_running=True, interval=5.0),
        update_interval=0.01,
    )
    return SimpleNamespace(state=state)


async def _run_for(app, seconds: float) -> None:
    task = asyncio.create_task(dashboard_update_loop(app))
    await asyncio.sleep(seconds)
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass


class TestDashboardUpdateLoop:

    @pytest.mark.asyncio
    async def test_broadcasts_new_snapshot_once(self) -> None:
        app = _app(make_result(), connections=[object()])

        await _run_for(app, 0.06)

        app.state.hub.broadcast.assert_awaited_once()
        payload = app.state.hub.broadcast.await_args.args[0]
        assert len(payload["assets"]) == 10
        assert payload["status"]["source"] == "live"

    @pytest.mark.asyncio
    async def test_broadcasts_again_after_new_snapshot(self) -> None:
        app = _app(make_result(), connections=[object()])
        task = asyncio.create_task(dashboard_update_loop(app))
        await asyncio.sleep(0.04)
        app.state.acquirer.latest = make_result()
        await asyncio.sleep(0.04)
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

        assert app.state.hub.broadcast.await_count == 2

    @pytest.mark.asyncio
    async def test_skips_without_clients(self) -> None:
        app = _app(make_result(), connections=[])

        await _run_for(app, 0.04)

        app.state.hub.broadcast.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_skips_while_loading(self) -> None:
        app = _app(None, connections=[object()])

        await _run_for(app, 0.04)

        app.state.hub.broadcast.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_survives_broadcast_errors(self) -> None:
        app = _app(make_result(), connections=[object()])
        app.state.hub.broadcast.side_effect = RuntimeError("socket gone")

        await _run_for(app, 0.05)

        assert app.state.hub.broadcast.await_count >= 1

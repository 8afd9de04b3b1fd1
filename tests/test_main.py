"""Tests for component wiring and the FastAPI lifespan."""

import random
import time

import httpx
import pytest
from fastapi.testclient import TestClient

from longshort.config import AppSettings
from longshort.dashboard.app import create_dashboard_app
from longshort.main import build_components, lifespan, log_snapshot
from longshort.market_data.acquisition import MarketDataAcquirer
from longshort.market_data.coingecko import CoinGeckoClient
from longshort.market_data.funding import SimulatedFundingRates
from longshort.scheduler import RefreshScheduler
from longshort.signals.engine import SignalEngine

from conftest import make_result


def test_build_components_wiring(mock_settings: AppSettings) -> None:
    components = build_components(mock_settings)

    assert isinstance(components["client"], CoinGeckoClient)
    assert isinstance(components["funding_source"], SimulatedFundingRates)
    assert isinstance(components["acquirer"], MarketDataAcquirer)
    assert isinstance(components["signal_engine"], SignalEngine)
    assert components["scheduler"].interval == mock_settings.refresh.interval
    assert components["acquirer"].latest is None


@pytest.mark.asyncio
async def test_log_snapshot_accepts_result() -> None:
    await log_snapshot(make_result())


def test_lifespan_runs_scheduler(mock_settings: AppSettings, markets_payload) -> None:
    client = CoinGeckoClient(
        base_url=mock_settings.market_data.base_url,
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=markets_payload)),
    )
    acquirer = MarketDataAcquirer(client, SimulatedFundingRates(rng=random.Random(3)))
    scheduler = RefreshScheduler(acquirer, interval=60.0)

    app = create_dashboard_app(lifespan=lifespan)
    app.state.settings = mock_settings
    app.state.components = {
        "acquirer": acquirer,
        "scheduler": scheduler,
        "signal_engine": SignalEngine(acquirer),
    }

    with TestClient(app) as test_client:
        status: dict = {}
        for _ in range(100):
            status = test_client.get("/api/status").json()
            if not status["loading"]:
                break
            time.sleep(0.01)

        assert status["loading"] is False
        assert status["running"] is True
        assert status["source"] == "live"
        assert test_client.get("/api/signals").json()["BTC"] == "SELL"

    assert not scheduler.is_running
    assert acquirer.closed

"""JSON API endpoints for the presentation layer.

The front end renders one card per asset from ``/api/assets``; each entry
already carries its signal, chart link and display strings. While the first
refresh cycle is still running the data endpoints answer 503 ``loading``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from longshort.dashboard.formatting import (
    format_change,
    format_price,
    format_time_ago,
    format_volume,
)
from longshort.dashboard.links import chart_url, tradingview_symbol
from longshort.models import AssetRecord, RefreshResult
from longshort.signals.engine import derive_signal

router = APIRouter()


def _decimal_to_str(value: Decimal | None) -> str | None:
    return str(value) if value is not None else None


def asset_to_dict(asset: AssetRecord, result: RefreshResult) -> dict[str, Any]:
    """Serialize one asset with its signal, funding rate and display strings."""
    rate = result.funding_rate(asset.symbol)
    return {
        "id": asset.id,
        "symbol": asset.symbol,
        "name": asset.name,
        "image_url": asset.image_url,
        "current_price": str(asset.current_price),
        "change_24h": str(asset.change_24h),
        "change_7d": _decimal_to_str(asset.change_7d),
        "volume_24h": str(asset.volume_24h),
        "high_24h": str(asset.high_24h),
        "low_24h": str(asset.low_24h),
        "ath_price": str(asset.ath_price),
        "ath_change_pct": _decimal_to_str(asset.ath_change_pct),
        "circulating_supply": str(asset.circulating_supply),
        "funding_rate": _decimal_to_str(rate),
        "signal": derive_signal(asset.symbol, result).value,
        "chart_url": chart_url(asset.symbol),
        "display": {
            "price": format_price(asset.current_price),
            "change_24h": format_change(asset.change_24h),
            "change_7d": format_change(asset.change_7d),
            "volume_24h": format_volume(asset.volume_24h),
            "range_24h": f"{format_price(asset.low_24h)} - {format_price(asset.high_24h)}",
            "ath_distance": format_change(asset.ath_change_pct, places=1),
        },
    }


def status_to_dict(result: RefreshResult | None, running: bool, interval: float) -> dict[str, Any]:
    """Header/banner state: last update, advisory, data source."""
    return {
        "loading": result is None,
        "running": running,
        "last_updated": result.updated_at.isoformat() if result else None,
        "last_updated_display": format_time_ago(result.updated_at if result else None),
        "error": result.error if result else None,
        "source": result.source.value if result else None,
        "attempts": result.attempts if result else 0,
        "asset_count": len(result.assets) if result else 0,
        "refresh_interval": interval,
    }


def snapshot_payload(result: RefreshResult, running: bool, interval: float) -> dict[str, Any]:
    """Everything a client needs to redraw the grid in one message."""
    return {
        "status": status_to_dict(result, running, interval),
        "assets": [asset_to_dict(asset, result) for asset in result.assets],
    }


def _require_snapshot(request: Request) -> RefreshResult:
    result = request.app.state.acquirer.latest
    if result is None:
        raise HTTPException(status_code=503, detail="loading")
    return result


@router.get("/assets")
async def get_assets(request: Request) -> JSONResponse:
    """Asset cards in tracked-coin order."""
    result = _require_snapshot(request)
    return JSONResponse(content=[asset_to_dict(asset, result) for asset in result.assets])


@router.get("/funding-rates")
async def get_funding_rates(request: Request) -> JSONResponse:
    """Current (simulated) funding rates keyed by uppercase symbol."""
    result = _require_snapshot(request)
    return JSONResponse(
        content={symbol: str(rate) for symbol, rate in result.funding_rates.items()}
    )


@router.get("/signals")
async def get_signals(request: Request) -> JSONResponse:
    """BUY/SELL/NONE per asset, in display order."""
    _require_snapshot(request)
    signals = request.app.state.signal_engine.signals()
    return JSONResponse(content={symbol: signal.value for symbol, signal in signals.items()})


@router.get("/status")
async def get_status(request: Request) -> JSONResponse:
    """Last-updated time, advisory and scheduler state; available while loading."""
    scheduler = request.app.state.scheduler
    return JSONResponse(
        content=status_to_dict(
            request.app.state.acquirer.latest, scheduler.is_running, scheduler.interval
        )
    )


@router.get("/chart/{symbol}")
async def get_chart_link(symbol: str) -> JSONResponse:
    """TradingView deep link for a symbol, tracked or not."""
    return JSONResponse(content={
        "symbol": symbol.upper(),
        "tradingview_symbol": tradingview_symbol(symbol),
        "url": chart_url(symbol),
    })

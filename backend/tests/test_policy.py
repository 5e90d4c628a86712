import datetime
import json
import math

import pytest

from app.api.pipelines import ECONOMIC, STOCKS
from app.api.policy import configuration_error, decide, internal_error
from app.config.settings import settings
from app.schemas.quotes import (
    QuoteFailure,
    QuoteSuccess,
    ResponseEnvelope,
    SymbolDescriptor,
    percent_change,
)

NOW = datetime.datetime(2026, 1, 5, 15, 30, tzinfo=datetime.UTC)

APPLE = SymbolDescriptor(symbol="AAPL", name="Apple Inc.", category="Technology")
PFIZER = SymbolDescriptor(symbol="PFE", name="Pfizer Inc.", category="Healthcare")
SPX = SymbolDescriptor(
    symbol="^GSPC", name="S&P 500", category="Index", description="US Large Cap Index"
)
VIX = SymbolDescriptor(
    symbol="^VIX", name="CBOE Volatility Index", category="Volatility", description="Market Fear Gauge"
)
GOLD = SymbolDescriptor(
    symbol="GC=F", name="Gold Futures", category="Commodities", description="Gold Price"
)


def success(descriptor: SymbolDescriptor, value: float = 110.0, previous_close: float = 100.0):
    change = value - previous_close
    return QuoteSuccess(
        descriptor=descriptor,
        value=value,
        previous_close=previous_close,
        change=change,
        change_percent=percent_change(change, previous_close),
        high=value + 2,
        low=value - 2,
        timestamp=NOW,
    )


def failure(descriptor: SymbolDescriptor, error: str = "No data available") -> QuoteFailure:
    return QuoteFailure(descriptor=descriptor, error=error, timestamp=NOW)


def render(decision) -> dict:
    return json.loads(decision.to_response().body)


def test_all_failed_is_service_unavailable_with_diagnostics() -> None:
    envelope = ResponseEnvelope(timestamp=NOW, results=[failure(APPLE), failure(PFIZER)])

    decision = decide(envelope, STOCKS)
    body = render(decision)

    assert decision.status_code == 503
    assert body["error"] == "Service unavailable"
    assert body["message"] == "Unable to fetch stock data from API"
    assert [item["ticker"] for item in body["data"]] == ["AAPL", "PFE"]
    apple = body["data"][0]
    assert set(apple) == {"ticker", "companyName", "sector", "price", "error", "timestamp"}
    assert apple["companyName"] == "Apple Inc."
    assert apple["price"] is None
    assert apple["error"] == "No data available"
    assert apple["timestamp"].startswith("2026-01-05T15:30:00")
    assert "success" not in body


def test_stock_success_has_no_grouping() -> None:
    envelope = ResponseEnvelope(timestamp=NOW, results=[success(APPLE), failure(PFIZER)])

    decision = decide(envelope, STOCKS)
    body = render(decision)

    assert decision.status_code == 200
    assert body["success"] is True
    assert "grouped" not in body
    apple = body["data"][0]
    assert apple["price"] == 110.0
    assert apple["previousClose"] == 100.0
    assert apple["change"] == 10.0
    assert apple["changePercent"] == pytest.approx(10.0)
    assert apple["high"] == 112.0
    assert apple["low"] == 108.0
    assert "error" not in apple
    assert body["data"][1]["error"] == "No data available"
    assert body["data"][1]["price"] is None


def test_partial_indicator_success_groups_only_successes() -> None:
    envelope = ResponseEnvelope(
        timestamp=NOW, results=[failure(SPX), success(VIX, 18.0, 20.0), failure(GOLD)]
    )

    decision = decide(envelope, ECONOMIC)
    body = render(decision)

    assert decision.status_code == 200
    assert [item["symbol"] for item in body["data"]] == ["^GSPC", "^VIX", "GC=F"]
    assert body["data"][0]["value"] is None
    assert body["data"][0]["description"] == "US Large Cap Index"
    assert list(body["grouped"]) == ["Volatility"]
    vix = body["grouped"]["Volatility"][0]
    assert vix["type"] == "Volatility"
    assert vix["value"] == 18.0
    assert vix["changePercent"] == pytest.approx(-10.0)


def test_nan_change_percent_renders_as_null() -> None:
    result = success(APPLE, value=5.0, previous_close=0.0)
    assert math.isnan(result.change_percent)

    decision = decide(ResponseEnvelope(timestamp=NOW, results=[result]), STOCKS)
    body = render(decision)

    assert decision.status_code == 200
    assert body["data"][0]["changePercent"] is None
    assert body["data"][0]["change"] == 5.0


def test_configuration_error_shape() -> None:
    decision = configuration_error()

    assert decision.status_code == 500
    assert render(decision) == {
        "error": "Configuration error",
        "message": "API key not configured. Please set API_KEY environment variable.",
    }


def test_internal_error_hides_details_in_production(monkeypatch) -> None:
    monkeypatch.setattr(settings, "environment", "production")

    body = render(internal_error(RuntimeError("boom"), ECONOMIC))

    assert body == {
        "error": "Internal server error",
        "message": "An unexpected error occurred while fetching economic data",
    }


def test_internal_error_includes_details_outside_production(monkeypatch) -> None:
    monkeypatch.setattr(settings, "environment", "development")

    decision = internal_error(RuntimeError("boom"), STOCKS)
    body = render(decision)

    assert decision.status_code == 500
    assert body["details"] == "boom"

from __future__ import annotations

from datetime import datetime, timezone
from math import isclose

from flask.testing import FlaskClient

from retirewise.core.inputs import DEFAULT_INPUTS
from retirewise.core.portfolio import (
    add_holding,
    market_value_hkd,
    remove_holding,
    summarize_holdings,
    sync_holdings_to_inputs,
    unrealized_pl_hkd,
)
from retirewise.models import StockHolding, StockQuote


def apple(**overrides) -> StockHolding:
    values = dict(
        id="a1",
        ticker="AAPL",
        name="Apple Inc.",
        quantity=10,
        entryPrice=150.0,
        currentPrice=200.0,
        currency="USD",
        exchangeRateToHKD=7.8,
    )
    values.update(overrides)
    return StockHolding(**values)


def test_market_value_uses_current_price_and_fx():
    assert isclose(market_value_hkd(apple()), 10 * 200 * 7.8)


def test_market_value_falls_back_to_entry_price():
    assert isclose(market_value_hkd(apple(currentPrice=None)), 10 * 150 * 7.8)


def test_unrealized_pl():
    assert isclose(unrealized_pl_hkd(apple()), 10 * 50 * 7.8)
    # no fetched price: the whole cost basis shows as a loss
    assert isclose(unrealized_pl_hkd(apple(currentPrice=None)), -10 * 150 * 7.8)


def test_summary_totals():
    tencent = StockHolding(
        id="t1", ticker="0700.HK", name="Tencent", quantity=100, entryPrice=300, currentPrice=400
    )
    summary = summarize_holdings([apple(), tencent])

    assert summary.holdings == 2
    assert isclose(summary.marketValueHKD, 15600 + 40000)
    assert isclose(summary.unrealizedPLHKD, 3900 + 10000)


def test_empty_summary():
    summary = summarize_holdings([])
    assert summary.holdings == 0
    assert summary.marketValueHKD == 0
    assert summary.unrealizedPLHKD == 0


def test_sync_sets_stock_bucket_and_total():
    inputs = DEFAULT_INPUTS.model_copy(update={"stockHoldings": (apple(),)})
    synced = sync_holdings_to_inputs(inputs)

    assert isclose(synced.savingsStock, 15600)
    assert isclose(synced.currentSavings, 10000 + 15600 + 10000 + 5000)


def test_add_and_remove_holding():
    quote = StockQuote(
        symbol="0700.HK", name="Tencent Holdings", price=405.2, currency="HKD", exchangeRateToHKD=1.0
    )
    now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    added = add_holding(DEFAULT_INPUTS, quote, quantity=100, now=now)
    holding = added.stockHoldings[0]
    assert holding.ticker == "0700.HK"
    assert holding.entryPrice == 405.2
    assert holding.currentPrice == 405.2
    assert holding.fetchedAt == now.isoformat()
    # holdings alone do not touch the asset buckets
    assert added.currentSavings == DEFAULT_INPUTS.currentSavings

    removed = remove_holding(added, holding.id)
    assert removed.stockHoldings == ()


def test_add_holding_with_entry_price():
    quote = StockQuote(symbol="AAPL", name="Apple", price=200, currency="USD", exchangeRateToHKD=7.8)
    added = add_holding(DEFAULT_INPUTS, quote, quantity=1, entry_price=120)
    assert added.stockHoldings[0].entryPrice == 120


def test_portfolio_summary_endpoint(client: FlaskClient):
    resp = client.post(
        "/api/portfolio/summary", json={"holdings": [apple().model_dump()]}
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["holdings"] == 1
    assert isclose(body["marketValueHKD"], 15600)


def test_portfolio_summary_rejects_bad_holding(client: FlaskClient):
    resp = client.post("/api/portfolio/summary", json={"holdings": [{"ticker": "AAPL"}]})
    assert resp.status_code == 400


def test_portfolio_summary_rejects_non_finite_price(client: FlaskClient):
    resp = client.post(
        "/api/portfolio/summary",
        data='{"holdings": [{"id": "h1", "ticker": "AAPL", "name": "Apple", '
        '"quantity": 10, "entryPrice": Infinity}]}',
        content_type="application/json",
    )

    assert resp.status_code == 400
    detail = resp.get_json()["detail"]
    assert detail[0]["loc"] == ["holdings", 0, "entryPrice"]

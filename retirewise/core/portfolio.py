from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from retirewise.core.inputs import update_inputs
from retirewise.models import FinancialInputs, PortfolioSummary, StockHolding, StockQuote


def market_value_hkd(holding: StockHolding) -> float:
    """Quantity at the latest known price (entry price if never fetched), in HKD."""
    price = holding.currentPrice or holding.entryPrice
    return holding.quantity * price * holding.exchangeRateToHKD


def unrealized_pl_hkd(holding: StockHolding) -> float:
    # an unfetched price counts as zero, so the whole cost basis shows as loss
    market = holding.quantity * (holding.currentPrice or 0)
    cost_basis = holding.quantity * holding.entryPrice
    return (market - cost_basis) * holding.exchangeRateToHKD


def summarize_holdings(holdings: Iterable[StockHolding]) -> PortfolioSummary:
    holdings = list(holdings)
    return PortfolioSummary(
        holdings=len(holdings),
        marketValueHKD=sum(market_value_hkd(h) for h in holdings),
        unrealizedPLHKD=sum(unrealized_pl_hkd(h) for h in holdings),
    )


def sync_holdings_to_inputs(inputs: FinancialInputs) -> FinancialInputs:
    """Set the stock bucket to the holdings' market value; currentSavings follows."""
    total = summarize_holdings(inputs.stockHoldings).marketValueHKD
    return update_inputs(inputs, {"savingsStock": total})


def add_holding(
    inputs: FinancialInputs,
    quote: StockQuote,
    quantity: float,
    entry_price: Optional[float] = None,
    now: Optional[datetime] = None,
) -> FinancialInputs:
    """Append a holding built from a looked-up quote. Entry price defaults to the quote price."""
    now = now or datetime.now(timezone.utc)
    holding = StockHolding(
        id=str(int(now.timestamp() * 1000)),
        ticker=quote.symbol,
        name=quote.name,
        quantity=quantity,
        entryPrice=quote.price if entry_price is None else entry_price,
        currentPrice=quote.price,
        currency=quote.currency,
        exchangeRateToHKD=quote.exchangeRateToHKD,
        fetchedAt=now.isoformat(),
    )
    return update_inputs(
        inputs, {"stockHoldings": [*inputs.stockHoldings, holding]}
    )


def remove_holding(inputs: FinancialInputs, holding_id: str) -> FinancialInputs:
    remaining = [h for h in inputs.stockHoldings if h.id != holding_id]
    return update_inputs(inputs, {"stockHoldings": remaining})

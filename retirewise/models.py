from __future__ import annotations

from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class StockHolding(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    id: str
    ticker: str
    name: str
    quantity: float
    entryPrice: float
    currentPrice: Optional[float] = None
    currency: str = "HKD"
    exchangeRateToHKD: float = 1.0
    fetchedAt: Optional[str] = None


class FinancialInputs(BaseModel):
    """Assumptions for one projection, in today's purchasing power.

    Rates are percentages (7.0 means 7%). currentSavings is normally the sum of
    the four savings* breakdown fields, but the engine takes it as given.
    Records are frozen; change them with update_inputs or model_copy.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    currentAge: int
    targetRetirementAge: int
    currentSavings: float

    savingsCash: float = 0.0
    savingsStock: float = 0.0
    savingsBonds: float = 0.0
    savingsOther: float = 0.0
    stockHoldings: Tuple[StockHolding, ...] = ()

    currentMonthlySavings: float
    monthlySpending: float
    expectedAnnualReturn: float
    inflationRate: float


class YearlyData(BaseModel):
    model_config = ConfigDict(extra="forbid")

    age: int
    # balance at the start of the age-year, whole currency units (nan/inf kept as float)
    savingsCurrent: Union[int, float]
    # kept for payload compatibility, always zero
    savingsRequired: float = 0.0
    totalContributedRequired: float = 0.0
    totalContributedCurrent: float = 0.0


class CalculationResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    nestEggTarget: float
    projectedNestEgg: float
    monthlyContributionRequired: float
    # positive = shortfall, negative = surplus
    savingsGap: float
    yearsToRetire: int
    projection: List[YearlyData] = Field(default_factory=list)
    isPossible: bool


class StockQuote(BaseModel):
    symbol: str
    name: str
    price: float
    currency: str = "HKD"
    exchangeRateToHKD: float = 1.0


class PortfolioSummary(BaseModel):
    holdings: int
    marketValueHKD: float
    unrealizedPLHKD: float

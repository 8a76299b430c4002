from __future__ import annotations

import math
from typing import Iterator, List, Optional, Tuple, Union

from retirewise.core.constants import (
    BENCHMARK_WITHDRAWAL_RATE,
    FEASIBILITY_CEILING,
    MAX_AGE,
    MONTHS_PER_YEAR,
)
from retirewise.models import CalculationResult, FinancialInputs, YearlyData


def nest_egg_target(monthly_spending: float) -> float:
    """Nest egg that supports monthly_spending under the 4% withdrawal rule."""
    annual_spending = monthly_spending * MONTHS_PER_YEAR
    return annual_spending / BENCHMARK_WITHDRAWAL_RATE


def monthly_real_rate(expected_annual_return: float, inflation_rate: float) -> float:
    """
    Real monthly rate from two annual percentages.

    The annual real rate is the plain difference of the two percentages, divided
    by 12 without geometric conversion. Callers rely on this exact form.
    """
    real_annual_return = (expected_annual_return - inflation_rate) / 100
    return real_annual_return / MONTHS_PER_YEAR


def required_monthly_contribution(
    target: float,
    current_savings: float,
    rate: float,
    months: int,
) -> float:
    """
    Solve the ordinary-annuity future value equation for the payment.

    With a zero rate the shortfall is spread evenly over the months. The result
    is floored at zero: an already funded plan needs no contribution.
    """
    try:
        growth_factor = (1 + rate) ** months
    except OverflowError:
        growth_factor = math.inf
    future_value_existing = current_savings * growth_factor

    if rate == 0:
        required = (target - current_savings) / months
    else:
        numerator = target - future_value_existing
        denominator = (growth_factor - 1) / rate
        required = numerator / denominator

    # nan stays nan
    return max(required, 0.0)


def simulate_balances(
    inputs: FinancialInputs, rate: float, max_age: int = MAX_AGE
) -> Iterator[Tuple[int, float]]:
    """
    Yield (age, balance) for each age from currentAge through max_age.

    The balance is the unrounded wealth at the START of the age-year. Each year
    is then stepped monthly: growth on the running balance, plus
    currentMonthlySavings before retirement age or minus monthlySpending from
    retirement age on. The balance is allowed to go negative.
    """
    balance = float(inputs.currentSavings)

    for age in range(inputs.currentAge, max_age + 1):
        yield age, balance

        for _ in range(MONTHS_PER_YEAR):
            growth = balance * rate
            if age < inputs.targetRetirementAge:
                balance = balance + growth + inputs.currentMonthlySavings
            else:
                balance = balance + growth - inputs.monthlySpending


def _round_half_up(value: float) -> Union[int, float]:
    # halves round toward +inf, matching the web client; nan/inf pass through
    if not math.isfinite(value):
        return value
    return int(math.floor(value + 0.5))


def project_wealth(inputs: FinancialInputs, rate: float) -> List[YearlyData]:
    """Year-by-year projection rows, rounded to whole currency units for display."""
    return [
        YearlyData(age=age, savingsCurrent=_round_half_up(balance))
        for age, balance in simulate_balances(inputs, rate)
    ]


def _balance_at(projection: List[YearlyData], age: int) -> Optional[float]:
    for row in projection:
        if row.age == age:
            return row.savingsCurrent
    return None


def calculate_retirement(inputs: FinancialInputs) -> CalculationResult:
    """
    Project retirement readiness for one set of inputs.

    Steps:
      1) Guard: no years left to retirement returns a zeroed result.
      2) Target nest egg from the 4% rule.
      3) Real monthly rate from expected return minus inflation.
      4) Required monthly contribution from the annuity solve.
      5) Lifecycle projection from currentAge through age 100.
      6) Projected nest egg = projection balance at the retirement age.
      7) Feasibility flag against a fixed ceiling.

    Pure and deterministic; never raises on numeric input, non-finite values
    simply propagate.
    """
    years_to_retire = inputs.targetRetirementAge - inputs.currentAge

    if years_to_retire <= 0:
        return CalculationResult(
            nestEggTarget=0,
            projectedNestEgg=inputs.currentSavings,
            monthlyContributionRequired=0,
            savingsGap=0,
            yearsToRetire=0,
            projection=[],
            isPossible=False,
        )

    target = nest_egg_target(inputs.monthlySpending)
    rate = monthly_real_rate(inputs.expectedAnnualReturn, inputs.inflationRate)

    required = required_monthly_contribution(
        target=target,
        current_savings=inputs.currentSavings,
        rate=rate,
        months=years_to_retire * MONTHS_PER_YEAR,
    )
    savings_gap = required - inputs.currentMonthlySavings

    projection = project_wealth(inputs, rate)
    at_retirement = _balance_at(projection, inputs.targetRetirementAge)

    return CalculationResult(
        nestEggTarget=target,
        projectedNestEgg=at_retirement if at_retirement is not None else 0,
        monthlyContributionRequired=required,
        savingsGap=savings_gap,
        yearsToRetire=years_to_retire,
        projection=projection,
        isPossible=required < FEASIBILITY_CEILING,
    )


__all__ = [
    "calculate_retirement",
    "monthly_real_rate",
    "nest_egg_target",
    "project_wealth",
    "required_monthly_contribution",
    "simulate_balances",
]

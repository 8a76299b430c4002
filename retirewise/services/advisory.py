"""Narrative retirement advice built from a projection.

PlannerAdvisor writes the advice itself from the numbers. build_advice_prompt
renders the same facts as a prompt for a text-generation backend.
"""

from __future__ import annotations

from typing import List, Optional

from loguru import logger

from retirewise.core.constants import BENCHMARK_WITHDRAWAL_RATE, MONTHS_PER_YEAR
from retirewise.core.formatting import format_currency
from retirewise.models import CalculationResult, FinancialInputs

ADVICE_PROMPT_TEMPLATE = """
You are an expert financial retirement planner. A user has provided the following details:

- Current Age: {current_age}
- Target Retirement Age: {retirement_age}
- Current Savings: {current_savings}
- Desired Monthly Retirement Spending (Today's Value): {monthly_spending}
- Expected Annual Return: {expected_return}%

Based on the calculation, here are the results:
- Years until retirement: {years_to_retire}
- Required Nest Egg: {nest_egg}
- Required Monthly Savings: {required}

Please provide a concise, actionable, and encouraging strategic plan (approx 150 words).
Format the response in Markdown.
Focus on 3 key areas:
1. Feasibility analysis (is this realistic?).
2. Specific investment strategy suggestions (broad asset allocation ideas, not specific stocks).
3. Lifestyle or savings adjustments if the number is high.

Do not be alarmist, be constructive.
"""


def build_advice_prompt(
    inputs: FinancialInputs, result: CalculationResult, currency: str = "HKD"
) -> str:
    return ADVICE_PROMPT_TEMPLATE.format(
        current_age=inputs.currentAge,
        retirement_age=inputs.targetRetirementAge,
        current_savings=format_currency(inputs.currentSavings, currency),
        monthly_spending=format_currency(inputs.monthlySpending, currency),
        expected_return=inputs.expectedAnnualReturn,
        years_to_retire=result.yearsToRetire,
        nest_egg=format_currency(result.nestEggTarget, currency),
        required=format_currency(result.monthlyContributionRequired, currency),
    ).strip()


def depletion_age(inputs: FinancialInputs, result: CalculationResult) -> Optional[int]:
    """First age from retirement on whose starting balance is negative."""
    for row in result.projection:
        if row.age >= inputs.targetRetirementAge and row.savingsCurrent < 0:
            return row.age
    return None


def suggested_equity_share(age: int) -> int:
    # "110 minus age" glide path, kept inside 20-90%
    return max(20, min(90, 110 - age))


class PlannerAdvisor:
    """Deterministic advisor: three short markdown sections from the numbers alone."""

    def __init__(self, currency: str = "HKD"):
        self.currency = currency

    def _money(self, amount: float) -> str:
        return format_currency(amount, self.currency)

    def get_advice(self, inputs: FinancialInputs, result: CalculationResult) -> str:
        logger.debug(
            f"Building advice for age {inputs.currentAge} -> {inputs.targetRetirementAge}"
        )
        if result.yearsToRetire <= 0:
            return (
                "### Feasibility\n"
                "Your target retirement age is not after your current age, so there is "
                "no saving period to plan. Set a later retirement age to see a plan."
            )

        sections = [
            "### 1. Feasibility\n" + " ".join(self._feasibility(inputs, result)),
            "### 2. Investment strategy\n" + " ".join(self._strategy(inputs, result)),
            "### 3. Adjustments\n" + "\n".join(self._adjustments(inputs, result)),
        ]
        return "\n\n".join(sections)

    def _feasibility(self, inputs: FinancialInputs, result: CalculationResult) -> List[str]:
        lines = [
            f"To fund {self._money(inputs.monthlySpending)} a month you are aiming for "
            f"a nest egg of about **{self._money(result.nestEggTarget)}** in "
            f"{result.yearsToRetire} years.",
        ]
        if not result.isPossible:
            lines.append(
                "The required monthly saving is far beyond a typical budget, so the goal "
                "needs to change rather than the savings rate."
            )
        elif result.savingsGap <= 0:
            lines.append(
                f"Saving {self._money(inputs.currentMonthlySavings)} a month already covers "
                f"the {self._money(result.monthlyContributionRequired)} needed, a surplus of "
                f"{self._money(-result.savingsGap)}. You are on track."
            )
        else:
            lines.append(
                f"You need about **{self._money(result.monthlyContributionRequired)}** a month; "
                f"you save {self._money(inputs.currentMonthlySavings)}, a gap of "
                f"{self._money(result.savingsGap)}."
            )

        ran_out = depletion_age(inputs, result)
        if ran_out is not None:
            lines.append(f"On your current path the money runs out around age {ran_out}.")
        elif result.projection:
            lines.append("On your current path your savings last to age 100.")
        return lines

    def _strategy(self, inputs: FinancialInputs, result: CalculationResult) -> List[str]:
        real_return = inputs.expectedAnnualReturn - inputs.inflationRate
        equity = suggested_equity_share(inputs.currentAge)
        lines = [
            f"A broad mix of roughly {equity}% global equities and {100 - equity}% bonds "
            "and cash suits your time horizon, shifting towards bonds as retirement nears.",
            "Low-cost index funds keep fees from eating into compounding.",
        ]
        if real_return <= 0:
            lines.append(
                f"Your assumptions give a real return of {real_return:.1f}%, so savings "
                "lose purchasing power; revisit the expected return or the asset mix."
            )
        elif real_return > 6:
            lines.append(
                f"A {real_return:.1f}% real return is optimistic; test the plan with a "
                "lower figure."
            )
        return lines

    def _adjustments(self, inputs: FinancialInputs, result: CalculationResult) -> List[str]:
        if result.savingsGap <= 0:
            return [
                "- Keep contributions automatic and raise them with pay rises.",
                "- Review the plan once a year or after major life changes.",
            ]
        supported = result.projectedNestEgg * BENCHMARK_WITHDRAWAL_RATE / MONTHS_PER_YEAR
        return [
            f"- Raise monthly saving by {self._money(result.savingsGap)}, or step it up "
            "gradually each year.",
            f"- Your projected {self._money(result.projectedNestEgg)} at retirement supports "
            f"about {self._money(max(0.0, supported))} a month; trimming planned spending "
            "towards that narrows the gap.",
            "- Retiring a few years later adds saving years and shortens the drawdown.",
        ]

"""Default input record, partial overrides and typed field updates."""

from __future__ import annotations

import math
from typing import Any, List, Mapping, Optional

from pydantic import ValidationError

from retirewise.core.constants import BREAKDOWN_FIELDS
from retirewise.models import FinancialInputs


class InputUpdateError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


DEFAULT_INPUTS = FinancialInputs(
    currentAge=30,
    targetRetirementAge=65,
    currentSavings=50000,
    savingsCash=10000,
    savingsStock=25000,
    savingsBonds=10000,
    savingsOther=5000,
    stockHoldings=(),
    currentMonthlySavings=500,
    monthlySpending=4000,
    expectedAnnualReturn=7.0,
    inflationRate=2.5,
)

FIELD_NAMES = frozenset(FinancialInputs.model_fields)


def non_finite_fields(inputs: FinancialInputs) -> List[str]:
    # holdings reject nan/inf on their own (allow_inf_nan=False)
    return [
        name
        for name, value in inputs
        if isinstance(value, float) and not math.isfinite(value)
    ]


def _validate(payload: Mapping[str, Any]) -> FinancialInputs:
    """
    Build a record from caller data. nan/inf are rejected; they have no JSON form.
    """
    try:
        inputs = FinancialInputs.model_validate(payload)
    except ValidationError as exc:
        raise InputUpdateError(
            [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()]
        ) from exc

    bad = non_finite_fields(inputs)
    if bad:
        raise InputUpdateError([f"{name}: Input should be a finite number" for name in bad])
    return inputs


def breakdown_total(inputs: FinancialInputs) -> float:
    return inputs.savingsCash + inputs.savingsStock + inputs.savingsBonds + inputs.savingsOther


def merge_inputs(overrides: Optional[Mapping[str, Any]] = None) -> FinancialInputs:
    """
    Default record with a partial override applied on top.

    Keys that are not input fields are dropped; values are coerced and checked
    by the model. currentSavings is taken as supplied, never re-derived here.
    """
    merged = DEFAULT_INPUTS.model_dump()
    for key, value in (overrides or {}).items():
        if key in FIELD_NAMES:
            merged[key] = value
    return _validate(merged)


def update_inputs(inputs: FinancialInputs, changes: Mapping[str, Any]) -> FinancialInputs:
    """
    Apply field changes and return a new record.

    When any breakdown field (cash, stock, bonds, other) changes, currentSavings
    is recomputed as their sum. Other changes leave currentSavings alone.
    """
    unknown = sorted(key for key in changes if key not in FIELD_NAMES)
    if unknown:
        raise InputUpdateError([f"unknown field '{key}'" for key in unknown])

    payload = inputs.model_dump()
    payload.update(changes)
    updated = _validate(payload)

    if any(key in BREAKDOWN_FIELDS for key in changes):
        updated = updated.model_copy(update={"currentSavings": breakdown_total(updated)})
    return updated


__all__ = [
    "DEFAULT_INPUTS",
    "FIELD_NAMES",
    "InputUpdateError",
    "breakdown_total",
    "merge_inputs",
    "non_finite_fields",
    "update_inputs",
]

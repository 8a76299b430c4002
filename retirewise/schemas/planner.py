"""Data contracts for the planner API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from retirewise.models import CalculationResult, FinancialInputs, StockHolding


class InputsUpdateRequest(BaseModel):
    """Field changes to apply to an input record."""

    inputs: Optional[Dict[str, Any]] = Field(
        None,
        description="Partial record to start from; the default record when omitted.",
    )
    changes: Dict[str, Any] = Field(..., description="Field name to new value.")


class ShareResponse(BaseModel):
    token: str


class SharedPlanResponse(BaseModel):
    """Inputs restored from a share token, with their projection."""

    inputs: FinancialInputs
    result: CalculationResult


class AdviceResponse(BaseModel):
    advice: str = Field(..., description="Markdown narrative.")


class PortfolioRequest(BaseModel):
    holdings: List[StockHolding] = Field(default_factory=list)

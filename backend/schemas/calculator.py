"""Data contracts for the public investment calculator."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator


class InvestmentCalculatorRequest(BaseModel):
    """Inputs required to compute a calculator schedule."""

    investmentType: Literal["passive", "active"] = Field(
        "passive",
        description="Preset strategy; passive grows 2% and active 4% per month.",
    )
    monthlyGrowthRate: Optional[float] = Field(
        None,
        allow_inf_nan=False,
        description="Overrides the preset rate, in percent per month (e.g. 2.0 for 2%).",
    )
    initialInvestment: float = Field(10000.0, ge=0, allow_inf_nan=False)
    monthlyInvestment: float = Field(1000.0, ge=0, allow_inf_nan=False)
    durationYears: int = Field(3, ge=0, le=50, description="Length of the schedule in years.")
    targetGoal: float = Field(100000.0, ge=0, allow_inf_nan=False)


class CalculatorPoint(BaseModel):
    """Single month of a calculator schedule."""

    month: int = Field(..., ge=0)
    balance: float
    year: int = Field(..., ge=0)
    monthOfYear: int = Field(..., ge=0, le=11)

    @model_validator(mode="after")
    def ensure_consistent_calendar(self) -> "CalculatorPoint":
        if self.year * 12 + self.monthOfYear != self.month:
            raise ValueError("year/monthOfYear must match month")
        return self


class InvestmentCalculatorResponse(BaseModel):
    """Compound and simple-interest schedules with summary figures."""

    investmentType: str
    monthlyGrowthRate: float
    months: int
    schedule: List[CalculatorPoint]
    simpleSchedule: List[CalculatorPoint]
    totalInvestment: float
    finalValue: float
    totalGrowth: float
    growthPercentage: float
    targetGoal: float
    goalDifference: float
    isGoalAchieved: bool
    goalStatus: Literal["surplus", "deficit"]

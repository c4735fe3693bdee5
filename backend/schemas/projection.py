"""Data contracts for running-balance, performance and projection endpoints."""

from typing import List, Optional

from pydantic import BaseModel, Field

from backend.core.performance import PerformanceChart, PerformanceSummary
from backend.core.projection import ProjectionPoint, SeriesPoint
from backend.models import Investor, PerformanceEntry


class RunningSeriesRequest(BaseModel):
    """Starting balance plus the entries to fold onto it, already in display order."""

    startingBalance: float = Field(0.0, allow_inf_nan=False)
    entries: List[PerformanceEntry] = Field(default_factory=list)


class RunningSeriesResponse(BaseModel):
    series: List[SeriesPoint]


class PerformanceSummaryResponse(BaseModel):
    summary: Optional[PerformanceSummary]


class PerformanceChartRequest(RunningSeriesRequest):
    horizon: Optional[int] = Field(
        None,
        ge=0,
        le=120,
        description="Months to project; defaults to the configured horizon.",
    )
    customDeposit: Optional[float] = Field(
        None,
        ge=0,
        allow_inf_nan=False,
        description="Monthly deposit for the what-if projection.",
    )


class InvestorPerformanceRequest(BaseModel):
    investor: Investor
    horizon: Optional[int] = Field(None, ge=0, le=120)
    customDeposit: Optional[float] = Field(None, ge=0, allow_inf_nan=False)


class InvestorPerformanceResponse(BaseModel):
    investorId: str
    summary: Optional[PerformanceSummary]
    chart: PerformanceChart


class ProjectionRequest(BaseModel):
    """Inputs for a plain forward projection."""

    lastBalance: float = Field(..., allow_inf_nan=False)
    avgGrowthRatePercent: float = Field(
        ...,
        allow_inf_nan=False,
        description="Growth per period in percent (2.0 means 2%).",
    )
    periodicContribution: float = Field(0.0, allow_inf_nan=False)
    horizonPeriods: int = Field(12, le=1200, description="Periods to project; negative means none.")


class ProjectionResponse(BaseModel):
    points: List[ProjectionPoint]
    finalBalance: float
    totalContributed: float
    growth: float

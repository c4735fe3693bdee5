"""Portfolio and investor performance views built on the projection engine."""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

from pydantic import BaseModel

from backend.core.projection import (
    ProjectionPoint,
    SeriesPoint,
    average_deposit,
    average_growth_rate,
    build_running_series,
    project_forward,
)
from backend.models import PerformanceEntry


class PerformanceSummary(BaseModel):
    totalGrowthAmount: float
    totalDeposits: float
    totalWithdrawals: float
    totalGrowthPercentage: float
    averageGrowthPercentage: float
    currentBalance: float
    totalNetPercentage: float


class PerformanceChart(BaseModel):
    series: List[SeriesPoint]
    avgGrowthRate: float
    avgMonthlyDeposit: float
    projection: List[ProjectionPoint]
    projectedBalance: Optional[float] = None
    customDeposit: Optional[float] = None
    customProjection: List[ProjectionPoint] = []
    customProjectedBalance: Optional[float] = None
    # custom minus default projected balance
    customDifference: Optional[float] = None


def sort_chronologically(entries: Sequence[PerformanceEntry]) -> List[PerformanceEntry]:
    """Order by (year, month); entries sharing a period keep their input order."""
    return sorted(entries, key=lambda entry: (entry.year, entry.month))


def current_period_entry(
    entries: Sequence[PerformanceEntry],
    today: Optional[date] = None,
) -> Optional[PerformanceEntry]:
    """The entry for today's month, falling back to the last entry."""
    if not entries:
        return None
    today = today or date.today()
    for entry in entries:
        if entry.year == today.year and entry.month == today.month:
            return entry
    return entries[-1]


def summarize_performance(
    starting_balance: float,
    entries: Sequence[PerformanceEntry],
) -> Optional[PerformanceSummary]:
    if not entries:
        return None

    total_growth = sum(entry.growthAmount for entry in entries)
    total_deposits = sum(entry.deposit for entry in entries)
    total_withdrawals = sum(entry.withdrawal for entry in entries)
    total_percentage = sum(entry.growthPercentage or 0.0 for entry in entries)

    return PerformanceSummary(
        totalGrowthAmount=total_growth,
        totalDeposits=total_deposits,
        totalWithdrawals=total_withdrawals,
        totalGrowthPercentage=total_percentage,
        averageGrowthPercentage=average_growth_rate(entries),
        currentBalance=starting_balance + total_growth + total_deposits - total_withdrawals,
        totalNetPercentage=total_percentage,
    )


def build_performance_chart(
    starting_balance: float,
    entries: Sequence[PerformanceEntry],
    horizon: int = 12,
    custom_deposit: Optional[float] = None,
) -> PerformanceChart:
    """
    Running balance plus forward projections from the last recorded balance.

    The default projection adds the historical average deposit each month;
    the custom one adds custom_deposit instead. Both compound at the
    historical average growth rate.
    """
    series = build_running_series(starting_balance, entries)
    avg_rate = average_growth_rate(entries)
    avg_deposit = average_deposit(entries)

    chart = PerformanceChart(
        series=series,
        avgGrowthRate=avg_rate,
        avgMonthlyDeposit=avg_deposit,
        projection=[],
        customDeposit=custom_deposit,
    )
    if not series:
        return chart

    last_balance = series[-1].balance
    chart.projection = project_forward(last_balance, avg_rate, avg_deposit, horizon)
    if chart.projection:
        chart.projectedBalance = chart.projection[-1].balance

    if custom_deposit is not None:
        chart.customProjection = project_forward(last_balance, avg_rate, custom_deposit, horizon)
        if chart.customProjection:
            chart.customProjectedBalance = chart.customProjection[-1].balance
            chart.customDifference = chart.customProjectedBalance - chart.projectedBalance

    return chart

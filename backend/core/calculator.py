"""Investment calculator: compound schedule, simple-interest comparison and goal tracking."""

from typing import Dict, List

from backend.core.projection import project_forward, total_contributed
from backend.schemas.calculator import (
    CalculatorPoint,
    InvestmentCalculatorRequest,
    InvestmentCalculatorResponse,
)

# monthly growth in percent
INVESTMENT_TYPES: Dict[str, float] = {
    "passive": 2.0,
    "active": 4.0,
}

SIMPLE_INTEREST_RATE = 0.02


def _point(month: int, balance: float) -> CalculatorPoint:
    return CalculatorPoint(month=month, balance=balance, year=month // 12, monthOfYear=month % 12)


def compound_schedule(
    initial: float,
    monthly: float,
    rate_percent: float,
    months: int,
) -> List[CalculatorPoint]:
    """Month 0 holds the initial amount; every later month grows then adds the contribution."""
    schedule = [_point(0, float(initial))]
    for projected in project_forward(initial, rate_percent, monthly, months):
        schedule.append(_point(projected.periodIndex, projected.balance))
    return schedule


def simple_schedule(initial: float, monthly: float, months: int) -> List[CalculatorPoint]:
    """Contributions plus flat interest on the initial amount only."""
    return [
        _point(month, initial + monthly * month + initial * SIMPLE_INTEREST_RATE * month)
        for month in range(0, max(0, months) + 1)
    ]


def resolve_growth_rate(request: InvestmentCalculatorRequest) -> float:
    if request.monthlyGrowthRate is not None:
        return request.monthlyGrowthRate
    return INVESTMENT_TYPES[request.investmentType]


def calculate_investment(request: InvestmentCalculatorRequest) -> InvestmentCalculatorResponse:
    """Compute both schedules and the summary figures shown beside the chart."""
    months = request.durationYears * 12
    rate = resolve_growth_rate(request)

    schedule = compound_schedule(request.initialInvestment, request.monthlyInvestment, rate, months)
    simple = simple_schedule(request.initialInvestment, request.monthlyInvestment, months)

    total_investment = total_contributed(request.initialInvestment, request.monthlyInvestment, months)
    final_value = schedule[-1].balance
    total_growth = final_value - total_investment
    growth_percentage = (total_growth / total_investment) * 100 if total_investment else 0.0

    goal_difference = final_value - request.targetGoal
    achieved = final_value >= request.targetGoal

    return InvestmentCalculatorResponse(
        investmentType=request.investmentType,
        monthlyGrowthRate=rate,
        months=months,
        schedule=schedule,
        simpleSchedule=simple,
        totalInvestment=total_investment,
        finalValue=final_value,
        totalGrowth=total_growth,
        growthPercentage=growth_percentage,
        targetGoal=request.targetGoal,
        goalDifference=goal_difference,
        isGoalAchieved=achieved,
        goalStatus="surplus" if achieved else "deficit",
    )

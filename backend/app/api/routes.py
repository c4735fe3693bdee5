"""HTTP routes for the performance and calculator API."""

import math
from http import HTTPStatus
from typing import Any, Dict, Iterator, List, Tuple, Union

from flask import Blueprint, current_app, jsonify, request
from pydantic import BaseModel, ValidationError

from backend.core.calculator import calculate_investment
from backend.core.health import get_health_status
from backend.core.performance import (
    build_performance_chart,
    sort_chronologically,
    summarize_performance,
)
from backend.core.projection import build_running_series, project_forward, total_contributed
from backend.schemas.calculator import InvestmentCalculatorRequest, InvestmentCalculatorResponse
from backend.schemas.health import HealthResponse
from backend.schemas.projection import (
    InvestorPerformanceRequest,
    InvestorPerformanceResponse,
    PerformanceChartRequest,
    PerformanceSummaryResponse,
    ProjectionRequest,
    ProjectionResponse,
    RunningSeriesRequest,
    RunningSeriesResponse,
)

api_bp = Blueprint("api", __name__)

Location = Tuple[Union[str, int], ...]


class NonFiniteResultError(ValueError):
    """A computed figure overflowed to infinity or NaN and cannot be sent as JSON."""

    def __init__(self, locations: List[Location]):
        super().__init__("Result is too large to represent")
        self.locations = locations


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    # rejected inputs may themselves be NaN, which JSON cannot carry
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False, include_input=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(NonFiniteResultError)
def _handle_non_finite_result(exc: NonFiniteResultError):
    detail = [
        {"loc": list(loc), "msg": str(exc), "type": "non_finite_result"}
        for loc in exc.locations
    ]
    return jsonify({"detail": detail}), HTTPStatus.UNPROCESSABLE_ENTITY


def _non_finite_locations(value: Any, loc: Location = ()) -> Iterator[Location]:
    if isinstance(value, float):
        if not math.isfinite(value):
            yield loc
    elif isinstance(value, dict):
        for key, item in value.items():
            yield from _non_finite_locations(item, loc + (key,))
    elif isinstance(value, list):
        for index, item in enumerate(value):
            yield from _non_finite_locations(item, loc + (index,))


def _respond(model: BaseModel) -> Any:
    body = model.model_dump()
    locations = list(_non_finite_locations(body))
    if locations:
        raise NonFiniteResultError(locations)
    return jsonify(body)


def _payload() -> Dict[str, Any]:
    # a missing or non-object body validates as empty so pydantic reports the fields
    raw_payload = request.get_json(silent=True)
    return raw_payload if isinstance(raw_payload, dict) else {}


def _default_horizon() -> int:
    return current_app.config["SETTINGS"].PROJECTION_HORIZON


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    status, message = get_health_status(current_app.config["SETTINGS"])
    return _respond(HealthResponse(status=status, message=message))


@api_bp.post("/performance/series")
def running_series() -> Any:
    """Running balance for entries in the order supplied."""
    payload = RunningSeriesRequest.model_validate(_payload())
    series = build_running_series(payload.startingBalance, payload.entries)
    return _respond(RunningSeriesResponse(series=series))


@api_bp.post("/performance/summary")
def performance_summary() -> Any:
    payload = RunningSeriesRequest.model_validate(_payload())
    summary = summarize_performance(payload.startingBalance, payload.entries)
    return _respond(PerformanceSummaryResponse(summary=summary))


@api_bp.post("/performance/chart")
def performance_chart() -> Any:
    """Running balance plus default and custom-deposit projections."""
    payload = PerformanceChartRequest.model_validate(_payload())
    chart = build_performance_chart(
        payload.startingBalance,
        payload.entries,
        horizon=payload.horizon if payload.horizon is not None else _default_horizon(),
        custom_deposit=payload.customDeposit,
    )
    return _respond(chart)


@api_bp.post("/performance/investor")
def investor_performance() -> Any:
    """Investor view: entries sorted by period, folded onto the invested amount."""
    payload = InvestorPerformanceRequest.model_validate(_payload())
    investor = payload.investor
    entries = sort_chronologically(investor.performance)

    response = InvestorPerformanceResponse(
        investorId=investor.id,
        summary=summarize_performance(investor.investmentAmount, entries),
        chart=build_performance_chart(
            investor.investmentAmount,
            entries,
            horizon=payload.horizon if payload.horizon is not None else _default_horizon(),
            custom_deposit=payload.customDeposit,
        ),
    )
    return _respond(response)


@api_bp.post("/calc/projection")
def projection() -> Any:
    payload = ProjectionRequest.model_validate(_payload())
    points = project_forward(
        payload.lastBalance,
        payload.avgGrowthRatePercent,
        payload.periodicContribution,
        payload.horizonPeriods,
    )
    final_balance = points[-1].balance if points else payload.lastBalance
    contributed = total_contributed(
        payload.lastBalance,
        payload.periodicContribution,
        max(0, payload.horizonPeriods),
    )
    response = ProjectionResponse(
        points=points,
        finalBalance=final_balance,
        totalContributed=contributed,
        growth=final_balance - contributed,
    )
    return _respond(response)


@api_bp.post("/calc/investment")
def investment_calculator() -> Any:
    """Public calculator: compound vs simple growth with goal tracking."""
    payload = InvestmentCalculatorRequest.model_validate(_payload())
    result = calculate_investment(payload)
    response = InvestmentCalculatorResponse.model_validate(result.model_dump())
    return _respond(response)

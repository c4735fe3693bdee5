from __future__ import annotations

import calendar
import math
from collections.abc import Mapping
from typing import Any, Callable, Iterable, List, Optional

from pydantic import BaseModel

from backend.models import PerformanceEntry

LabelFn = Callable[[int, int], str]


class SeriesPoint(BaseModel):
    """One row of the running balance: the entry's own figures plus the balance after it."""

    label: str
    balance: float
    growth: float
    growthPercentage: float
    deposit: float
    withdrawal: float


class ProjectionPoint(BaseModel):
    periodIndex: int
    balance: float


def _finite_float(value: Any) -> Optional[float]:
    """value as a finite float, or None for non-numbers, NaN, infinities and oversized ints."""
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _field(entry: Any, name: str) -> Any:
    """Read a field from a PerformanceEntry or from a raw store document."""
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def _amount(entry: Any, name: str) -> float:
    value = _field(entry, name)
    number = _finite_float(value)
    return 0.0 if number is None else number


def month_label(year: Optional[int], month: Optional[int]) -> str:
    """Chart label for a period, e.g. ``Jan 2024``; missing parts are left out."""
    if isinstance(month, int) and 1 <= month <= 12:
        name = calendar.month_abbr[month]
        return name if year is None else f"{name} {year}"
    if month is None:
        return "" if year is None else str(year)
    return str(month) if year is None else f"{month}/{year}"


def build_running_series(
    starting_balance: float,
    entries: Iterable[PerformanceEntry | Mapping[str, Any]],
    label_fn: LabelFn = month_label,
) -> List[SeriesPoint]:
    """
    Fold the entries onto starting_balance, in the order given.

    Per entry: balance += growthAmount + deposit - withdrawal. Missing or
    non-finite amounts count as 0. The caller owns chronological ordering.
    """
    balance = float(starting_balance)
    series: List[SeriesPoint] = []
    for entry in entries:
        growth = _amount(entry, "growthAmount")
        deposit = _amount(entry, "deposit")
        withdrawal = _amount(entry, "withdrawal")
        balance = balance + growth + deposit - withdrawal

        series.append(
            SeriesPoint(
                label=label_fn(_field(entry, "year"), _field(entry, "month")),
                balance=balance,
                growth=growth,
                growthPercentage=_amount(entry, "growthPercentage"),
                deposit=deposit,
                withdrawal=withdrawal,
            )
        )
    return series


def average_growth_rate(entries: Iterable[PerformanceEntry | Mapping[str, Any]]) -> float:
    """Mean of the finite growthPercentage values; 0 when there are none."""
    rates = [
        rate
        for rate in (_finite_float(_field(entry, "growthPercentage")) for entry in entries)
        if rate is not None
    ]
    if not rates:
        return 0.0
    return sum(rates) / len(rates)


def average_deposit(entries: Iterable[PerformanceEntry | Mapping[str, Any]]) -> float:
    """Mean deposit per entry, missing deposits counted as 0."""
    deposits = [_amount(entry, "deposit") for entry in entries]
    if not deposits:
        return 0.0
    return sum(deposits) / len(deposits)


def project_forward(
    last_balance: float,
    avg_growth_rate_percent: float,
    periodic_contribution: float,
    horizon_periods: int,
) -> List[ProjectionPoint]:
    """
    Compound last_balance forward for horizon_periods periods.

    Each period the rate is applied first, then the contribution is added.
    A zero or negative horizon gives an empty projection.
    """
    rate = avg_growth_rate_percent / 100
    balance = float(last_balance)
    points: List[ProjectionPoint] = []
    for period in range(1, max(0, horizon_periods) + 1):
        balance = balance * (1 + rate)
        balance = balance + periodic_contribution
        points.append(ProjectionPoint(periodIndex=period, balance=balance))
    return points


def total_contributed(initial: float, periodic_contribution: float, horizon_periods: int) -> float:
    return initial + periodic_contribution * horizon_periods


__all__ = [
    "LabelFn",
    "SeriesPoint",
    "ProjectionPoint",
    "month_label",
    "build_running_series",
    "average_growth_rate",
    "average_deposit",
    "project_forward",
    "total_contributed",
]

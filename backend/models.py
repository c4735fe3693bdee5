from __future__ import annotations

import math
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PerformanceEntry(BaseModel):
    """One month of recorded growth, deposits and withdrawals.

    Store documents carry extra keys (document id, timestamps, owner key);
    those are ignored here. Missing money fields become 0, a missing
    growthPercentage stays None so averages can skip it.
    """

    model_config = ConfigDict(extra="ignore")

    year: int = 0
    month: int = Field(default=1, ge=1, le=12)
    growthAmount: float = 0.0
    growthPercentage: Optional[float] = None
    deposit: float = Field(default=0.0, ge=0)
    withdrawal: float = Field(default=0.0, ge=0)

    @field_validator("growthAmount", "deposit", "withdrawal", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> Any:
        if value is None or value == "":
            return 0.0
        if isinstance(value, float) and not math.isfinite(value):
            return 0.0
        return value

    @field_validator("growthPercentage", mode="before")
    @classmethod
    def _drop_non_finite_percentage(cls, value: Any) -> Any:
        if value == "":
            return None
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value


class Investor(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    investmentAmount: float = 0.0
    performance: List[PerformanceEntry] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        # store ids arrive as either numbers or strings
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

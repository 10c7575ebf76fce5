"""
Monthly profit projection with break-even detection.

Revenue compounds at the caller's growth rate while expenses compound at a
fixed 5 % per month. Running totals are kept at full precision and only the
displayed figures are rounded, so rounding error never accumulates.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from venture_backend.errors import DivisionUndefined, InvalidParameter
from venture_backend.logging_config import get_logger
from venture_backend.parsing import parse_number

logger = get_logger("projection")

EXPENSE_GROWTH_RATE = 0.05

# 100 years of months
MAX_MONTHS = 1200

CALCULATION_COLUMNS = [
    "month",
    "revenue",
    "expenses",
    "profit",
    "cumulativeProfit",
    "breakEven",
    "breakEvenFlag",
]


def half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +inf."""
    return int(math.floor(value + 0.5))


def _number(payload, key, default=None):
    value = payload.get(key, default)
    if value is None:
        raise InvalidParameter(f"{key} is required")
    return parse_number(key, value)


@dataclass(frozen=True)
class ProjectionInput:
    initial_investment: float
    monthly_revenue: float
    monthly_expenses: float
    growth_rate: float
    months: int

    def __post_init__(self):
        if isinstance(self.months, bool) or not isinstance(self.months, int):
            raise InvalidParameter("months must be an integer")
        if self.months < 1:
            raise InvalidParameter("months must be at least 1")
        if self.months > MAX_MONTHS:
            raise InvalidParameter(f"months cannot exceed {MAX_MONTHS}")
        if self.initial_investment < 0:
            raise InvalidParameter("initialInvestment cannot be negative")

    @classmethod
    def from_payload(cls, payload) -> "ProjectionInput":
        """Build from the camelCase JSON body of a profit-estimation request."""
        if not isinstance(payload, dict):
            raise InvalidParameter("request body must be a JSON object")
        months = _number(payload, "months")
        if not months.is_integer():
            raise InvalidParameter("months must be an integer")
        return cls(
            initial_investment=_number(payload, "initialInvestment"),
            monthly_revenue=_number(payload, "monthlyRevenue"),
            monthly_expenses=_number(payload, "monthlyExpenses"),
            growth_rate=_number(payload, "growthRate", default=0),
            months=int(months),
        )


@dataclass(frozen=True)
class MonthRecord:
    month: int
    revenue: int
    expenses: int
    profit: int
    cumulative_profit: int
    break_even_flag: bool

    @property
    def break_even(self) -> Optional[int]:
        return self.month if self.break_even_flag else None

    def to_dict(self):
        return {
            "month": self.month,
            "revenue": self.revenue,
            "expenses": self.expenses,
            "profit": self.profit,
            "cumulativeProfit": self.cumulative_profit,
            "breakEven": self.break_even,
            "breakEvenFlag": self.break_even_flag,
        }


@dataclass(frozen=True)
class ProjectionSummary:
    total_revenue: int
    total_expenses: int
    total_profit: int
    roi: Optional[float]
    break_even_month: Optional[int]

    def to_dict(self):
        return {
            "totalRevenue": self.total_revenue,
            "totalExpenses": self.total_expenses,
            "totalProfit": self.total_profit,
            "roi": self.roi,
            "breakEvenMonth": self.break_even_month,
        }


@dataclass(frozen=True)
class Projection:
    calculations: Tuple[MonthRecord, ...]
    summary: ProjectionSummary

    def to_dict(self):
        return {
            "calculations": [record.to_dict() for record in self.calculations],
            "summary": self.summary.to_dict(),
        }

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [record.to_dict() for record in self.calculations],
            columns=CALCULATION_COLUMNS,
        )


def roi(total_profit: float, initial_investment: float) -> float:
    """Return on investment in percent, two decimals."""
    if initial_investment == 0:
        raise DivisionUndefined("ROI is undefined without an initial investment")
    return round(total_profit / initial_investment * 100, 2)


def project(inputs: ProjectionInput) -> Projection:
    months = np.arange(inputs.months)
    with np.errstate(over="ignore", invalid="ignore"):
        revenue = inputs.monthly_revenue * np.power(1 + inputs.growth_rate / 100, months)
        expenses = inputs.monthly_expenses * np.power(1 + EXPENSE_GROWTH_RATE, months)
        profit = revenue - expenses

        cumulative_revenue = np.cumsum(revenue)
        cumulative_expenses = np.cumsum(expenses)
        net = cumulative_revenue - cumulative_expenses - inputs.initial_investment

    for series in (revenue, expenses, profit, net):
        if not np.isfinite(series).all():
            raise InvalidParameter(
                "projection overflows: growth rate too large for the number of months"
            )
    # the one break-even predicate, evaluated on unrounded totals
    positive = net > 0

    calculations = tuple(
        MonthRecord(
            month=i + 1,
            revenue=half_up(revenue[i]),
            expenses=half_up(expenses[i]),
            profit=half_up(profit[i]),
            cumulative_profit=half_up(net[i]),
            break_even_flag=bool(positive[i]),
        )
        for i in range(inputs.months)
    )

    total_profit = calculations[-1].cumulative_profit
    try:
        summary_roi = roi(total_profit, inputs.initial_investment)
    except DivisionUndefined:
        summary_roi = None

    break_even_month = int(np.argmax(positive)) + 1 if positive.any() else None

    summary = ProjectionSummary(
        total_revenue=half_up(cumulative_revenue[-1]),
        total_expenses=half_up(cumulative_expenses[-1]),
        total_profit=total_profit,
        roi=summary_roi,
        break_even_month=break_even_month,
    )
    logger.debug(
        "projection computed",
        extra={"months": inputs.months, "break_even_month": break_even_month},
    )
    return Projection(calculations=calculations, summary=summary)

"""
Metric Models for fincontrol

Result shapes returned by the metrics engine, plus the filter criteria
used by the transaction list. All results are fresh values; nothing here
holds a reference back into the dataset.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fincontrol.models.finance import (
    Money,
    TransactionStatus,
    TransactionType,
)


ZERO = Decimal("0")


class MetricResult(BaseModel):
    """Base for engine outputs. Frozen so callers cannot mutate shared results."""
    model_config = ConfigDict(frozen=True)


class MonthSummary(MetricResult):
    """Dashboard cards for one month."""

    total_income: Money = ZERO
    total_expense: Money = ZERO
    balance: Money = ZERO
    daily_average: Money = Field(
        default=ZERO,
        description="Total expense divided by the number of days in the month"
    )
    count: int = Field(
        default=0,
        ge=0,
        description="Paid transactions of either type inside the month"
    )


class CategoryAmount(MetricResult):
    """One slice of the expense breakdown."""

    category_id: str
    category_name: str
    amount: Money
    color: str


class IncomeExpenseTotals(MetricResult):
    """Two-bar income vs expense comparison."""

    income: Money = ZERO
    expense: Money = ZERO


class MonthlyTrendPoint(MetricResult):
    """One month of the trailing trend line."""

    month: dt.date = Field(
        ...,
        description="First day of the month"
    )
    label: str = Field(
        ...,
        description="Short month name (e.g. 'Jan')"
    )
    income: Money = ZERO
    expense: Money = ZERO
    balance: Money = ZERO


class DailyAmount(MetricResult):
    """One bar of the daily histogram."""

    day: int = Field(
        ...,
        ge=1,
        le=31,
        description="Day of month"
    )
    label: str = Field(
        ...,
        description="Zero-padded DD/MM"
    )
    amount: Money = ZERO


class PeriodTotals(MetricResult):
    """Total and count shown above the daily histogram."""

    total: Money = ZERO
    count: int = 0


class TransactionFilter(BaseModel):
    """
    Criteria for the transaction list.

    Every criterion is optional; an empty filter matches everything
    inside the month. Amount bounds are inclusive.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    search: Optional[str] = Field(
        default=None,
        description="Case-insensitive substring of the description"
    )
    category_id: Optional[str] = None
    type: Optional[TransactionType] = None
    status: Optional[TransactionStatus] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None

    @property
    def is_active(self) -> bool:
        """True if any criterion is set."""
        return bool(
            self.search
            or self.category_id
            or self.type is not None
            or self.status is not None
            or self.min_amount is not None
            or self.max_amount is not None
        )

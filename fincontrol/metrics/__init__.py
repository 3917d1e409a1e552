"""Metrics package: pure month-windowed aggregations and list filtering."""

from fincontrol.metrics.engine import (
    DEFAULT_TREND_MONTHS,
    FALLBACK_CATEGORY_COLOR,
    FALLBACK_CATEGORY_NAME,
    daily_histogram,
    expense_breakdown_by_category,
    income_vs_expense_totals,
    paid_in_window,
    period_totals,
    summary,
    total_of,
    trailing_monthly_series,
)
from fincontrol.metrics.filters import filter_transactions, matches, newest_first
from fincontrol.metrics.windows import MonthWindow, add_months, month_window

__all__ = [
    # Aggregations
    "DEFAULT_TREND_MONTHS",
    "FALLBACK_CATEGORY_COLOR",
    "FALLBACK_CATEGORY_NAME",
    "daily_histogram",
    "expense_breakdown_by_category",
    "income_vs_expense_totals",
    "paid_in_window",
    "period_totals",
    "summary",
    "total_of",
    "trailing_monthly_series",
    # Filtering
    "filter_transactions",
    "matches",
    "newest_first",
    # Windows
    "MonthWindow",
    "add_months",
    "month_window",
]

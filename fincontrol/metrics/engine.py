"""
Metrics Engine

DESIGN DECISION: Every metric is a pure function of the transactions
(and categories) handed in. Nothing here reads storage, caches results,
or mutates its inputs, so any caller can use these freely.

Shared rules:
- Only PAID transactions count; PENDING ones are ignored everywhere
- A month is the inclusive window [1st, last day] of the month that
  contains the `month` argument
- Empty input yields zero-valued results; nothing here raises
"""

import datetime as dt
from collections.abc import Iterable
from decimal import Decimal
from typing import Optional

from fincontrol.metrics.windows import MonthWindow, month_window
from fincontrol.models.finance import (
    Category,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from fincontrol.models.metrics import (
    ZERO,
    CategoryAmount,
    DailyAmount,
    IncomeExpenseTotals,
    MonthlyTrendPoint,
    MonthSummary,
    PeriodTotals,
)


FALLBACK_CATEGORY_NAME = "Other"
FALLBACK_CATEGORY_COLOR = "#6b7280"

DEFAULT_TREND_MONTHS = 6


def paid_in_window(
    transactions: Iterable[Transaction],
    window: MonthWindow,
) -> list[Transaction]:
    """Paid transactions dated inside the window, in input order."""
    return [
        t for t in transactions
        if t.status == TransactionStatus.PAID and window.contains(t.date)
    ]


def total_of(
    transactions: Iterable[Transaction],
    type_filter: Optional[TransactionType] = None,
) -> Decimal:
    """Sum of amounts, optionally restricted to one transaction type."""
    return sum(
        (t.amount for t in transactions
         if type_filter is None or t.type == type_filter),
        ZERO,
    )


def summary(
    transactions: Iterable[Transaction],
    month: dt.date,
) -> MonthSummary:
    """
    Dashboard figures for a month.

    daily_average spreads total expense over every day of the month,
    not just the days that had transactions.
    """
    window = month_window(month)
    paid = paid_in_window(transactions, window)

    total_income = total_of(paid, TransactionType.INCOME)
    total_expense = total_of(paid, TransactionType.EXPENSE)

    return MonthSummary(
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
        daily_average=total_expense / window.days,
        count=len(paid),
    )


def expense_breakdown_by_category(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    month: dt.date,
) -> list[CategoryAmount]:
    """
    Paid expenses per category, largest first.

    Transactions whose category no longer exists are kept and shown
    under a generic fallback name and color.
    """
    window = month_window(month)
    by_id = {c.id: c for c in categories}

    totals: dict[str, Decimal] = {}
    for t in paid_in_window(transactions, window):
        if t.type != TransactionType.EXPENSE:
            continue
        totals[t.category_id] = totals.get(t.category_id, ZERO) + t.amount

    slices = []
    for category_id, amount in totals.items():
        category = by_id.get(category_id)
        slices.append(CategoryAmount(
            category_id=category_id,
            category_name=category.name if category else FALLBACK_CATEGORY_NAME,
            amount=amount,
            color=category.color if category else FALLBACK_CATEGORY_COLOR,
        ))

    return sorted(slices, key=lambda s: s.amount, reverse=True)


def income_vs_expense_totals(
    transactions: Iterable[Transaction],
    month: dt.date,
) -> IncomeExpenseTotals:
    """Paid income and paid expense for a month."""
    paid = paid_in_window(transactions, month_window(month))
    return IncomeExpenseTotals(
        income=total_of(paid, TransactionType.INCOME),
        expense=total_of(paid, TransactionType.EXPENSE),
    )


def trailing_monthly_series(
    transactions: Iterable[Transaction],
    month: dt.date,
    window_size: int = DEFAULT_TREND_MONTHS,
) -> list[MonthlyTrendPoint]:
    """
    Income, expense and balance for the `window_size` months ending at
    (and including) `month`, oldest first.
    """
    transactions = list(transactions)
    anchor = month_window(month)

    points = []
    for offset in range(window_size - 1, -1, -1):
        window = anchor.shifted(-offset)
        paid = paid_in_window(transactions, window)
        income = total_of(paid, TransactionType.INCOME)
        expense = total_of(paid, TransactionType.EXPENSE)
        points.append(MonthlyTrendPoint(
            month=window.start,
            label=window.label,
            income=income,
            expense=expense,
            balance=income - expense,
        ))
    return points


def daily_histogram(
    transactions: Iterable[Transaction],
    month: dt.date,
    type_filter: Optional[TransactionType] = None,
) -> list[DailyAmount]:
    """
    Paid amounts per calendar day of the month.

    Only days with at least one transaction appear. Ordered by the
    numeric day of month, not by the DD/MM label.

    Args:
        type_filter: EXPENSE, INCOME, or None for both
    """
    window = month_window(month)

    per_day: dict[int, Decimal] = {}
    for t in paid_in_window(transactions, window):
        if type_filter is not None and t.type != type_filter:
            continue
        per_day[t.date.day] = per_day.get(t.date.day, ZERO) + t.amount

    return [
        DailyAmount(
            day=day,
            label=f"{day:02d}/{window.month:02d}",
            amount=per_day[day],
        )
        for day in sorted(per_day)
    ]


def period_totals(
    transactions: Iterable[Transaction],
    month: dt.date,
    type_filter: Optional[TransactionType] = None,
) -> PeriodTotals:
    """Total amount and count of paid transactions in the month."""
    paid = [
        t for t in paid_in_window(transactions, month_window(month))
        if type_filter is None or t.type == type_filter
    ]
    return PeriodTotals(total=total_of(paid), count=len(paid))

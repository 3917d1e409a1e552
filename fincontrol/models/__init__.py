"""
Data Models Package

This package contains all Pydantic models used by fincontrol.
Everything the store persists or the metrics engine returns conforms
to these schemas.
"""

from fincontrol.models.finance import (
    Amount,
    Category,
    CategoryCreate,
    CategoryPatch,
    Dataset,
    Money,
    Transaction,
    TransactionCreate,
    TransactionPatch,
    TransactionStatus,
    TransactionType,
)
from fincontrol.models.metrics import (
    CategoryAmount,
    DailyAmount,
    IncomeExpenseTotals,
    MonthlyTrendPoint,
    MonthSummary,
    PeriodTotals,
    TransactionFilter,
)

__all__ = [
    # Finance models
    "Amount",
    "Category",
    "CategoryCreate",
    "CategoryPatch",
    "Dataset",
    "Money",
    "Transaction",
    "TransactionCreate",
    "TransactionPatch",
    "TransactionStatus",
    "TransactionType",
    # Metric models
    "CategoryAmount",
    "DailyAmount",
    "IncomeExpenseTotals",
    "MonthlyTrendPoint",
    "MonthSummary",
    "PeriodTotals",
    "TransactionFilter",
]

"""
Transaction List Filtering

Unlike the aggregations, the list view shows pending transactions too;
status is just another optional criterion here.
"""

import datetime as dt
from collections.abc import Iterable
from typing import Optional

from fincontrol.metrics.windows import month_window
from fincontrol.models.finance import Transaction
from fincontrol.models.metrics import TransactionFilter


def matches(transaction: Transaction, criteria: TransactionFilter) -> bool:
    """Check one transaction against every criterion that is set."""
    if criteria.search and criteria.search.lower() not in transaction.description.lower():
        return False
    if criteria.category_id and transaction.category_id != criteria.category_id:
        return False
    if criteria.type is not None and transaction.type != criteria.type:
        return False
    if criteria.status is not None and transaction.status != criteria.status:
        return False
    if criteria.min_amount is not None and transaction.amount < criteria.min_amount:
        return False
    if criteria.max_amount is not None and transaction.amount > criteria.max_amount:
        return False
    return True


def filter_transactions(
    transactions: Iterable[Transaction],
    month: dt.date,
    criteria: Optional[TransactionFilter] = None,
) -> list[Transaction]:
    """Transactions dated in the month that satisfy the criteria, in input order."""
    window = month_window(month)
    criteria = criteria or TransactionFilter()
    return [
        t for t in transactions
        if window.contains(t.date) and matches(t, criteria)
    ]


def newest_first(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Sort by date descending. Same-day transactions keep their order."""
    return sorted(transactions, key=lambda t: t.date, reverse=True)

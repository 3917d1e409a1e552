"""Shared fixtures for fincontrol tests."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from fincontrol.models import (
    Transaction,
    TransactionStatus,
    TransactionType,
)
from fincontrol.services import DataStore, InMemoryStorage


MARCH_2025 = date(2025, 3, 1)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def store(storage):
    return DataStore(storage)


@pytest.fixture
def month():
    return MARCH_2025


@pytest.fixture
def make_transaction():
    """Build a stored-shape transaction without going through a store."""
    counter = {"n": 0}

    def _make(
        amount,
        day,
        type=TransactionType.EXPENSE,
        status=TransactionStatus.PAID,
        category_id="5",
        description="Item",
        year=2025,
        month=3,
    ):
        counter["n"] += 1
        stamp = datetime(2025, 1, 1, tzinfo=timezone.utc)
        return Transaction(
            id=f"t{counter['n']}",
            description=description,
            amount=Decimal(str(amount)),
            category_id=category_id,
            date=date(year, month, day),
            type=type,
            status=status,
            created_at=stamp,
            updated_at=stamp,
        )

    return _make

"""
Tests for fincontrol models

Test strategy:
1. Unit tests for the Pydantic schemas (validation, aliases, patches)
2. Store and metrics behaviour live in their own modules
3. No real disk or clock dependencies beyond tmp_path
"""

import json
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from fincontrol.models import (
    Category,
    CategoryPatch,
    Dataset,
    Transaction,
    TransactionCreate,
    TransactionFilter,
    TransactionPatch,
    TransactionStatus,
    TransactionType,
)


STORED_TRANSACTION = {
    "id": "abc",
    "description": "Groceries",
    "amount": 42.5,
    "categoryId": "5",
    "date": "2025-03-10",
    "type": "expense",
    "status": "paid",
    "createdAt": "2025-03-10T12:00:00.000Z",
    "updatedAt": "2025-03-11T08:30:00.000Z",
}


class TestTransactionModels:
    """Tests for transaction schemas."""

    def test_transaction_from_stored_shape(self):
        """camelCase keys from the stored blob populate snake_case fields."""
        transaction = Transaction.model_validate(STORED_TRANSACTION)
        assert transaction.category_id == "5"
        assert transaction.amount == Decimal("42.5")
        assert transaction.date == date(2025, 3, 10)
        assert transaction.type == TransactionType.EXPENSE
        assert transaction.created_at == datetime(2025, 3, 10, 12, tzinfo=timezone.utc)
        assert transaction.notes is None

    def test_transaction_serializes_camel_case_with_numeric_amount(self):
        """JSON output uses camelCase keys and a numeric amount."""
        transaction = Transaction.model_validate(STORED_TRANSACTION)
        data = json.loads(transaction.model_dump_json(by_alias=True))
        assert data["categoryId"] == "5"
        assert data["amount"] == 42.5
        assert data["date"] == "2025-03-10"
        assert "createdAt" in data and "updatedAt" in data

    def test_create_defaults_to_paid(self):
        """Status defaults to paid."""
        fields = TransactionCreate(
            description="Salary",
            amount=Decimal("1000"),
            category_id="1",
            date=date(2025, 3, 3),
            type=TransactionType.INCOME,
        )
        assert fields.status == TransactionStatus.PAID

    def test_create_strips_whitespace(self):
        """Surrounding whitespace is stripped from strings."""
        fields = TransactionCreate(
            description="  Bus ticket  ",
            amount=Decimal("4"),
            category_id="6",
            date=date(2025, 3, 3),
            type="expense",
        )
        assert fields.description == "Bus ticket"

    def test_create_rejects_unknown_type(self):
        """Types other than income and expense are rejected."""
        with pytest.raises(ValidationError):
            TransactionCreate(
                description="Refund",
                amount=Decimal("4"),
                category_id="6",
                date=date(2025, 3, 3),
                type="refund",
            )

    def test_create_rejects_system_fields(self):
        """id and timestamps are assigned by the store, never by callers."""
        with pytest.raises(ValidationError):
            TransactionCreate.model_validate({
                "description": "x",
                "amount": 1,
                "categoryId": "5",
                "date": "2025-03-01",
                "type": "expense",
                "id": "mine",
            })


class TestPatchModels:
    """Tests for explicit patch semantics."""

    def test_changes_only_include_supplied_fields(self):
        """changes() reports only fields the caller set."""
        patch = TransactionPatch(amount=Decimal("5"))
        assert patch.changes() == {"amount": Decimal("5")}

    def test_explicit_none_is_a_change(self):
        """An explicit None counts as a change."""
        patch = TransactionPatch.model_validate({"notes": None})
        assert patch.changes() == {"notes": None}

    def test_accepts_camel_case_keys(self):
        """Patches accept camelCase keys."""
        patch = TransactionPatch.model_validate({"categoryId": "7"})
        assert patch.changes() == {"category_id": "7"}

    @pytest.mark.parametrize("field", ["id", "createdAt", "updatedAt", "colour"])
    def test_rejects_unknown_and_system_fields(self, field):
        """Patches reject unknown fields and system fields."""
        with pytest.raises(ValidationError):
            TransactionPatch.model_validate({field: "x"})

    def test_category_patch_rejects_unknown_fields(self):
        """Category patches reject unknown fields."""
        with pytest.raises(ValidationError):
            CategoryPatch.model_validate({"label": "Food"})


class TestDataset:
    """Tests for the aggregate root helpers."""

    def test_defaults_are_empty(self):
        """A new dataset has no records."""
        dataset = Dataset()
        assert dataset.transactions == []
        assert dataset.categories == []

    def test_lookup_and_reference_count(self):
        """Lookups return indexes; references are counted."""
        dataset = Dataset(
            transactions=[
                Transaction.model_validate({**STORED_TRANSACTION, "id": "a"}),
                Transaction.model_validate({**STORED_TRANSACTION, "id": "b"}),
            ],
            categories=[
                Category(id="5", name="Food", color="#ef4444", icon="Utensils", type="expense"),
            ],
        )
        assert dataset.find_transaction("b") == 1
        assert dataset.find_transaction("zzz") is None
        assert dataset.find_category("5") == 0
        assert dataset.references_to("5") == 2
        assert dataset.references_to("6") == 0

    def test_to_json_pretty_prints_when_asked(self):
        """to_json(indent=2) pretty-prints the dataset."""
        text = Dataset().to_json(indent=2)
        assert text.startswith("{\n  ")
        assert json.loads(text) == {"transactions": [], "categories": []}


class TestTransactionFilter:
    """Tests for list filter criteria."""

    def test_empty_filter_is_inactive(self):
        """A filter with no criteria is inactive."""
        assert TransactionFilter().is_active is False

    def test_any_criterion_activates(self):
        """Setting any criterion activates the filter."""
        assert TransactionFilter(status=TransactionStatus.PENDING).is_active is True
        assert TransactionFilter(min_amount=Decimal("0")).is_active is True
        assert TransactionFilter(search="bus").is_active is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

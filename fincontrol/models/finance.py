"""
Core Data Models for fincontrol

These models define the schemas for everything the data store persists.
They are designed to:
1. Validate records at the boundary (creation, patching, import)
2. Serialize to the exact JSON shape kept in storage
3. Keep Python-side names snake_case while the stored blob stays camelCase

DESIGN DECISION: Amounts are Decimal in Python but are written to JSON as
plain numbers, so snapshots stay readable by other tools.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
)
from pydantic.alias_generators import to_camel


Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]

# Stored amounts are limited to what a JSON number holds without rounding
MAX_AMOUNT_DIGITS = 15

Amount = Annotated[Money, Field(max_digits=MAX_AMOUNT_DIGITS)]


def utc_now() -> dt.datetime:
    """Current time as a timezone-aware UTC datetime."""
    return dt.datetime.now(dt.timezone.utc)


def new_id() -> str:
    """Fresh unique record identifier."""
    return str(uuid4())


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of money flow. Also classifies categories."""
    INCOME = "income"
    EXPENSE = "expense"


class TransactionStatus(str, Enum):
    """
    Settlement status.

    Only PAID transactions count towards realized metrics.
    """
    PAID = "paid"
    PENDING = "pending"


class FinanceModel(BaseModel):
    """Shared configuration: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# =============================================================================
# TRANSACTIONS
# =============================================================================

class TransactionCreate(FinanceModel):
    """
    Fields a caller supplies when recording a transaction.

    No cross-checks happen here: the amount sign, whether the category
    exists, and how plausible the date is are all accepted as given.
    """
    model_config = ConfigDict(extra="forbid")

    description: str = Field(
        ...,
        description="Free text description"
    )
    amount: Amount = Field(
        ...,
        description="Magnitude of the transaction; sign comes from type"
    )
    category_id: str = Field(
        ...,
        description="Id of the category this transaction belongs to"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date the transaction is attributed to"
    )
    type: TransactionType
    status: TransactionStatus = TransactionStatus.PAID
    notes: Optional[str] = None


class Transaction(TransactionCreate):
    """
    A stored transaction.

    id and created_at never change after creation; updated_at moves
    forward on every mutation.
    """
    model_config = ConfigDict(extra="ignore")

    id: str = Field(
        default_factory=new_id,
        description="Unique transaction id"
    )
    created_at: dt.datetime = Field(
        default_factory=utc_now,
        description="When the transaction was recorded"
    )
    updated_at: dt.datetime = Field(
        default_factory=utc_now,
        description="Last modification time"
    )


class TransactionPatch(FinanceModel):
    """
    Partial update for a transaction.

    Only fields explicitly supplied are applied. Unknown fields are
    rejected, and identity/audit fields cannot be patched at all.
    """
    model_config = ConfigDict(extra="forbid")

    description: Optional[str] = None
    amount: Optional[Amount] = None
    category_id: Optional[str] = None
    date: Optional[dt.date] = None
    type: Optional[TransactionType] = None
    status: Optional[TransactionStatus] = None
    notes: Optional[str] = None

    def changes(self) -> dict:
        """Supplied fields only, keyed by Python attribute name."""
        return self.model_dump(exclude_unset=True)


# =============================================================================
# CATEGORIES
# =============================================================================

class CategoryCreate(FinanceModel):
    """Fields a caller supplies when adding a category."""
    model_config = ConfigDict(extra="forbid")

    name: str = Field(
        ...,
        description="Display label"
    )
    color: str = Field(
        ...,
        description="Display color token (e.g. '#10b981')"
    )
    icon: str = Field(
        ...,
        description="Display icon token (e.g. 'Briefcase')"
    )
    type: TransactionType = Field(
        ...,
        description="Which kind of transaction this category is meant for"
    )


class Category(CategoryCreate):
    """A stored category."""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(
        default_factory=new_id,
        description="Unique category id"
    )


class CategoryPatch(FinanceModel):
    """Partial update for a category. Same rules as TransactionPatch."""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    type: Optional[TransactionType] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


# =============================================================================
# DATASET
# =============================================================================

class Dataset(FinanceModel):
    """
    The aggregate root: everything the store persists under one key.

    Transactions keep insertion order. Categories have no required order.
    """

    transactions: list[Transaction] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize in the stored (camelCase) shape."""
        return self.model_dump_json(by_alias=True, indent=indent)

    def find_transaction(self, transaction_id: str) -> Optional[int]:
        """Index of the transaction with this id, or None."""
        for index, transaction in enumerate(self.transactions):
            if transaction.id == transaction_id:
                return index
        return None

    def find_category(self, category_id: str) -> Optional[int]:
        """Index of the category with this id, or None."""
        for index, category in enumerate(self.categories):
            if category.id == category_id:
                return index
        return None

    def references_to(self, category_id: str) -> int:
        """How many transactions point at this category id."""
        return sum(1 for t in self.transactions if t.category_id == category_id)

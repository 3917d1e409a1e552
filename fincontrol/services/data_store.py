"""
Data Store

Owns the financial dataset: every transaction and category lives under
a single storage key and is read-modified-rewritten on each mutation.

GUARANTEES:
- Every mutation persists before it returns
- A category referenced by any transaction cannot be deleted
- Missing records are reported with None/False, never exceptions
- A corrupt stored blob never breaks load(); the seed dataset is used
- A rejected import leaves the stored dataset untouched

DESIGN DECISION: category_id on transactions is NOT checked against the
category set. Orphaned references are tolerated and surface in the
metrics as a generic "Other" slice.
"""

import datetime as dt
import json
from decimal import Decimal
from typing import Optional, Union

from pydantic import ValidationError

from fincontrol.audit import get_logger
from fincontrol.config import DEFAULT_STORAGE_KEY
from fincontrol.models.finance import (
    Category,
    CategoryCreate,
    CategoryPatch,
    Dataset,
    Transaction,
    TransactionCreate,
    TransactionPatch,
    new_id,
    utc_now,
)
from fincontrol.services.defaults import seed_dataset
from fincontrol.services.storage import KeyValueStorage


class DataStoreError(Exception):
    """Base exception for data store operations."""
    pass


class ReferentialIntegrityError(DataStoreError):
    """Attempted to delete a category that transactions still use."""

    def __init__(self, category_id: str, reference_count: int):
        self.category_id = category_id
        self.reference_count = reference_count
        super().__init__(
            f"Cannot delete category {category_id!r}: "
            f"{reference_count} transaction(s) still reference it"
        )


class SnapshotFormatError(DataStoreError):
    """Text could not be turned into a dataset."""
    pass


def parse_snapshot(text: Union[str, bytes]) -> Dataset:
    """
    Parse a stored blob or an exported snapshot.

    Both collections must be present. Records must validate.

    Raises:
        SnapshotFormatError: If any of the above does not hold
    """
    try:
        payload = json.loads(text, parse_float=Decimal)
    except (TypeError, ValueError, RecursionError) as e:
        raise SnapshotFormatError(f"Not valid JSON: {e}")

    if not isinstance(payload, dict):
        raise SnapshotFormatError("Snapshot must be a JSON object")

    missing = [
        name for name in ("transactions", "categories")
        if payload.get(name) is None
    ]
    if missing:
        raise SnapshotFormatError(f"Snapshot lacks {', '.join(missing)}")

    try:
        return Dataset.model_validate(payload)
    except ValidationError as e:
        raise SnapshotFormatError(
            f"Snapshot records are invalid ({e.error_count()} error(s))"
        )


def _touched(created_at: dt.datetime) -> dt.datetime:
    """Fresh updated_at that never precedes created_at."""
    now = utc_now()
    if created_at.tzinfo is None:
        return now
    return max(now, created_at)


class DataStore:
    """
    CRUD, import/export and seeding over the financial dataset.

    Single-threaded by contract: each call runs read-modify-persist to
    completion. Concurrent writers would be last-writer-wins.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = DEFAULT_STORAGE_KEY,
    ):
        """
        Args:
            storage: Backend the dataset blob is kept in
            key: Storage key for the blob
        """
        self._storage = storage
        self._key = key
        self._logger = get_logger(__name__, storage_key=key)

    @property
    def key(self) -> str:
        return self._key

    # -------------------------------------------------------------------------
    # Loading and persistence
    # -------------------------------------------------------------------------

    def initialize(self) -> Dataset:
        """
        Explicit bootstrap: persist the seed dataset if nothing is stored.

        An existing dataset (even a corrupt one) is left as it is.
        """
        if self._storage.get(self._key) is None:
            dataset = seed_dataset()
            self._save(dataset)
            self._logger.info(
                "dataset_seeded",
                category_count=len(dataset.categories),
            )
            return dataset
        return self.load()

    def load(self) -> Dataset:
        """
        Current dataset.

        Nothing stored yet: the seed dataset (not persisted until the
        first write). Stored blob unreadable: logged, seed dataset returned.
        """
        raw = self._storage.get(self._key)
        if raw is None:
            return seed_dataset()

        try:
            return parse_snapshot(raw)
        except SnapshotFormatError as e:
            self._logger.error("dataset_corrupt", error=str(e))
            return seed_dataset()

    def _save(self, dataset: Dataset) -> None:
        self._storage.set(self._key, dataset.to_json())

    # -------------------------------------------------------------------------
    # Read accessors
    # -------------------------------------------------------------------------

    def get_transactions(self) -> list[Transaction]:
        """All transactions in insertion order."""
        return self.load().transactions

    def get_categories(self) -> list[Category]:
        return self.load().categories

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        dataset = self.load()
        index = dataset.find_transaction(transaction_id)
        return None if index is None else dataset.transactions[index]

    def get_category(self, category_id: str) -> Optional[Category]:
        dataset = self.load()
        index = dataset.find_category(category_id)
        return None if index is None else dataset.categories[index]

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def add_transaction(
        self,
        fields: Union[TransactionCreate, dict],
    ) -> Transaction:
        """
        Record a new transaction.

        Assigns a fresh id and sets created_at == updated_at == now.

        Raises:
            ValidationError: If fields do not match the transaction shape
        """
        fields = TransactionCreate.model_validate(fields)
        dataset = self.load()

        taken = {t.id for t in dataset.transactions}
        transaction_id = new_id()
        while transaction_id in taken:
            transaction_id = new_id()

        now = utc_now()
        transaction = Transaction(
            **fields.model_dump(include=set(TransactionCreate.model_fields)),
            id=transaction_id,
            created_at=now,
            updated_at=now,
        )
        dataset.transactions.append(transaction)
        self._save(dataset)

        self._logger.info(
            "transaction_added",
            transaction_id=transaction.id,
            type=transaction.type.value,
            status=transaction.status.value,
        )
        return transaction

    def update_transaction(
        self,
        transaction_id: str,
        patch: Union[TransactionPatch, dict],
    ) -> Optional[Transaction]:
        """
        Apply a partial update.

        Returns:
            The merged transaction, or None if the id is unknown. The id
            is looked up before the patch is validated.

        Raises:
            ValidationError: If the patch or the merged record is invalid
        """
        dataset = self.load()

        index = dataset.find_transaction(transaction_id)
        if index is None:
            self._logger.debug("transaction_not_found", transaction_id=transaction_id)
            return None

        patch = TransactionPatch.model_validate(patch)
        current = dataset.transactions[index]
        merged = Transaction.model_validate({
            **current.model_dump(),
            **patch.changes(),
            "updated_at": _touched(current.created_at),
        })
        dataset.transactions[index] = merged
        self._save(dataset)

        self._logger.info(
            "transaction_updated",
            transaction_id=transaction_id,
            fields=sorted(patch.changes()),
        )
        return merged

    def delete_transaction(self, transaction_id: str) -> bool:
        """Remove a transaction. Returns whether anything was removed."""
        dataset = self.load()

        index = dataset.find_transaction(transaction_id)
        if index is None:
            self._logger.debug("transaction_not_found", transaction_id=transaction_id)
            return False

        del dataset.transactions[index]
        self._save(dataset)

        self._logger.info("transaction_deleted", transaction_id=transaction_id)
        return True

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def add_category(self, fields: Union[CategoryCreate, dict]) -> Category:
        """
        Add a category with a fresh id.

        Raises:
            ValidationError: If fields do not match the category shape
        """
        fields = CategoryCreate.model_validate(fields)
        dataset = self.load()

        taken = {c.id for c in dataset.categories}
        category_id = new_id()
        while category_id in taken:
            category_id = new_id()

        category = Category(
            **fields.model_dump(include=set(CategoryCreate.model_fields)),
            id=category_id,
        )
        dataset.categories.append(category)
        self._save(dataset)

        self._logger.info(
            "category_added",
            category_id=category.id,
            type=category.type.value,
        )
        return category

    def update_category(
        self,
        category_id: str,
        patch: Union[CategoryPatch, dict],
    ) -> Optional[Category]:
        """Apply a partial update. None if the id is unknown, whatever the patch."""
        dataset = self.load()

        index = dataset.find_category(category_id)
        if index is None:
            self._logger.debug("category_not_found", category_id=category_id)
            return None

        patch = CategoryPatch.model_validate(patch)
        merged = Category.model_validate({
            **dataset.categories[index].model_dump(),
            **patch.changes(),
        })
        dataset.categories[index] = merged
        self._save(dataset)

        self._logger.info(
            "category_updated",
            category_id=category_id,
            fields=sorted(patch.changes()),
        )
        return merged

    def delete_category(self, category_id: str) -> bool:
        """
        Remove a category.

        Returns:
            True if removed, False if the id was never present

        Raises:
            ReferentialIntegrityError: If any transaction uses the category
        """
        dataset = self.load()

        index = dataset.find_category(category_id)
        if index is None:
            self._logger.debug("category_not_found", category_id=category_id)
            return False

        references = dataset.references_to(category_id)
        if references:
            self._logger.warning(
                "category_delete_blocked",
                category_id=category_id,
                reference_count=references,
            )
            raise ReferentialIntegrityError(category_id, references)

        del dataset.categories[index]
        self._save(dataset)

        self._logger.info("category_deleted", category_id=category_id)
        return True

    # -------------------------------------------------------------------------
    # Bulk operations
    # -------------------------------------------------------------------------

    def export_snapshot(self) -> str:
        """The whole dataset as pretty-printed JSON, re-importable as is."""
        return self.load().to_json(indent=2)

    def import_snapshot(self, text: Union[str, bytes]) -> bool:
        """
        Replace the stored dataset with a snapshot.

        No merge: whatever was stored before is gone on success.
        On failure nothing changes and False is returned.
        """
        try:
            dataset = parse_snapshot(text)
        except SnapshotFormatError as e:
            self._logger.warning("import_rejected", error=str(e))
            return False

        self._save(dataset)
        self._logger.info(
            "dataset_imported",
            transaction_count=len(dataset.transactions),
            category_count=len(dataset.categories),
        )
        return True

    def clear_all(self) -> None:
        """Erase the stored dataset. The next load() starts from the seed."""
        removed = self._storage.remove(self._key)
        self._logger.info("dataset_cleared", removed=removed)

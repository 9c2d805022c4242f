"""Mini README: Ledger store owning the ordered transaction collection.

Structure:
    * LedgerStore - add/remove/clear/load/save over a key-value backend,
      plus the last-used default exchange rate.

Every mutation writes the full ledger back immediately. Loading never
fails: missing or unreadable data starts an empty ledger and is logged.
Deletion compares identifiers as text because older ledgers may hold
numeric ids. The store performs no confirmation of its own; destructive
actions reach it through ``daigou.entry.confirmation``.
"""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Iterable, List, Optional

from ..finance.aggregator import SummaryStats, aggregate
from ..finance.ledger import Transaction, new_transaction_id
from ..logging_utils import get_logger
from ..utils.numbers import parse_number
from .key_value import KeyValueStore

LOGGER = get_logger(__name__)

TRANSACTIONS_KEY = "daigou_transactions"
DEFAULT_RATE_KEY = "daigou_default_rate"
FALLBACK_DEFAULT_RATE = 0.28


class LedgerStore:
    """Own the ledger and persist it after every change."""

    def __init__(
        self,
        backend: KeyValueStore,
        *,
        transactions_key: str = TRANSACTIONS_KEY,
        default_rate_key: str = DEFAULT_RATE_KEY,
        fallback_default_rate: float = FALLBACK_DEFAULT_RATE,
    ) -> None:
        self._backend = backend
        self._transactions_key = transactions_key
        self._default_rate_key = default_rate_key
        self._fallback_default_rate = fallback_default_rate
        self._transactions: List[Transaction] = []

    @property
    def transactions(self) -> List[Transaction]:
        """Return a copy of the ledger in insertion order."""

        return list(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def newest_first(self) -> List[Transaction]:
        """Return the ledger in reverse entry order for display."""

        return list(reversed(self._transactions))

    def get(self, transaction_id: object) -> Optional[Transaction]:
        """Return the transaction whose id matches textually, if any."""

        wanted = str(transaction_id)
        for transaction in self._transactions:
            if str(transaction.id) == wanted:
                return transaction
        return None

    def summary(self) -> SummaryStats:
        """Recompute ledger totals from scratch."""

        return aggregate(self._transactions)

    def load(self) -> None:
        """Replace the in-memory ledger with the persisted one."""

        self._transactions = []
        try:
            raw = self._backend.get(self._transactions_key)
        except (OSError, UnicodeDecodeError) as error:
            LOGGER.error("Failed to read persisted ledger: %s", error)
            return
        if not raw:
            LOGGER.info("No persisted ledger found; starting empty")
            return
        try:
            records = json.loads(raw)
        except (json.JSONDecodeError, TypeError, ValueError) as error:
            LOGGER.error("Failed to load transactions: %s", error)
            return
        if not isinstance(records, list):
            LOGGER.error("Persisted ledger is %s, expected a list; starting empty", type(records).__name__)
            return
        self._transactions = list(self._restore(records))
        LOGGER.debug("Loaded %s transactions", len(self._transactions))

    def _restore(self, records: Iterable[object]) -> Iterable[Transaction]:
        """Yield valid records, skipping bad ones and re-issuing duplicate ids."""

        seen: set[str] = set()
        for index, record in enumerate(records):
            try:
                transaction = Transaction.from_dict(record)  # type: ignore[arg-type]
            except ValueError as error:
                LOGGER.warning("Skipping ledger record %s: %s", index, error)
                continue
            if transaction.id in seen:
                fresh_id = new_transaction_id()
                LOGGER.warning("Duplicate transaction id %s re-issued as %s", transaction.id, fresh_id)
                transaction = _with_id(transaction, fresh_id)
            seen.add(transaction.id)
            yield transaction

    def save(self) -> None:
        """Write the full ledger to the backend."""

        payload = json.dumps(
            [transaction.as_dict() for transaction in self._transactions],
            ensure_ascii=False,
        )
        self._backend.set(self._transactions_key, payload)
        LOGGER.debug("Persisted %s transactions", len(self._transactions))

    def add(self, transaction: Transaction) -> Transaction:
        """Append a transaction, assigning an id when it has none."""

        if not transaction.id:
            transaction = _with_id(transaction, new_transaction_id())
        elif self.get(transaction.id) is not None:
            raise ValueError(f"Transaction {transaction.id} already exists.")
        self._transactions.append(transaction)
        self.save()
        LOGGER.info(
            "Recorded transaction %s (%s x%s for %s)",
            transaction.id,
            transaction.item_name,
            transaction.quantity,
            transaction.customer_name,
        )
        return transaction

    def remove(self, transaction_id: object) -> None:
        """Delete the matching transaction; unknown ids are ignored."""

        wanted = str(transaction_id)
        remaining = [t for t in self._transactions if str(t.id) != wanted]
        if len(remaining) == len(self._transactions):
            LOGGER.debug("Transaction %s not in ledger; nothing removed", wanted)
        else:
            LOGGER.info("Removed transaction %s", wanted)
        self._transactions = remaining
        self.save()

    def clear(self) -> None:
        """Remove every transaction."""

        LOGGER.info("Clearing ledger of %s transactions", len(self._transactions))
        self._transactions = []
        self.save()

    @property
    def default_rate(self) -> float:
        """Last-used default exchange rate, or the fallback when unset."""

        try:
            stored = self._backend.get(self._default_rate_key)
        except (OSError, UnicodeDecodeError) as error:
            LOGGER.error("Failed to read default exchange rate: %s", error)
            stored = None
        rate = parse_number(stored)
        return self._fallback_default_rate if rate is None else rate

    def set_default_rate(self, rate: float) -> None:
        self._backend.set(self._default_rate_key, repr(float(rate)))
        LOGGER.info("Default exchange rate set to %s", rate)


def _with_id(transaction: Transaction, transaction_id: str) -> Transaction:
    return replace(transaction, id=transaction_id)

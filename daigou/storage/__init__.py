"""Mini README: Persistence for the daigou ledger.

``key_value`` provides the durable text store (one file per key, or an
in-memory dictionary) and ``ledger_store`` owns the transaction collection
on top of it. Callers receive a ``LedgerStore`` explicitly; there is no
process-wide ledger.
"""

from __future__ import annotations

from pathlib import Path

from ..configuration import DaigouSettings
from .key_value import DirectoryKeyValueStore, KeyValueStore, MemoryKeyValueStore
from .ledger_store import DEFAULT_RATE_KEY, TRANSACTIONS_KEY, LedgerStore


def open_ledger_store(settings: DaigouSettings) -> LedgerStore:
    """Build and load the durable ledger described by ``settings``."""

    store = LedgerStore(
        DirectoryKeyValueStore(Path(settings.data_directory)),
        transactions_key=settings.transactions_key,
        default_rate_key=settings.default_rate_key,
        fallback_default_rate=settings.fallback_default_rate,
    )
    store.load()
    return store


__all__ = [
    "DEFAULT_RATE_KEY",
    "DirectoryKeyValueStore",
    "KeyValueStore",
    "LedgerStore",
    "MemoryKeyValueStore",
    "TRANSACTIONS_KEY",
    "open_ledger_store",
]

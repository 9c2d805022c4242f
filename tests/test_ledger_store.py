"""Mini README: Tests for the ledger store and its persistence contract.

These tests confirm that every mutation is written through, that loading
tolerates missing or corrupt data, that deletion compares ids as text and
is idempotent, and that the default exchange rate round-trips.
"""

from __future__ import annotations

import json

import pytest

from daigou.finance import Country, SummaryStats, Transaction
from daigou.storage import (
    DEFAULT_RATE_KEY,
    TRANSACTIONS_KEY,
    DirectoryKeyValueStore,
    LedgerStore,
    MemoryKeyValueStore,
)


def _transaction(transaction_id: str = "", **overrides: object) -> Transaction:
    values = dict(
        id=transaction_id,
        country=Country.KR,
        customer_name="Amy",
        item_name="面膜",
        quantity=2,
        cost_foreign=1000.0,
        exchange_rate=0.02,
        price_sold=30.0,
        date="2024-05-01",
    )
    values.update(overrides)
    return Transaction(**values)  # type: ignore[arg-type]


def test_add_assigns_id_and_persists() -> None:
    """Adding writes the full ledger to the backend immediately."""

    backend = MemoryKeyValueStore()
    store = LedgerStore(backend)

    recorded = store.add(_transaction())

    assert recorded.id
    persisted = json.loads(backend.values[TRANSACTIONS_KEY])
    assert [record["id"] for record in persisted] == [recorded.id]
    assert persisted[0]["costJpy"] == 1000.0


def test_add_appends_in_entry_order() -> None:
    store = LedgerStore(MemoryKeyValueStore())
    store.add(_transaction("a"))
    store.add(_transaction("b"))

    assert [t.id for t in store.transactions] == ["a", "b"]
    assert [t.id for t in store.newest_first()] == ["b", "a"]


def test_add_rejects_duplicate_explicit_id() -> None:
    store = LedgerStore(MemoryKeyValueStore())
    store.add(_transaction("dup"))

    with pytest.raises(ValueError):
        store.add(_transaction("dup"))
    assert len(store) == 1


def test_remove_is_idempotent_and_textual() -> None:
    """Numeric ids from older ledgers can be removed by their text form."""

    backend = MemoryKeyValueStore(
        {TRANSACTIONS_KEY: json.dumps([{"id": 123, "customerName": "Ken", "itemName": "Tea"}])}
    )
    store = LedgerStore(backend)
    store.load()
    store.add(_transaction("keep"))

    store.remove(123)
    once = store.transactions
    store.remove("123")

    assert store.transactions == once
    assert [t.id for t in once] == ["keep"]
    assert [r["id"] for r in json.loads(backend.values[TRANSACTIONS_KEY])] == ["keep"]


def test_clear_then_summary_is_zero() -> None:
    backend = MemoryKeyValueStore()
    store = LedgerStore(backend)
    store.add(_transaction())
    store.add(_transaction(quantity=4))

    store.clear()

    assert store.summary() == SummaryStats(0.0, 0.0, 0.0, 0)
    assert json.loads(backend.values[TRANSACTIONS_KEY]) == []


def test_summary_matches_documented_scenario() -> None:
    store = LedgerStore(MemoryKeyValueStore())
    store.add(_transaction())

    stats = store.summary()

    assert stats.total_sales == pytest.approx(60.0)
    assert stats.total_cost == pytest.approx(40.0)
    assert stats.total_profit == pytest.approx(20.0)
    assert stats.item_count == 2


@pytest.mark.parametrize("payload", [None, "", "{not json", json.dumps({"id": "x"}), "42"])
def test_load_recovers_from_missing_or_corrupt_data(payload) -> None:
    """Anything that is not a JSON array of records yields an empty ledger."""

    initial = {} if payload is None else {TRANSACTIONS_KEY: payload}
    store = LedgerStore(MemoryKeyValueStore(initial))

    store.load()

    assert store.transactions == []


def test_load_skips_bad_records_and_reissues_duplicate_ids() -> None:
    records = [
        {"id": "a", "customerName": "Amy", "itemName": "Cream", "quantity": 1},
        "garbage",
        {"id": "a", "customerName": "Ben", "itemName": "Soap", "quantity": 3},
    ]
    store = LedgerStore(MemoryKeyValueStore({TRANSACTIONS_KEY: json.dumps(records)}))

    store.load()

    loaded = store.transactions
    assert [t.customer_name for t in loaded] == ["Amy", "Ben"]
    assert loaded[0].id == "a"
    assert loaded[1].id != "a"
    assert all(t.country is Country.JP for t in loaded)


def test_directory_backend_round_trip(tmp_path) -> None:
    """A second store over the same directory sees the first store's writes."""

    first = LedgerStore(DirectoryKeyValueStore(tmp_path))
    first.add(_transaction("persisted", customer_name="王小明"))

    second = LedgerStore(DirectoryKeyValueStore(tmp_path))
    second.load()

    assert second.transactions == first.transactions
    assert (tmp_path / f"{TRANSACTIONS_KEY}.json").exists()


def test_default_rate_fallback_and_update() -> None:
    backend = MemoryKeyValueStore({DEFAULT_RATE_KEY: "not-a-number"})
    store = LedgerStore(backend)

    assert store.default_rate == pytest.approx(0.28)
    store.set_default_rate(0.3)
    assert store.default_rate == pytest.approx(0.3)
    assert LedgerStore(backend).default_rate == pytest.approx(0.3)


def test_directory_backend_rejects_path_like_keys(tmp_path) -> None:
    with pytest.raises(ValueError):
        DirectoryKeyValueStore(tmp_path).get("../escape")


def test_load_recovers_from_undecodable_ledger_file(tmp_path) -> None:
    """A ledger file that is not UTF-8 starts an empty ledger instead of raising."""

    (tmp_path / f"{TRANSACTIONS_KEY}.json").write_bytes(b"[\xff\xfe garbage")
    (tmp_path / f"{DEFAULT_RATE_KEY}.json").write_bytes(b"\xff")
    store = LedgerStore(DirectoryKeyValueStore(tmp_path))

    store.load()

    assert store.transactions == []
    assert store.default_rate == pytest.approx(0.28)
    store.add(_transaction("fresh"))
    reopened = LedgerStore(DirectoryKeyValueStore(tmp_path))
    reopened.load()
    assert [t.id for t in reopened.transactions] == ["fresh"]

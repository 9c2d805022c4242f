"""Mini README: Tests for the delete confirmation state machine.

Requests only record intent; the store changes on confirm and never on
cancel.
"""

from __future__ import annotations

from daigou.entry import ConfirmationGate, PendingActionKind
from daigou.finance import Country, Transaction
from daigou.storage import LedgerStore, MemoryKeyValueStore


def _store() -> LedgerStore:
    store = LedgerStore(MemoryKeyValueStore())
    for transaction_id in ("a", "b"):
        store.add(
            Transaction(
                id=transaction_id,
                country=Country.JP,
                customer_name="Amy",
                item_name="Cream",
                quantity=1,
                cost_foreign=1000.0,
                exchange_rate=0.2,
                price_sold=280.0,
                date="2024-05-01",
            )
        )
    return store


def test_delete_request_then_confirm_removes_entry() -> None:
    store = _store()
    gate = ConfirmationGate()

    pending = gate.request_delete("a")

    assert pending.kind is PendingActionKind.DELETE
    assert gate.is_pending
    assert len(store) == 2
    assert gate.confirm(store) is True
    assert [t.id for t in store.transactions] == ["b"]
    assert not gate.is_pending


def test_cancel_returns_to_idle_without_mutation() -> None:
    store = _store()
    gate = ConfirmationGate()
    gate.request_clear_all()

    gate.cancel()

    assert not gate.is_pending
    assert len(store) == 2
    assert gate.confirm(store) is False
    assert len(store) == 2


def test_clear_all_confirm_empties_ledger() -> None:
    store = _store()
    gate = ConfirmationGate()
    gate.request_clear_all()

    assert gate.title == "清空所有資料"
    assert "永久刪除" in gate.message
    gate.confirm(store)

    assert store.transactions == []


def test_new_request_replaces_pending_intent() -> None:
    store = _store()
    gate = ConfirmationGate()
    gate.request_clear_all()
    gate.request_delete("b")

    gate.confirm(store)

    assert [t.id for t in store.transactions] == ["a"]


def test_idle_gate_reports_no_dialog() -> None:
    state = ConfirmationGate().as_dict()

    assert state == {"pending": False, "kind": None, "target_id": None, "title": "", "message": ""}

"""Mini README: Transaction records kept in the resale ledger.

Structure:
    * Transaction - dataclass storing one purchase-and-resale event.
    * new_transaction_id - opaque identifier factory.

Records are immutable once created: correcting a mistake means deleting the
entry and adding a new one. ``as_dict``/``from_dict`` use the camelCase field
names of the persisted ledger, so files written by earlier versions of the
tool load unchanged. Loading is lenient: numbers that do not parse become 0,
quantity never drops below 1 and a missing country reads as Japan.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..utils.numbers import coerce_number, coerce_quantity, parse_number
from .countries import Country, resolve_country


def new_transaction_id() -> str:
    """Return a fresh opaque identifier."""

    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class Transaction:
    """One purchase in a foreign currency resold in local currency."""

    id: str
    country: Country
    customer_name: str
    item_name: str
    quantity: int
    cost_foreign: float
    exchange_rate: float
    price_sold: float
    date: str
    selling_exchange_rate: Optional[float] = None

    def as_dict(self) -> Dict[str, Any]:
        """Export the transaction using the persisted field names."""

        payload: Dict[str, Any] = {
            "id": self.id,
            "country": self.country.value,
            "customerName": self.customer_name,
            "itemName": self.item_name,
            "quantity": self.quantity,
            "costJpy": self.cost_foreign,
            "exchangeRate": self.exchange_rate,
            "priceSold": self.price_sold,
            "date": self.date,
        }
        if self.selling_exchange_rate is not None:
            payload["sellingExchangeRate"] = self.selling_exchange_rate
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Transaction":
        """Build a transaction from a persisted record, coercing bad values."""

        if not isinstance(payload, Mapping):
            raise ValueError(f"Transaction records must be mappings, got {type(payload).__name__}")
        raw_id = payload.get("id")
        return cls(
            id=str(raw_id) if raw_id not in (None, "") else new_transaction_id(),
            country=resolve_country(payload.get("country")),
            customer_name=str(payload.get("customerName") or ""),
            item_name=str(payload.get("itemName") or ""),
            quantity=coerce_quantity(payload.get("quantity")),
            cost_foreign=coerce_number(payload.get("costJpy")),
            exchange_rate=coerce_number(payload.get("exchangeRate")),
            price_sold=coerce_number(payload.get("priceSold")),
            date=str(payload.get("date") or ""),
            selling_exchange_rate=parse_number(payload.get("sellingExchangeRate")),
        )

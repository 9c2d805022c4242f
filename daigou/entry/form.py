"""Mini README: Entry draft behind the "record a sale" form.

Structure:
    * EntryPreview - live unit cost, profit and margin shown while typing.
    * EntryDraft - raw form fields plus country-driven pre-fill rules.

The draft keeps every field as the text the user typed. Picking a country
resets both rates to that country's defaults. Typing a cost or a selling
rate re-suggests the sale price as ``round(cost * selling rate)``.
``submit`` turns the draft into a ``Transaction`` or returns ``None`` when a
required label is blank.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Optional

from ..finance.countries import Country, country_config, resolve_country
from ..finance.derivation import derive_values, profit_margin_percent, round_half_up
from ..finance.ledger import Transaction, new_transaction_id
from ..logging_utils import get_logger
from ..utils.numbers import (
    coerce_number,
    coerce_quantity,
    format_number,
    parse_integer,
    parse_number,
)

LOGGER = get_logger(__name__)

EDITABLE_FIELDS = (
    "date",
    "customer_name",
    "item_name",
    "quantity",
    "cost_foreign",
    "exchange_rate",
    "selling_exchange_rate",
    "price_sold",
)


@dataclass(frozen=True, slots=True)
class EntryPreview:
    """Figures displayed beside the form before the entry is saved."""

    unit_local_cost: int
    estimated_profit: float
    profit_margin_percent: int


def _today_iso() -> str:
    return date.today().isoformat()


@dataclass
class EntryDraft:
    """Mutable state of the entry form."""

    country: Country = Country.JP
    date: str = field(default_factory=_today_iso)
    customer_name: str = ""
    item_name: str = ""
    quantity: str = "1"
    cost_foreign: str = ""
    exchange_rate: str = format_number(country_config(Country.JP).default_cost_rate)
    selling_exchange_rate: str = format_number(country_config(Country.JP).default_selling_rate)
    price_sold: str = ""

    def select_country(self, country: object) -> None:
        """Switch origin country and apply its default rates."""

        self.country = resolve_country(country)
        config = country_config(self.country)
        current_cost = coerce_number(self.cost_foreign)
        if current_cost > 0:
            self.price_sold = str(round_half_up(current_cost * config.default_selling_rate))
        self.exchange_rate = format_number(config.default_cost_rate)
        self.selling_exchange_rate = format_number(config.default_selling_rate)
        LOGGER.debug("Entry draft switched to %s", self.country.value)

    def update_field(self, name: str, value: str) -> None:
        """Store a typed value and refresh the suggested sale price."""

        if name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown entry field: {name}")
        value = "" if value is None else str(value)
        setattr(self, name, value)
        if name not in ("cost_foreign", "selling_exchange_rate"):
            return
        cost = parse_number(self.cost_foreign)
        selling_rate = parse_number(self.selling_exchange_rate)
        if cost is not None and selling_rate is not None:
            self.price_sold = str(round_half_up(cost * selling_rate))
        elif name == "cost_foreign" and value == "":
            self.price_sold = ""

    def preview(self) -> EntryPreview:
        quantity = parse_integer(self.quantity) or 0
        price_sold = coerce_number(self.price_sold)
        figures = derive_values(
            coerce_number(self.cost_foreign),
            coerce_number(self.exchange_rate),
            price_sold,
            quantity,
        )
        return EntryPreview(
            unit_local_cost=figures.unit_local_cost,
            estimated_profit=figures.unit_profit * quantity,
            profit_margin_percent=profit_margin_percent(figures.unit_profit, price_sold),
        )

    def submit(self, now: Optional[datetime] = None) -> Optional[Transaction]:
        """Build a transaction from the draft and reset the per-item fields."""

        if not self.customer_name.strip() or not self.item_name.strip():
            LOGGER.debug("Entry rejected: customer and item names are required")
            return None
        now = now or datetime.now()
        transaction = Transaction(
            id=new_transaction_id(),
            country=self.country,
            customer_name=self.customer_name,
            item_name=self.item_name,
            quantity=coerce_quantity(self.quantity),
            cost_foreign=coerce_number(self.cost_foreign),
            exchange_rate=coerce_number(self.exchange_rate),
            selling_exchange_rate=coerce_number(self.selling_exchange_rate),
            price_sold=coerce_number(self.price_sold),
            date=self.date or now.isoformat(),
        )
        self.customer_name = ""
        self.item_name = ""
        self.quantity = "1"
        self.cost_foreign = ""
        self.price_sold = ""
        return transaction

    def as_dict(self) -> Dict[str, object]:
        """Export the draft and its preview for the interface."""

        preview = self.preview()
        config = country_config(self.country)
        return {
            "country": self.country.value,
            "country_label": config.label,
            "currency_symbol": config.currency_symbol,
            "fields": {name: getattr(self, name) for name in EDITABLE_FIELDS},
            "preview": {
                "unit_local_cost": preview.unit_local_cost,
                "estimated_profit": preview.estimated_profit,
                "profit_margin_percent": preview.profit_margin_percent,
            },
        }

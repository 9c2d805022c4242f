"""Mini README: Profit derivation for a single transaction.

Structure:
    * round_half_up - rounding used for local-currency unit cost.
    * DerivedFigures - unit cost, profits and totals for one transaction.
    * derive_values / derive - pure computations over raw fields.
    * profit_margin_percent - margin shown in the entry preview.

Unit local cost is rounded once, at the unit level, before multiplying by
quantity. Sale price and totals are never rounded. The dashboard, clipboard
text and CSV export all call ``derive`` so their figures agree exactly.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .ledger import Transaction


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""

    return int(math.floor(value + 0.5))


@dataclass(frozen=True, slots=True)
class DerivedFigures:
    """Local-currency figures computed from one transaction."""

    unit_local_cost: int
    unit_profit: float
    total_cost: float
    total_sales: float
    total_profit: float


def derive_values(
    cost_foreign: float,
    exchange_rate: float,
    price_sold: float,
    quantity: int,
) -> DerivedFigures:
    """Compute derived figures from raw numbers."""

    unit_local_cost = round_half_up(cost_foreign * exchange_rate)
    total_sales = price_sold * quantity
    total_cost = unit_local_cost * quantity
    return DerivedFigures(
        unit_local_cost=unit_local_cost,
        unit_profit=price_sold - unit_local_cost,
        total_cost=total_cost,
        total_sales=total_sales,
        total_profit=total_sales - total_cost,
    )


def derive(transaction: Transaction) -> DerivedFigures:
    """Compute derived figures for a stored transaction."""

    return derive_values(
        transaction.cost_foreign,
        transaction.exchange_rate,
        transaction.price_sold,
        transaction.quantity,
    )


def profit_margin_percent(unit_profit: float, price_sold: float) -> int:
    """Return the whole-number margin, or 0 when nothing was charged."""

    if price_sold <= 0:
        return 0
    return round_half_up(unit_profit / price_sold * 100)

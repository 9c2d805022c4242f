"""Mini README: Summary statistics over the whole ledger.

``aggregate`` folds ``derive`` results into ``SummaryStats``. It is a plain
sum, so entry order does not matter, and it is cheap enough at single-user
scale to recompute on every read instead of caching.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable

from .derivation import derive
from .ledger import Transaction


@dataclass(frozen=True, slots=True)
class SummaryStats:
    """Ledger totals in local currency plus the number of items sold."""

    total_sales: float = 0.0
    total_cost: float = 0.0
    total_profit: float = 0.0
    item_count: int = 0

    def as_dict(self) -> Dict[str, float]:
        return {
            "totalSales": self.total_sales,
            "totalCost": self.total_cost,
            "totalProfit": self.total_profit,
            "itemCount": self.item_count,
        }


def aggregate(transactions: Iterable[Transaction]) -> SummaryStats:
    """Sum derived figures across ``transactions``."""

    total_sales = 0.0
    total_cost = 0.0
    total_profit = 0.0
    item_count = 0
    for transaction in transactions:
        figures = derive(transaction)
        total_sales += figures.total_sales
        total_cost += figures.total_cost
        total_profit += figures.total_profit
        item_count += transaction.quantity
    return SummaryStats(
        total_sales=total_sales,
        total_cost=total_cost,
        total_profit=total_profit,
        item_count=item_count,
    )

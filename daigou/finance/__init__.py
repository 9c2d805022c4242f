"""Mini README: Ledger computation for the resale business.

This package holds the pure parts of the ledger: the country policy table,
the transaction record, per-transaction profit derivation and ledger-wide
aggregation. None of these modules perform I/O; persistence lives in
``daigou.storage`` and rendering in ``daigou.export``.
"""

from .aggregator import SummaryStats, aggregate
from .countries import COUNTRY_CONFIG, Country, CountryConfig, country_config, resolve_country
from .derivation import DerivedFigures, derive, derive_values, profit_margin_percent, round_half_up
from .ledger import Transaction, new_transaction_id

__all__ = [
    "COUNTRY_CONFIG",
    "Country",
    "CountryConfig",
    "DerivedFigures",
    "SummaryStats",
    "Transaction",
    "aggregate",
    "country_config",
    "derive",
    "derive_values",
    "new_transaction_id",
    "profit_margin_percent",
    "resolve_country",
    "round_half_up",
]

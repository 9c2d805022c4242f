"""Mini README: Country policy table for purchase origins.

Structure:
    * Country - closed enum of supported purchase origins.
    * CountryConfig - display label, default rates and currency symbol.
    * resolve_country / country_config - lookups that fall back to Japan.

The table is static and read-only. Any missing or unrecognised country code
resolves to JP so older ledger entries without a country still render.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Country(str, Enum):
    """Supported purchase origins."""

    JP = "JP"
    KR = "KR"
    OTHER = "OTHER"


@dataclass(frozen=True, slots=True)
class CountryConfig:
    """Per-country defaults used to pre-fill entries and render amounts."""

    label: str
    default_cost_rate: float
    default_selling_rate: float
    currency_symbol: str


DEFAULT_COUNTRY = Country.JP

COUNTRY_CONFIG: Dict[Country, CountryConfig] = {
    Country.JP: CountryConfig(label="日本", default_cost_rate=0.2, default_selling_rate=0.28, currency_symbol="¥"),
    Country.KR: CountryConfig(label="韓國", default_cost_rate=0.02, default_selling_rate=0.035, currency_symbol="₩"),
    Country.OTHER: CountryConfig(label="其他", default_cost_rate=1.0, default_selling_rate=1.0, currency_symbol="$"),
}


def resolve_country(value: object) -> Country:
    """Coerce arbitrary input into a country, defaulting to JP."""

    if isinstance(value, Country):
        return value
    if value is None:
        return DEFAULT_COUNTRY
    try:
        return Country(str(value).strip().upper())
    except ValueError:
        return DEFAULT_COUNTRY


def country_config(value: object) -> CountryConfig:
    """Return the policy entry for ``value`` after resolving it."""

    return COUNTRY_CONFIG[resolve_country(value)]

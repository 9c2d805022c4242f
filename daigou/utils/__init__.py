"""Mini README: Shared utilities for the daigou ledger.

``numbers`` holds the lenient parsing used by form input, persisted records
and exports. It has no third-party imports so any layer can use it.
"""

from .numbers import (
    coerce_number,
    coerce_quantity,
    format_number,
    parse_integer,
    parse_number,
)

__all__ = [
    "coerce_number",
    "coerce_quantity",
    "format_number",
    "parse_integer",
    "parse_number",
]

"""Mini README: Lenient numeric parsing and display helpers.

Structure:
    * parse_number / parse_integer - read a leading number from user text.
    * coerce_number / coerce_quantity - parsing with a safe fallback.
    * format_number - render numbers the way the ledger displays them.

Form input and persisted records are both untrusted. Parsing takes the
leading numeric prefix of a string (``"12.5 yen"`` reads as ``12.5``) and
yields ``None`` when nothing numeric is present, so callers decide the
fallback. Nothing in this module raises for bad input.
"""

from __future__ import annotations

import math
import re
from typing import Optional

_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def parse_number(value: object) -> Optional[float]:
    """Return the leading number in ``value`` or ``None`` when there is none."""

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _FLOAT_PREFIX.match(str(value))
        if not match:
            return None
        number = float(match.group(1))
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_integer(value: object) -> Optional[int]:
    """Return the leading integer in ``value``; floats are truncated."""

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = parse_number(value)
        return None if number is None else int(number)
    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else None


def coerce_number(value: object, default: float = 0.0) -> float:
    """Parse ``value`` falling back to ``default``; zero counts as a value."""

    number = parse_number(value)
    return default if number is None else number


def coerce_quantity(value: object) -> int:
    """Parse a quantity, never returning less than one."""

    quantity = parse_integer(value)
    if not quantity or quantity < 1:
        return 1
    return quantity


def format_number(value: float) -> str:
    """Render integral values without a trailing ``.0``."""

    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)

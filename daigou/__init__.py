"""Mini README: Core package initializer for the daigou resale ledger.

The ledger records purchases made abroad and resold locally, derives cost
and profit in local currency, and exports the result for spreadsheets.
Computation lives in ``finance``, persistence in ``storage``, renderings in
``export``, form state in ``entry``, the optional AI report in ``analysis``
and the web surface in ``interface``.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]

"""Mini README: Interactive interfaces for the daigou ledger.

Exports the FastAPI application factory behind the browser sales desk. The
command-line launcher lives in ``main_sales_desk.py`` at the project root.
"""

from .web_app import create_application

__all__ = ["create_application"]

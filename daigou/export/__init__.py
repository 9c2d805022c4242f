"""Mini README: Ledger export helpers.

Exposes the clipboard (tab-separated) and file (CSV) renderings. Writing to
the system clipboard or serving the download is left to the interface layer.
"""

from .formatter import (
    CLIPBOARD_HEADERS,
    CSV_HEADERS,
    CsvExporter,
    export_filename,
    render_clipboard,
    render_csv,
)

__all__ = [
    "CLIPBOARD_HEADERS",
    "CSV_HEADERS",
    "CsvExporter",
    "export_filename",
    "render_clipboard",
    "render_csv",
]

"""Mini README: Clipboard and CSV renderings of the ledger.

Structure:
    * render_clipboard - tab-separated text, newest entry first.
    * render_csv - BOM-prefixed comma-separated text, oldest entry first.
    * export_filename - ``<prefix>_<ISO-date>.csv``.
    * CsvExporter - writes ``render_csv`` output into a directory.

Both renderings take their figures from ``derive`` so the pasted sheet, the
downloaded file and the dashboard never disagree. Clipboard text is meant
for pasting into a spreadsheet and is not quoted. In the CSV, free-text and
currency columns are always wrapped in double quotes; the remaining cells
are quoted only when they contain a comma, quote or line break.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..finance.countries import country_config
from ..finance.derivation import derive
from ..finance.ledger import Transaction
from ..logging_utils import get_logger
from ..utils.numbers import format_number

LOGGER = get_logger(__name__)

DEFAULT_EXPORT_PREFIX = "代購銷售紀錄"
BYTE_ORDER_MARK = "\ufeff"
_CSV_SPECIALS = (",", '"', "\n", "\r")

CLIPBOARD_HEADERS: Sequence[str] = (
    "日期",
    "國家",
    "客人名字",
    "商品名稱",
    "數量",
    "外幣成本(單件)",
    "當日匯率",
    "賣出匯率",
    "台幣成本(單件)",
    "售價(單件)",
    "總利潤",
)

CSV_HEADERS: Sequence[str] = (
    "日期",
    "國家",
    "客人名字",
    "商品名稱",
    "數量",
    "外幣成本(單件)",
    "當日匯率",
    "賣出匯率",
    "台幣成本(單件)",
    "售價",
    "單件利潤",
    "總利潤",
)


def format_display_date(value: str) -> str:
    """Render an ISO date as ``YYYY/M/D``; other text passes through."""

    try:
        parsed = date.fromisoformat(value.strip()[:10])
    except ValueError:
        return value
    return f"{parsed.year}/{parsed.month}/{parsed.day}"


def _money(value: float) -> str:
    return f"${format_number(value)}"


def _selling_rate(transaction: Transaction, missing: str) -> str:
    if not transaction.selling_exchange_rate:
        return missing
    return format_number(transaction.selling_exchange_rate)


def _quote(text: str) -> str:
    escaped = text.replace('"', '""')
    return f'"{escaped}"'


def _quote_if_needed(text: str) -> str:
    if any(marker in text for marker in _CSV_SPECIALS):
        return _quote(text)
    return text


def clipboard_row(transaction: Transaction) -> List[str]:
    """Return the clipboard cells for one transaction."""

    figures = derive(transaction)
    config = country_config(transaction.country)
    return [
        format_display_date(transaction.date),
        config.label,
        transaction.customer_name,
        transaction.item_name,
        str(transaction.quantity),
        f"{config.currency_symbol}{format_number(transaction.cost_foreign)}",
        format_number(transaction.exchange_rate),
        _selling_rate(transaction, "-"),
        _money(figures.unit_local_cost),
        _money(transaction.price_sold),
        _money(figures.total_profit),
    ]


def csv_row(transaction: Transaction) -> List[str]:
    """Return the CSV cells for one transaction, already quoted."""

    figures = derive(transaction)
    config = country_config(transaction.country)
    return [
        _quote_if_needed(format_display_date(transaction.date)),
        _quote_if_needed(config.label),
        _quote(transaction.customer_name),
        _quote(transaction.item_name),
        str(transaction.quantity),
        _quote(f"{config.currency_symbol}{format_number(transaction.cost_foreign)}"),
        format_number(transaction.exchange_rate),
        _selling_rate(transaction, ""),
        _quote(_money(figures.unit_local_cost)),
        _quote(_money(transaction.price_sold)),
        _quote(_money(figures.unit_profit)),
        _quote(_money(figures.total_profit)),
    ]


def render_clipboard(transactions: Iterable[Transaction]) -> str:
    """Render the ledger as tab-separated text, newest first."""

    ordered = list(transactions)
    ordered.reverse()
    lines = ["\t".join(CLIPBOARD_HEADERS)]
    lines.extend("\t".join(clipboard_row(transaction)) for transaction in ordered)
    return "\n".join(lines)


def render_csv(transactions: Iterable[Transaction]) -> str:
    """Render the ledger as CSV in entry order with a leading BOM."""

    lines = [",".join(CSV_HEADERS)]
    lines.extend(",".join(csv_row(transaction)) for transaction in transactions)
    return BYTE_ORDER_MARK + "\n".join(lines)


def export_filename(today: Optional[date] = None, prefix: str = DEFAULT_EXPORT_PREFIX) -> str:
    """Return the download filename for an export made on ``today``."""

    today = today or date.today()
    return f"{prefix}_{today.isoformat()}.csv"


class CsvExporter:
    """Persist CSV exports of the ledger to disk."""

    def __init__(self, prefix: str = DEFAULT_EXPORT_PREFIX) -> None:
        self.prefix = prefix

    def export(
        self,
        transactions: Iterable[Transaction],
        output_directory: Path,
        *,
        today: Optional[date] = None,
    ) -> Path:
        """Write the CSV rendering into ``output_directory`` and return its path."""

        rows = list(transactions)
        output_directory.mkdir(parents=True, exist_ok=True)
        destination = output_directory / export_filename(today, self.prefix)
        # newline="" keeps the "\n" row separator on every platform
        with destination.open("w", encoding="utf-8", newline="") as csv_file:
            csv_file.write(render_csv(rows))
        LOGGER.info("Exported %s transactions to %s", len(rows), destination)
        return destination

"""Mini README: Entry point CLI for the daigou sales desk.

This script exposes a Typer CLI that starts the FastAPI sales desk and
offers quick ledger commands (totals, clipboard text, CSV export) that read
the same persisted ledger the web interface writes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import uvicorn

from daigou.configuration import get_settings
from daigou.export import CsvExporter, render_clipboard
from daigou.logging_utils import configure_root_logger
from daigou.storage import open_ledger_store
from daigou.utils import format_number

cli = typer.Typer(help="Launch and manage the daigou sales desk.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the wildcard bind address directly.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting the sales desk on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "daigou.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def summary() -> None:
    """Print ledger totals."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    stats = open_ledger_store(settings).summary()
    typer.echo(f"總銷售額: ${format_number(stats.total_sales)}")
    typer.echo(f"總成本: ${format_number(stats.total_cost)}")
    typer.echo(f"淨利潤: ${format_number(stats.total_profit)}")
    typer.echo(f"總售出商品數: {stats.item_count} 件")


@cli.command()
def clipboard() -> None:
    """Print the ledger as tab-separated text for pasting into a spreadsheet."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    typer.echo(render_clipboard(open_ledger_store(settings).transactions))


@cli.command("export-csv")
def export_csv(
    directory: Optional[Path] = typer.Option(None, help="Directory receiving the CSV file."),
) -> None:
    """Write the ledger to a dated CSV file."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    store = open_ledger_store(settings)
    destination = CsvExporter(settings.export_prefix).export(
        store.transactions, directory or Path(settings.data_directory)
    )
    typer.echo(str(destination))


if __name__ == "__main__":
    cli()

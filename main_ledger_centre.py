"""Mini README: Entry point CLI for the Vault Ledger service.

Commands:
    * serve - start the FastAPI bookkeeping viewer under uvicorn.
    * process - rebuild the markdown ledger snapshot from the vault.
    * summary - print summary statistics for the vault.

Directories default to the values resolved by ``get_settings`` and can be
overridden per invocation.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from vaultledger.configuration import get_settings
from vaultledger.finance import LedgerError, TransactionProcessor, calculate_summary, run
from vaultledger.logging_utils import configure_root_logger

cli = typer.Typer(help="Process vault CSV exports and serve the bookkeeping viewer.")


@cli.command()
def serve(
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

    # Browsers cannot open the 0.0.0.0 / :: bind-all addresses directly.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Serving vault {settings.vault_directory} on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}/bookkeeping"
    )
    uvicorn.run(
        "vaultledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def process(
    vault: Optional[Path] = typer.Option(None, help="Vault directory holding CSV exports."),
    ledger: Optional[Path] = typer.Option(None, help="Directory receiving the snapshot."),
) -> None:
    """Rebuild the ledger snapshot and print its location."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    try:
        ledger_path = run(
            vault or settings.vault_directory,
            ledger or settings.ledger_directory,
            filename=settings.ledger_filename,
        )
    except LedgerError as error:
        typer.echo(f"Failed to process transactions: {error}", err=True)
        raise typer.Exit(code=1) from error
    typer.echo(f"Ledger snapshot written to {ledger_path}")


@cli.command()
def summary(
    vault: Optional[Path] = typer.Option(None, help="Vault directory holding CSV exports."),
    as_json: bool = typer.Option(False, "--json", help="Emit the statistics as JSON."),
) -> None:
    """Print summary statistics for the vault."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    try:
        vault_directory = vault or settings.vault_directory
        # Nothing is written, so the ledger path is not consulted.
        processor = TransactionProcessor(vault_directory, vault_directory)
        stats = calculate_summary(processor.read_csv_files())
    except LedgerError as error:
        typer.echo(f"Failed to read transaction files: {error}", err=True)
        raise typer.Exit(code=1) from error

    if as_json:
        typer.echo(json.dumps(stats.as_dict(), indent=2))
        return
    typer.echo(f"Transactions: {stats.total_transactions}")
    typer.echo(f"Payments:     {stats.total_payments} ({stats.payments_sum:.2f})")
    typer.echo(f"Transfers:    {stats.total_transfers} ({stats.transfers_sum:.2f})")
    typer.echo(f"Fees:         {stats.total_fees} ({stats.fees_sum:.2f})")
    typer.echo(f"Net liquidity: {stats.net_liquidity:.2f}")


if __name__ == "__main__":
    cli()

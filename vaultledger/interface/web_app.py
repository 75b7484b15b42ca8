"""Mini README: FastAPI-powered bookkeeping viewer for Vault Ledger.

Structure:
    * create_application - application factory wiring routes and templates.
    * _collect_report - per-request ingestion, grouping and aggregation.

Every request rescans the vault, so the pages always reflect the files on
disk. Pipeline failures become explicit error responses (an error page or a
JSON error envelope with status 500), never an empty report. The ledger page
distinguishes a missing snapshot, shown as a placeholder, from one that
cannot be read.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from ..configuration import VaultLedgerSettings, get_settings
from ..finance import (
    PLACEHOLDER_LEDGER,
    LedgerError,
    SummaryStats,
    Transaction,
    TransactionProcessor,
    calculate_summary,
    group_for_display,
    read_snapshot,
    run,
)
from ..logging_utils import configure_root_logger, get_logger

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class _Report:
    transactions: List[Transaction]
    grouped: Dict[str, List[Transaction]]
    summary: SummaryStats


class _ReportFailure(Exception):
    def __init__(self, message: str, detail: str) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


def _collect_report(settings: VaultLedgerSettings) -> _Report:
    """Read, group and summarise the vault, raising ``_ReportFailure`` on errors."""

    try:
        processor = TransactionProcessor(settings.vault_directory, settings.ledger_directory)
    except LedgerError as error:
        LOGGER.error("Error initializing processor: %s", error)
        raise _ReportFailure("Failed to initialize transaction processor", str(error)) from error
    try:
        transactions = processor.read_csv_files()
    except LedgerError as error:
        LOGGER.error("Error reading CSV files: %s", error)
        raise _ReportFailure("Failed to read transaction files", str(error)) from error
    grouped = group_for_display(processor.categorize_transactions(transactions))
    return _Report(transactions, grouped, calculate_summary(transactions))


def create_application(settings: Optional[VaultLedgerSettings] = None) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    configure_root_logger(settings.log_level)

    app = FastAPI(title="Vault Ledger", version="0.1.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")
    LOGGER.debug(
        "Application configured with vault=%s ledger=%s",
        settings.vault_directory,
        settings.ledger_directory,
    )
    # Error details name absolute paths; only development builds expose them.
    show_detail = settings.environment == "development"

    def with_detail(payload: Dict[str, str], detail: str) -> Dict[str, str]:
        if show_detail:
            payload["detail"] = detail
        return payload

    def error_page(request: Request, failure: _ReportFailure) -> HTMLResponse:
        return templates.TemplateResponse(
            request,
            "error.html",
            {
                "message": failure.message,
                "detail": failure.detail if show_detail else "",
                "year": str(date.today().year),
            },
            status_code=500,
        )

    @app.get("/", include_in_schema=False)
    async def index() -> RedirectResponse:
        """Send visitors to the bookkeeping report."""

        return RedirectResponse(url="/bookkeeping")

    @app.get("/bookkeeping", response_class=HTMLResponse)
    async def bookkeeping(request: Request) -> HTMLResponse:
        """Render transactions grouped by type alongside summary statistics."""

        try:
            report = _collect_report(settings)
        except _ReportFailure as failure:
            return error_page(request, failure)
        LOGGER.debug("Rendering bookkeeping report with %s transactions", len(report.transactions))
        return templates.TemplateResponse(
            request,
            "bookkeeping.html",
            {
                "transactions": report.grouped,
                "summary": report.summary,
                "year": str(date.today().year),
            },
        )

    @app.get("/api/bookkeeping")
    async def bookkeeping_api() -> JSONResponse:
        """Return grouped transactions, summary statistics and the record count."""

        try:
            report = _collect_report(settings)
        except _ReportFailure as failure:
            return JSONResponse(
                with_detail({"error": failure.message}, failure.detail), status_code=500
            )
        return JSONResponse(
            {
                "transactions": {
                    label: [transaction.as_dict() for transaction in entries]
                    for label, entries in report.grouped.items()
                },
                "summary": report.summary.as_dict(),
                "count": len(report.transactions),
            }
        )

    @app.post("/api/process")
    async def process_transactions() -> JSONResponse:
        """Rebuild the persisted ledger snapshot from the vault."""

        try:
            ledger_path = run(
                settings.vault_directory,
                settings.ledger_directory,
                filename=settings.ledger_filename,
            )
        except LedgerError as error:
            LOGGER.error("Error processing transactions: %s", error)
            return JSONResponse(
                with_detail(
                    {"status": "error", "message": "Failed to process transactions"},
                    str(error),
                ),
                status_code=500,
            )
        LOGGER.info("Ledger snapshot refreshed at %s", ledger_path)
        return JSONResponse(
            {"status": "success", "message": "Transactions processed successfully"}
        )

    @app.post("/bookkeeping/refresh", response_class=HTMLResponse)
    async def refresh_from_report(request: Request) -> Response:
        """Rebuild the snapshot from the report form and return to the report."""

        try:
            run(
                settings.vault_directory,
                settings.ledger_directory,
                filename=settings.ledger_filename,
            )
        except LedgerError as error:
            LOGGER.error("Error processing transactions: %s", error)
            return error_page(request, _ReportFailure("Failed to process transactions", str(error)))
        return RedirectResponse(url="/bookkeeping", status_code=303)

    @app.get("/ledger", response_class=HTMLResponse)
    async def ledger(request: Request) -> HTMLResponse:
        """Show the persisted snapshot, or a placeholder when none exists yet."""

        try:
            content = read_snapshot(settings.ledger_directory, filename=settings.ledger_filename)
        except LedgerError as error:
            LOGGER.error("Could not read ledger file: %s", error)
            return error_page(request, _ReportFailure("Failed to read ledger snapshot", str(error)))
        return templates.TemplateResponse(
            request,
            "ledger.html",
            {
                "ledger_content": PLACEHOLDER_LEDGER if content is None else content,
                "has_snapshot": content is not None,
                "year": str(date.today().year),
            },
        )

    return app

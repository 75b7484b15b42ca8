"""Mini README: Interactive interfaces for Vault Ledger.

Exports the FastAPI application factory behind the bookkeeping report, the
JSON API and the ledger viewer. The command line entry point lives in the
repository root (``main_ledger_centre.py``).
"""

from .web_app import create_application

__all__ = ["create_application"]

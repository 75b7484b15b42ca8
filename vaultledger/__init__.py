"""Mini README: Core package initializer for the Vault Ledger service.

The package turns a directory of CSV transaction exports into grouped
reports, summary statistics, and a persisted markdown ledger. Only the
logging helper is re-exported here so importing the package stays cheap;
the pipeline lives in :mod:`vaultledger.finance`.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]

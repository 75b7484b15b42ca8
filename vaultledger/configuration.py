"""Mini README: Centralised configuration models and helpers for Vault Ledger.

Structure:
    * VaultLedgerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Entry points call ``get_settings`` once and hand the resolved directories
    to the pipeline explicitly; the finance modules never read the
    environment. Values come from ``VAULTLEDGER_*`` environment variables or
    a local ``.env`` file, e.g. ``VAULTLEDGER_VAULT_DIRECTORY=/srv/vault``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LEDGER_FILENAME = "FK_MASTER_LEDGER.md"


class VaultLedgerSettings(BaseSettings):
    """Runtime configuration for the Vault Ledger service."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    vault_directory: Path = Field(
        Path("vault"),
        validate_default=True,
        description="Directory scanned for raw CSV transaction exports.",
    )
    ledger_directory: Path = Field(
        Path("ledger"),
        validate_default=True,
        description="Directory receiving the persisted markdown ledger snapshot.",
    )
    ledger_filename: str = Field(
        DEFAULT_LEDGER_FILENAME,
        description="File name of the snapshot written inside the ledger directory.",
        min_length=1,
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the web service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web service exposes.",
        ge=1,
        le=65535,
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level name, e.g. DEBUG or WARNING.",
    )

    model_config = SettingsConfigDict(
        env_prefix="VAULTLEDGER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("vault_directory", "ledger_directory", mode="before")
    @classmethod
    def _normalise_path(cls, value: Optional[str | Path]) -> Path:
        """Expand user directories and produce an absolute, cleaned path.

        Directories are not created here; a missing vault is reported when
        it is read.
        """

        return Path(value).expanduser().resolve()

    @field_validator("ledger_filename")
    @classmethod
    def _plain_filename(cls, value: str) -> str:
        """Reject names that would escape the ledger directory."""

        if Path(value).name != value or value in {".", ".."}:
            raise ValueError("ledger_filename must be a bare file name")
        return value


@lru_cache()
def get_settings() -> VaultLedgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return VaultLedgerSettings()

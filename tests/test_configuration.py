"""Mini README: Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from vaultledger.configuration import VaultLedgerSettings


def test_defaults_resolve_to_absolute_paths(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)

    settings = VaultLedgerSettings()

    assert settings.vault_directory == tmp_path.resolve() / "vault"
    assert settings.ledger_directory == tmp_path.resolve() / "ledger"
    assert settings.ledger_filename == "FK_MASTER_LEDGER.md"
    assert not settings.vault_directory.exists()


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("VAULTLEDGER_VAULT_DIRECTORY", str(tmp_path / "in" / ".." / "raw"))
    monkeypatch.setenv("VAULTLEDGER_INTERFACE_PORT", "9100")

    settings = VaultLedgerSettings()

    assert settings.vault_directory == (tmp_path / "raw").resolve()
    assert settings.interface_port == 9100


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ValidationError):
        VaultLedgerSettings(interface_port=70000)
    with pytest.raises(ValidationError):
        VaultLedgerSettings(ledger_filename="../escape.md")

"""Mini README: Shared fixtures for the Vault Ledger test-suite.

Structure:
    * vault - empty vault directory inside ``tmp_path``.
    * ledger_dir - ledger output directory path (not created up front).
    * write_csv - helper writing CSV text into the vault.
    * scenario_csv - three-row export with one malformed amount.
    * settings - ``VaultLedgerSettings`` bound to the temporary directories.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from vaultledger import logging_utils
from vaultledger.configuration import VaultLedgerSettings

SCENARIO_CSV = (
    "transaction_id,type,amount,date,description\n"
    "T1,Payment,100.50,2024-05-01,Invoice 42\n"
    "T2,Fee,2.00,2024-05-02,Monthly account fee\n"
    "T3,Transfer,oops,2024-05-03,Treasury sweep\n"
)


@pytest.fixture(autouse=True)
def _no_stream_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    """Stop entry points binding a stream handler to pytest's captured streams."""

    monkeypatch.setattr(logging_utils, "_LOGGER_INITIALISED", True)


@pytest.fixture()
def vault(tmp_path: Path) -> Path:
    directory = tmp_path / "vault"
    directory.mkdir()
    return directory


@pytest.fixture()
def ledger_dir(tmp_path: Path) -> Path:
    return tmp_path / "ledger"


@pytest.fixture()
def write_csv(vault: Path) -> Callable[[str, str], Path]:
    def _write(name: str, content: str) -> Path:
        path = vault / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def scenario_csv() -> str:
    return SCENARIO_CSV


@pytest.fixture()
def settings(vault: Path, ledger_dir: Path) -> VaultLedgerSettings:
    return VaultLedgerSettings(vault_directory=vault, ledger_directory=ledger_dir)

"""Tests for environment settings and logging setup."""

import logging

import pytest

from lotledger.config import (
    DEFAULT_CASH_EQUIVALENT_SYMBOLS,
    DEFAULT_MAX_IMPORT_BYTES,
    default_database_path,
    get_settings,
)
from lotledger.utils import logging as log_utils


def test_default_settings(monkeypatch):
    for name in (
        "LOTLEDGER_CASH_SYMBOLS",
        "LOTLEDGER_DEFAULT_RISK_GROUP",
        "LOTLEDGER_MAX_IMPORT_BYTES",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.cash_equivalent_symbols == DEFAULT_CASH_EQUIVALENT_SYMBOLS
    assert settings.default_risk_group == "Equities"
    assert settings.max_import_bytes == DEFAULT_MAX_IMPORT_BYTES == 15 * 1024 * 1024


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("LOTLEDGER_CASH_SYMBOLS", " vmfxx ,SPAXX,, ")
    monkeypatch.setenv("LOTLEDGER_DEFAULT_RISK_GROUP", "Income")
    monkeypatch.setenv("LOTLEDGER_MAX_IMPORT_BYTES", "2048")

    settings = get_settings()

    assert settings.cash_equivalent_symbols == frozenset({"VMFXX", "SPAXX"})
    assert settings.default_risk_group == "Income"
    assert settings.max_import_bytes == 2048


def test_invalid_max_import_bytes(monkeypatch):
    monkeypatch.setenv("LOTLEDGER_MAX_IMPORT_BYTES", "lots")
    with pytest.raises(ValueError) as excinfo:
        get_settings()
    assert "LOTLEDGER_MAX_IMPORT_BYTES" in str(excinfo.value)


def test_database_path_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("LOTLEDGER_DB_PATH", str(tmp_path / "ledger.db"))
    assert default_database_path() == str(tmp_path / "ledger.db")


def test_configure_logging_runs_once(monkeypatch):
    calls = []
    monkeypatch.setattr(log_utils, "_configured", False)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    log_utils.configure_logging("debug")
    log_utils.configure_logging("error")

    assert len(calls) == 1
    assert calls[0]["level"] == logging.DEBUG


def test_configure_logging_reads_env(monkeypatch):
    calls = []
    monkeypatch.setattr(log_utils, "_configured", False)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    monkeypatch.setenv("LOG_LEVEL", "info")

    log_utils.configure_logging()

    assert calls[0]["level"] == logging.INFO


def test_resolve_level():
    assert log_utils.resolve_level("warning") == logging.WARNING
    assert log_utils.resolve_level(logging.ERROR) == logging.ERROR
    with pytest.raises(ValueError):
        log_utils.resolve_level("LOUD")

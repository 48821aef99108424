"""Environment-driven settings for lotledger."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_CASH_EQUIVALENT_SYMBOLS = frozenset(
    {"SPAXX", "FDRXX", "FZFXX", "SPRXX", "FCASH", "CORE**"}
)
DEFAULT_RISK_GROUP = "Equities"
DEFAULT_MAX_IMPORT_BYTES = 15 * 1024 * 1024


def _env_symbols(name: str, default: frozenset[str]) -> frozenset[str]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return frozenset(s.strip().upper() for s in raw.split(",") if s.strip())


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'")


def default_database_path() -> str:
    """Return LOTLEDGER_DB_PATH, or ~/.lotledger/lotledger.db."""
    database_path = os.environ.get("LOTLEDGER_DB_PATH")
    if database_path is None:
        db_dir = Path.home() / ".lotledger"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "lotledger.db")
    return database_path


@dataclass(frozen=True)
class Settings:
    cash_equivalent_symbols: frozenset[str]
    default_risk_group: str
    max_import_bytes: int


def get_settings() -> Settings:
    return Settings(
        cash_equivalent_symbols=_env_symbols(
            "LOTLEDGER_CASH_SYMBOLS", DEFAULT_CASH_EQUIVALENT_SYMBOLS
        ),
        default_risk_group=os.getenv("LOTLEDGER_DEFAULT_RISK_GROUP", DEFAULT_RISK_GROUP),
        max_import_bytes=_env_int("LOTLEDGER_MAX_IMPORT_BYTES", DEFAULT_MAX_IMPORT_BYTES),
    )

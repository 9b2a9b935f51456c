"""Process-wide configuration loaded once at startup."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from pocketledger.domain.errors import ValidationError
from pocketledger.domain.policies import BalanceCutover

DEFAULT_INCOME_BALANCE_FROM_YEAR = 2026
DEFAULT_INCOME_BALANCE_FROM_MONTH = 2
DEFAULT_OWNER = "local"


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    database_path: Optional[str] = None
    owner_id: str = DEFAULT_OWNER
    income_balance_from_year: int = DEFAULT_INCOME_BALANCE_FROM_YEAR
    income_balance_from_month: int = DEFAULT_INCOME_BALANCE_FROM_MONTH
    log_level: int = logging.WARNING

    @property
    def cutover(self) -> BalanceCutover:
        return BalanceCutover(
            year=self.income_balance_from_year, month=self.income_balance_from_month
        )


def _read(environ: Mapping[str, str], name: str) -> Optional[str]:
    # Empty strings count as unset
    value = environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _read_int(environ: Mapping[str, str], name: str, default: int) -> int:
    value = _read(environ, name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer, got '{value}'")


def default_database_path() -> str:
    """Return ~/.pocketledger/pocketledger.db, creating the directory."""
    db_dir = Path.home() / ".pocketledger"
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / "pocketledger.db")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Validated Settings

    Raises:
        ValidationError: If a variable holds an invalid value
    """
    if environ is None:
        environ = os.environ

    year = _read_int(environ, "INCOME_BALANCE_FROM_YEAR", DEFAULT_INCOME_BALANCE_FROM_YEAR)
    month = _read_int(environ, "INCOME_BALANCE_FROM_MONTH", DEFAULT_INCOME_BALANCE_FROM_MONTH)
    if year < 1:
        raise ValidationError(f"INCOME_BALANCE_FROM_YEAR must be positive, got {year}")
    if not 1 <= month <= 12:
        raise ValidationError(f"INCOME_BALANCE_FROM_MONTH must be between 1 and 12, got {month}")

    level_name = (_read(environ, "POCKETLEDGER_LOG_LEVEL") or "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValidationError(f"POCKETLEDGER_LOG_LEVEL '{level_name}' is not a logging level")

    return Settings(
        database_path=_read(environ, "POCKETLEDGER_DB_PATH"),
        owner_id=_read(environ, "POCKETLEDGER_OWNER") or DEFAULT_OWNER,
        income_balance_from_year=year,
        income_balance_from_month=month,
        log_level=level,
    )

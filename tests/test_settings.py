"""Tests for owner settings."""

import pytest

from pocketledger.cli.main import cli
from pocketledger.domain.errors import ValidationError


def test_currency_defaults_to_brl(settings_service, owner):
    assert settings_service.get_currency(owner) == "BRL"


def test_set_currency(settings_service, owner, other_owner):
    assert settings_service.set_currency(owner, "usd") == "USD"
    assert settings_service.get_currency(owner) == "USD"
    assert settings_service.get_currency(other_owner) == "BRL"

    assert settings_service.set_currency(owner, "BRL") == "BRL"
    assert settings_service.get_currency(owner) == "BRL"


def test_unsupported_currency(settings_service, owner):
    with pytest.raises(ValidationError):
        settings_service.set_currency(owner, "EUR")
    assert settings_service.get_currency(owner) == "BRL"


def test_cli_currency(cli_runner, temp_db, checking, owner, reopen):
    base = ["--db-path", temp_db.database_path, "--owner", owner]

    result = cli_runner.invoke(cli, base + ["settings", "currency"])
    assert result.exit_code == 0, result.output
    assert "Currency: BRL" in result.output

    result = cli_runner.invoke(cli, base + ["settings", "currency", "usd"])
    assert result.exit_code == 0, result.output
    assert "Currency set to USD" in result.output
    assert reopen().get_currency(owner) == "USD"

    result = cli_runner.invoke(cli, base + ["account", "list"])
    assert "Accounts (USD):" in result.output
    assert "Net worth: 1000" in result.output


def test_cli_rejects_unknown_currency(cli_runner, temp_db, owner):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--owner", owner, "settings", "currency", "EUR"]
    )
    assert result.exit_code != 0

"""Shared pytest fixtures for pocketledger tests."""

import tempfile
import threading
import os
from datetime import datetime
from decimal import Decimal
import pytest

from pocketledger.database.factories import create_sqlite_database
from pocketledger.domain.account import AccountService
from pocketledger.domain.category import CategoryService
from pocketledger.domain.debt import DebtService
from pocketledger.domain.goal import GoalService
from pocketledger.domain.income import IncomeService
from pocketledger.domain.investment import InvestmentService
from pocketledger.domain.policies import BalanceCutover
from pocketledger.domain.settings import SettingsService
from pocketledger.domain.transaction import TransactionService
from pocketledger.logging_config import reset_logging

OWNER = "alice"
OTHER_OWNER = "bob"

# Fixed clock for services that depend on "now": mid-June 2024
NOW = datetime(2024, 6, 15, 10, 30)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def reopen(temp_db):
    """Return a factory for fresh connections to the temporary database.

    Used to check what another process (e.g. the CLI) committed, without the
    identity map of temp_db's session.
    """
    opened = []

    def _reopen():
        db = create_sqlite_database(database_path=temp_db.database_path)
        opened.append(db)
        return db

    yield _reopen

    for db in opened:
        db.disconnect()


class SecondWriter:
    """Runs work(db) in a thread, on its own connection to the same file."""

    # Long enough for an unblocked writer to finish, short enough for the suite
    BLOCK_WAIT = 0.3

    def __init__(self, database_path, work):
        self.database_path = database_path
        self.work = work
        self.result = None
        self.error = None
        self.blocked = None
        self._thread = threading.Thread(target=self._run, daemon=True)

    def _run(self):
        db = create_sqlite_database(database_path=self.database_path)
        try:
            self.result = self.work(db)
        except Exception as exc:
            self.error = exc
        finally:
            db.disconnect()

    def start(self):
        self._thread.start()
        self._thread.join(timeout=self.BLOCK_WAIT)
        self.blocked = self._thread.is_alive()

    def finish(self):
        self._thread.join(timeout=10)
        assert not self._thread.is_alive(), "second writer never finished"
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def second_writer(temp_db, monkeypatch):
    """Start a competing writer while temp_db is in the middle of a write.

    second_writer("adjust_account_balance", work) returns a SecondWriter
    whose thread starts right after temp_db's first adjust_account_balance
    call returns, i.e. while temp_db's transaction is still open.
    """

    def _during(method_name, work):
        writer = SecondWriter(temp_db.database_path, work)
        original = getattr(temp_db, method_name)

        def _then_start_writer(*args, **kwargs):
            result = original(*args, **kwargs)
            if writer.blocked is None:
                writer.start()
            return result

        monkeypatch.setattr(temp_db, method_name, _then_start_writer)
        return writer

    return _during


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's environment out of the tests."""
    for name in (
        "POCKETLEDGER_DB_PATH",
        "POCKETLEDGER_OWNER",
        "POCKETLEDGER_LOG_LEVEL",
        "INCOME_BALANCE_FROM_YEAR",
        "INCOME_BALANCE_FROM_MONTH",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    reset_logging()


@pytest.fixture
def owner():
    return OWNER


@pytest.fixture
def other_owner():
    return OTHER_OWNER


@pytest.fixture
def cutover():
    """Balances are tracked from February 2024 in the service tests."""
    return BalanceCutover(year=2024, month=2)


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def debt_service(temp_db, cutover):
    """Create a DebtService with a temporary database."""
    return DebtService(temp_db, cutover)


@pytest.fixture
def income_service(temp_db, cutover, clock):
    """Create an IncomeService with a temporary database and a fixed clock."""
    return IncomeService(temp_db, cutover, now=clock)


@pytest.fixture
def investment_service(temp_db, clock):
    """Create an InvestmentService with a temporary database and a fixed clock."""
    return InvestmentService(temp_db, now=clock)


@pytest.fixture
def goal_service(temp_db):
    return GoalService(temp_db)


@pytest.fixture
def settings_service(temp_db):
    return SettingsService(temp_db)


@pytest.fixture
def checking(account_service, owner):
    """Checking account opened with 1000."""
    return account_service.create_account(
        owner_id=owner, name="Checking", type="checking", balance=Decimal("1000")
    )


@pytest.fixture
def savings(account_service, owner):
    """Savings account opened with 300."""
    return account_service.create_account(
        owner_id=owner, name="Savings", type="savings", balance=Decimal("300")
    )


@pytest.fixture
def salary_category(category_service, owner):
    return category_service.create_category(owner_id=owner, name="Salary", type="income")


@pytest.fixture
def groceries_category(category_service, owner):
    return category_service.create_category(
        owner_id=owner, name="Groceries", type="expense", budget=Decimal("600")
    )


@pytest.fixture
def balance_of(account_service, owner):
    """Return a helper that reads an account's current balance."""

    def _balance_of(account_id, owner_id=None):
        return account_service.get_account(account_id, owner_id or owner).balance

    return _balance_of


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

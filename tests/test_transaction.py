"""Tests for transactions and their balance effects."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from pocketledger.cli.main import cli
from pocketledger.domain.errors import ConsistencyError, NotFoundError, ValidationError
from pocketledger.domain.transaction import TransactionService


class TestCreateTransaction:
    def test_income_credits_account(self, transaction_service, checking, owner, balance_of):
        txn = transaction_service.create_transaction(
            owner_id=owner, account_id=checking.id, amount="250.10", date=date(2024, 3, 1), type="income"
        )

        assert txn.amount == Decimal("250.10")
        assert balance_of(checking.id) == Decimal("1250.10")

    def test_expense_debits_account(self, transaction_service, checking, owner, balance_of):
        transaction_service.create_transaction(
            owner_id=owner, account_id=checking.id, amount=Decimal("75"), date=date(2024, 3, 1), type="expense"
        )
        assert balance_of(checking.id) == Decimal("925")

    def test_transfer_leaves_balance(self, transaction_service, checking, owner, balance_of):
        transaction_service.create_transaction(
            owner_id=owner, account_id=checking.id, amount=Decimal("75"), date=date(2024, 3, 1), type="transfer"
        )
        assert balance_of(checking.id) == Decimal("1000")

    def test_float_amount_is_exact(self, transaction_service, checking, owner, balance_of):
        for _ in range(3):
            transaction_service.create_transaction(
                owner_id=owner, account_id=checking.id, amount=0.1, date=date(2024, 3, 1), type="income"
            )
        assert balance_of(checking.id) == Decimal("1000.3")

    def test_datetime_is_reduced_to_date(self, transaction_service, checking, owner):
        txn = transaction_service.create_transaction(
            owner_id=owner,
            account_id=checking.id,
            amount=Decimal("1"),
            date=datetime(2024, 3, 1, 18, 45),
            type="income",
        )
        assert txn.date == date(2024, 3, 1)

    @pytest.mark.parametrize("amount", [0, -5, "abc", None, "1.005", 0.001])
    def test_invalid_amount_rejected(self, transaction_service, checking, owner, balance_of, amount):
        with pytest.raises(ValidationError):
            transaction_service.create_transaction(
                owner_id=owner, account_id=checking.id, amount=amount, date=date(2024, 3, 1), type="income"
            )
        assert balance_of(checking.id) == Decimal("1000")

    def test_invalid_type_rejected(self, transaction_service, checking, owner):
        with pytest.raises(ValidationError):
            transaction_service.create_transaction(
                owner_id=owner, account_id=checking.id, amount=Decimal("1"), date=date(2024, 3, 1), type="refund"
            )

    def test_missing_account_rejected(self, transaction_service, owner):
        with pytest.raises(NotFoundError):
            transaction_service.create_transaction(
                owner_id=owner, account_id=999, amount=Decimal("1"), date=date(2024, 3, 1), type="income"
            )

    def test_missing_category_rejected_and_nothing_persisted(
        self, transaction_service, checking, owner, balance_of
    ):
        with pytest.raises(NotFoundError):
            transaction_service.create_transaction(
                owner_id=owner,
                account_id=checking.id,
                amount=Decimal("1"),
                date=date(2024, 3, 1),
                type="income",
                category_id=999,
            )
        assert transaction_service.list_transactions(owner) == []
        assert balance_of(checking.id) == Decimal("1000")


class TestUpdateTransaction:
    def test_cross_account_update(self, transaction_service, account_service, owner, balance_of):
        a = account_service.create_account(owner_id=owner, name="A", type="checking", balance=Decimal("600"))
        b = account_service.create_account(owner_id=owner, name="B", type="checking", balance=Decimal("300"))
        txn = transaction_service.create_transaction(
            owner_id=owner, account_id=a.id, amount=Decimal("100"), date=date(2024, 3, 1), type="expense"
        )
        assert balance_of(a.id) == Decimal("500")

        updated = transaction_service.update_transaction(txn.id, owner, account_id=b.id)

        assert updated.account_id == b.id
        assert balance_of(a.id) == Decimal("600")
        assert balance_of(b.id) == Decimal("200")

    def test_amount_change_on_same_account(self, transaction_service, checking, owner, balance_of):
        txn = transaction_service.create_transaction(
            owner_id=owner, account_id=checking.id, amount=Decimal("500"), date=date(2024, 3, 1), type="expense"
        )
        transaction_service.update_transaction(txn.id, owner, amount=Decimal("600"))
        assert balance_of(checking.id) == Decimal("400")

    def test_description_only_edit_keeps_balance(self, transaction_service, checking, owner, balance_of):
        txn = transaction_service.create_transaction(
            owner_id=owner, account_id=checking.id, amount=Decimal("80"), date=date(2024, 3, 1), type="expense"
        )
        for text in ("lunch", "team lunch", "lunch"):
            transaction_service.update_transaction(txn.id, owner, description=text)

        assert balance_of(checking.id) == Decimal("920")
        assert transaction_service.get_transaction(txn.id, owner).description == "lunch"

    def test_type_change_to_transfer_reverts(self, transaction_service, checking, owner, balance_of):
        txn = transaction_service.create_transaction(
            owner_id=owner, account_id=checking.id, amount=Decimal("80"), date=date(2024, 3, 1), type="expense"
        )
        transaction_service.update_transaction(txn.id, owner, type="transfer")
        assert balance_of(checking.id) == Decimal("1000")

        transaction_service.update_transaction(txn.id, owner, type="income")
        assert balance_of(checking.id) == Decimal("1080")

    def test_clear_category(self, transaction_service, checking, groceries_category, owner):
        txn = transaction_service.create_transaction(
            owner_id=owner,
            account_id=checking.id,
            amount=Decimal("10"),
            date=date(2024, 3, 1),
            type="expense",
            category_id=groceries_category.id,
        )
        updated = transaction_service.update_transaction(txn.id, owner, clear_category=True)
        assert updated.category_id is None

    def test_clear_category_conflict(self, transaction_service, checking, groceries_category, owner):
        txn = transaction_service.create_transaction(
            owner_id=owner, account_id=checking.id, amount=Decimal("10"), date=date(2024, 3, 1), type="expense"
        )
        with pytest.raises(ValidationError):
            transaction_service.update_transaction(
                txn.id, owner, category_id=groceries_category.id, clear_category=True
            )

    def test_missing_transaction(self, transaction_service, owner):
        with pytest.raises(NotFoundError):
            transaction_service.update_transaction(999, owner, amount=Decimal("1"))

    def test_move_to_missing_account_rolls_back(self, transaction_service, checking, owner, balance_of):
        txn = transaction_service.create_transaction(
            owner_id=owner, account_id=checking.id, amount=Decimal("80"), date=date(2024, 3, 1), type="expense"
        )
        with pytest.raises(NotFoundError):
            transaction_service.update_transaction(txn.id, owner, account_id=999, amount=Decimal("5"))

        assert balance_of(checking.id) == Decimal("920")
        assert transaction_service.get_transaction(txn.id, owner).amount == Decimal("80")


class TestDeleteTransaction:
    def test_delete_reverts(self, transaction_service, checking, owner, balance_of):
        txn = transaction_service.create_transaction(
            owner_id=owner, account_id=checking.id, amount=Decimal("300"), date=date(2024, 3, 1), type="income"
        )
        assert balance_of(checking.id) == Decimal("1300")

        assert transaction_service.delete_transaction(txn.id, owner) is True
        assert balance_of(checking.id) == Decimal("1000")
        assert transaction_service.get_transaction(txn.id, owner) is None

    def test_second_delete_reports_missing(self, transaction_service, checking, owner, balance_of):
        txn = transaction_service.create_transaction(
            owner_id=owner, account_id=checking.id, amount=Decimal("300"), date=date(2024, 3, 1), type="expense"
        )
        assert transaction_service.delete_transaction(txn.id, owner) is True
        assert transaction_service.delete_transaction(txn.id, owner) is False
        assert balance_of(checking.id) == Decimal("1000")

    def test_vanished_row_rolls_back_revert(
        self, temp_db, transaction_service, checking, owner, balance_of, monkeypatch
    ):
        txn = transaction_service.create_transaction(
            owner_id=owner, account_id=checking.id, amount=Decimal("100"), date=date(2024, 3, 1), type="expense"
        )
        monkeypatch.setattr(temp_db, "delete_transaction", lambda *args: False)

        with pytest.raises(ConsistencyError):
            transaction_service.delete_transaction(txn.id, owner)

        assert balance_of(checking.id) == Decimal("900")


class TestConcurrentWriters:
    """A second connection writing while a delete is still open."""

    def _expense(self, transaction_service, checking, owner, amount):
        return transaction_service.create_transaction(
            owner_id=owner, account_id=checking.id, amount=amount, date=date(2024, 3, 1), type="expense"
        )

    def test_expense_waits_for_delete(
        self, transaction_service, checking, owner, second_writer, reopen
    ):
        txn = self._expense(transaction_service, checking, owner, Decimal("100"))
        writer = second_writer(
            "adjust_account_balance",
            lambda db: self._expense(TransactionService(db), checking, owner, Decimal("50")),
        )

        assert transaction_service.delete_transaction(txn.id, owner) is True
        writer.finish()

        assert writer.blocked is True
        assert reopen().get_account(checking.id, owner).balance == Decimal("950")

    def test_racing_deletes_revert_once(
        self, transaction_service, checking, owner, second_writer, reopen
    ):
        txn = self._expense(transaction_service, checking, owner, Decimal("100"))
        writer = second_writer(
            "adjust_account_balance",
            lambda db: TransactionService(db).delete_transaction(txn.id, owner),
        )

        assert transaction_service.delete_transaction(txn.id, owner) is True
        assert writer.finish() is False

        assert reopen().get_account(checking.id, owner).balance == Decimal("1000")


def test_list_filters_and_order(transaction_service, checking, savings, owner):
    for day, account in ((1, checking), (3, savings), (2, checking)):
        transaction_service.create_transaction(
            owner_id=owner, account_id=account.id, amount=Decimal(day), date=date(2024, 3, day), type="expense"
        )

    all_txns = transaction_service.list_transactions(owner)
    assert [t.date.day for t in all_txns] == [3, 2, 1]

    checking_txns = transaction_service.list_transactions(owner, account_id=checking.id)
    assert [t.date.day for t in checking_txns] == [2, 1]

    ranged = transaction_service.list_transactions(
        owner, start_date=date(2024, 3, 2), end_date=date(2024, 3, 2)
    )
    assert len(ranged) == 1


def test_cli_add_and_delete_transaction(cli_runner, temp_db, checking, owner, reopen):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "--owner",
            owner,
            "transaction",
            "add",
            "--account",
            "Checking",
            "--amount",
            "$1,250.50",
            "--type",
            "income",
            "--date",
            "2024-03-05",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Created transaction" in result.output
    assert reopen().get_account(checking.id, owner).balance == Decimal("2250.50")

    txn_id = result.output.strip().split()[-1]
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--owner", owner, "transaction", "delete", txn_id]
    )
    assert result.exit_code == 0, result.output
    assert reopen().get_account(checking.id, owner).balance == Decimal("1000")


def test_cli_update_unknown_transaction(cli_runner, temp_db, owner):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "--owner", owner, "transaction", "update", "42", "--amount", "5"],
    )
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "not found" in result.output


def test_cli_list_transactions(cli_runner, temp_db, transaction_service, checking, owner):
    transaction_service.create_transaction(
        owner_id=owner,
        account_id=checking.id,
        amount=Decimal("12.34"),
        date=date(2024, 3, 1),
        type="expense",
        description="Coffee beans",
    )
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--owner", owner, "transaction", "list"]
    )
    assert result.exit_code == 0, result.output
    assert "Coffee beans" in result.output
    assert "12.34" in result.output

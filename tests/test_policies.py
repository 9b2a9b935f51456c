"""Tests for balance effect policies."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from pocketledger.domain.entities import Debt, IncomeEntry, Transaction
from pocketledger.domain.errors import ValidationError
from pocketledger.domain.policies import (
    BalanceCutover,
    DebtPolicy,
    IncomeEntryPolicy,
    Posting,
    TransactionPolicy,
)

CREATED = datetime(2024, 1, 1)


def make_transaction(type="expense", amount="50", account_id=1):
    return Transaction(
        id=1,
        owner_id="alice",
        account_id=account_id,
        category_id=None,
        amount=Decimal(amount),
        date=date(2024, 3, 1),
        type=type,
        description="",
        created_at=CREATED,
    )


def make_debt(status="paid", account_id=1, payment_year=2024, payment_month=3, total="200"):
    return Debt(
        id=1,
        owner_id="alice",
        name="Loan",
        total_amount=Decimal(total),
        remaining_amount=Decimal("0"),
        year=2024,
        month=1,
        payment_year=payment_year,
        payment_month=payment_month,
        account_id=account_id,
        interest_rate=None,
        due_date=None,
        min_payment=None,
        status=status,
        created_at=CREATED,
    )


def make_entry(year=2024, month=2, amount="300", account_id=1):
    return IncomeEntry(
        id=1,
        owner_id="alice",
        name="Bonus",
        amount=Decimal(amount),
        year=year,
        month=month,
        account_id=account_id,
        category_id=None,
        created_at=CREATED,
    )


class TestBalanceCutover:
    def test_includes_same_and_later_periods(self):
        cutover = BalanceCutover(2024, 2)
        assert cutover.includes(2024, 2)
        assert cutover.includes(2024, 12)
        assert cutover.includes(2025, 1)

    def test_excludes_earlier_periods(self):
        cutover = BalanceCutover(2024, 2)
        assert not cutover.includes(2024, 1)
        assert not cutover.includes(2023, 12)

    def test_rejects_invalid_month(self):
        with pytest.raises(ValidationError):
            BalanceCutover(2024, 13)

    def test_rejects_invalid_year(self):
        with pytest.raises(ValidationError):
            BalanceCutover(0, 1)

    def test_orders_chronologically(self):
        assert BalanceCutover(2024, 2) < BalanceCutover(2024, 3) < BalanceCutover(2025, 1)


class TestTransactionPolicy:
    def test_income_credits(self):
        effect = TransactionPolicy().effect(make_transaction(type="income", amount="75"))
        assert effect == Posting(account_id=1, delta=Decimal("75"))

    def test_expense_debits(self):
        effect = TransactionPolicy().effect(make_transaction(type="expense", amount="75"))
        assert effect == Posting(account_id=1, delta=Decimal("-75"))

    def test_transfer_is_never_posted(self):
        assert TransactionPolicy().effect(make_transaction(type="transfer")) is None

    def test_missing_record_has_no_effect(self):
        assert TransactionPolicy().effect(None) is None


class TestDebtPolicy:
    @pytest.fixture
    def policy(self):
        return DebtPolicy(BalanceCutover(2024, 2))

    def test_paid_linked_tracked_debt_debits_total(self, policy):
        assert policy.effect(make_debt()) == Posting(account_id=1, delta=Decimal("-200"))

    @pytest.mark.parametrize("status", ["active", "defaulted"])
    def test_unpaid_debt_is_not_posted(self, policy, status):
        assert policy.effect(make_debt(status=status)) is None

    def test_unlinked_debt_is_not_posted(self, policy):
        assert policy.effect(make_debt(account_id=None)) is None

    def test_payment_before_cutover_is_not_posted(self, policy):
        assert policy.effect(make_debt(payment_year=2024, payment_month=1)) is None
        assert policy.effect(make_debt(payment_year=2023, payment_month=12)) is None

    def test_payment_in_cutover_month_is_posted(self, policy):
        assert policy.is_posted(make_debt(payment_year=2024, payment_month=2))

    def test_later_year_with_early_month_is_posted(self, policy):
        assert policy.is_posted(make_debt(payment_year=2025, payment_month=1))


class TestIncomeEntryPolicy:
    def test_tracked_entry_credits(self):
        policy = IncomeEntryPolicy(BalanceCutover(2024, 2))
        assert policy.effect(make_entry()) == Posting(account_id=1, delta=Decimal("300"))

    def test_entry_before_cutover_is_not_posted(self):
        policy = IncomeEntryPolicy(BalanceCutover(2024, 2))
        assert policy.effect(make_entry(year=2024, month=1)) is None


def test_posting_reverted_flips_sign():
    assert Posting(3, Decimal("12.50")).reverted() == Posting(3, Decimal("-12.50"))

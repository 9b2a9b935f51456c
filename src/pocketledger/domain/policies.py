"""Balance effect policies.

A policy decides whether a record, in its current state, contributes to an
account balance ("is posted") and, if so, which signed delta it contributes.
Policies are pure: they never read or write the database.

Every record kind has exactly two effect states, not posted (``effect`` is
None) and posted (``effect`` is a Posting). Services compare the effect of the
old and the new state of a record and let the posting engine settle the
difference.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from pocketledger.domain.entities import Debt, IncomeEntry, Transaction
from pocketledger.domain.errors import ValidationError


@dataclass(frozen=True)
class Posting:
    """Signed balance delta contributed by one record to one account."""

    account_id: int
    delta: Decimal

    def reverted(self) -> "Posting":
        return Posting(account_id=self.account_id, delta=-self.delta)


@dataclass(frozen=True, order=True)
class BalanceCutover:
    """First (year, month) from which records affect account balances.

    Records dated before the cutover are history that was already reflected
    in the opening balances the user entered.
    """

    year: int
    month: int

    def __post_init__(self):
        if self.year < 1:
            raise ValidationError(f"Cutover year must be positive, got {self.year}")
        if not 1 <= self.month <= 12:
            raise ValidationError(f"Cutover month must be between 1 and 12, got {self.month}")

    def includes(self, year: int, month: int) -> bool:
        """Whether the period (year, month) is on or after the cutover."""
        return (year, month) >= (self.year, self.month)


class TransactionPolicy:
    """Income and expense transactions post; transfers never do."""

    POSTED_TYPES = frozenset({"income", "expense"})

    def is_posted(self, transaction: Transaction) -> bool:
        return transaction.type in self.POSTED_TYPES

    def effect(self, transaction: Optional[Transaction]) -> Optional[Posting]:
        if transaction is None or not self.is_posted(transaction):
            return None
        if transaction.type == "income":
            delta = transaction.amount
        else:
            delta = -transaction.amount
        return Posting(account_id=transaction.account_id, delta=delta)


class DebtPolicy:
    """A paid debt linked to an account draws that account down.

    The payment only counts when its payment period is inside the tracked
    range, i.e. on or after the balance cutover.
    """

    def __init__(self, cutover: BalanceCutover):
        self.cutover = cutover

    def payment_is_tracked(self, debt: Debt) -> bool:
        return self.cutover.includes(debt.payment_year, debt.payment_month)

    def is_posted(self, debt: Debt) -> bool:
        return (
            debt.status == "paid"
            and debt.account_id is not None
            and self.payment_is_tracked(debt)
        )

    def effect(self, debt: Optional[Debt]) -> Optional[Posting]:
        if debt is None or not self.is_posted(debt):
            return None
        return Posting(account_id=debt.account_id, delta=-debt.total_amount)


class IncomeEntryPolicy:
    """Income entries post from the cutover month onwards."""

    def __init__(self, cutover: BalanceCutover):
        self.cutover = cutover

    def is_posted(self, entry: IncomeEntry) -> bool:
        return self.cutover.includes(entry.year, entry.month)

    def effect(self, entry: Optional[IncomeEntry]) -> Optional[Posting]:
        if entry is None or not self.is_posted(entry):
            return None
        return Posting(account_id=entry.account_id, delta=entry.amount)

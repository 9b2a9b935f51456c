"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay stable
when the database schema changes.
"""

from pocketledger.domain import entities as domain
from pocketledger.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
    Debt as ORMDebt,
    IncomeEntry as ORMIncomeEntry,
    FixedIncome as ORMFixedIncome,
    Investment as ORMInvestment,
    InvestmentEntry as ORMInvestmentEntry,
    Goal as ORMGoal,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        owner_id=orm_account.owner_id,
        name=orm_account.name,
        type=orm_account.type,
        balance=orm_account.balance,
        limit=orm_account.limit,
        color=orm_account.color,
        is_archived=bool(orm_account.is_archived),
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        owner_id=orm_category.owner_id,
        name=orm_category.name,
        type=orm_category.type,
        budget=orm_category.budget,
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        owner_id=orm_transaction.owner_id,
        account_id=orm_transaction.account_id,
        category_id=orm_transaction.category_id,
        amount=orm_transaction.amount,
        date=orm_transaction.date,
        type=orm_transaction.type,
        description=orm_transaction.description,
        created_at=orm_transaction.created_at,
    )


def debt_to_domain(orm_debt: ORMDebt) -> domain.Debt:
    """Convert SQLAlchemy Debt model to domain Debt entity."""
    return domain.Debt(
        id=orm_debt.id,
        owner_id=orm_debt.owner_id,
        name=orm_debt.name,
        total_amount=orm_debt.total_amount,
        remaining_amount=orm_debt.remaining_amount,
        year=orm_debt.year,
        month=orm_debt.month,
        payment_year=orm_debt.payment_year,
        payment_month=orm_debt.payment_month,
        account_id=orm_debt.account_id,
        interest_rate=orm_debt.interest_rate,
        due_date=orm_debt.due_date,
        min_payment=orm_debt.min_payment,
        status=orm_debt.status,
        created_at=orm_debt.created_at,
    )


def income_entry_to_domain(orm_entry: ORMIncomeEntry) -> domain.IncomeEntry:
    """Convert SQLAlchemy IncomeEntry model to domain IncomeEntry entity."""
    return domain.IncomeEntry(
        id=orm_entry.id,
        owner_id=orm_entry.owner_id,
        name=orm_entry.name,
        amount=orm_entry.amount,
        year=orm_entry.year,
        month=orm_entry.month,
        account_id=orm_entry.account_id,
        category_id=orm_entry.category_id,
        created_at=orm_entry.created_at,
    )


def fixed_income_to_domain(orm_fixed: ORMFixedIncome) -> domain.FixedIncome:
    """Convert SQLAlchemy FixedIncome model to domain FixedIncome entity."""
    return domain.FixedIncome(
        id=orm_fixed.id,
        owner_id=orm_fixed.owner_id,
        name=orm_fixed.name,
        amount=orm_fixed.amount,
        day_of_month=orm_fixed.day_of_month,
        account_id=orm_fixed.account_id,
        category_id=orm_fixed.category_id,
        starts_at=orm_fixed.starts_at,
        ends_at=orm_fixed.ends_at,
        created_at=orm_fixed.created_at,
    )


def investment_to_domain(orm_investment: ORMInvestment) -> domain.Investment:
    """Convert SQLAlchemy Investment model to domain Investment entity."""
    return domain.Investment(
        id=orm_investment.id,
        owner_id=orm_investment.owner_id,
        name=orm_investment.name,
        type=orm_investment.type,
        initial_amount=orm_investment.initial_amount,
        current_value=orm_investment.current_value,
        quantity=orm_investment.quantity,
        ticker=orm_investment.ticker,
        last_updated=orm_investment.last_updated,
        created_at=orm_investment.created_at,
    )


def investment_entry_to_domain(orm_entry: ORMInvestmentEntry) -> domain.InvestmentEntry:
    """Convert SQLAlchemy InvestmentEntry model to domain InvestmentEntry entity."""
    return domain.InvestmentEntry(
        id=orm_entry.id,
        owner_id=orm_entry.owner_id,
        investment_id=orm_entry.investment_id,
        year=orm_entry.year,
        month=orm_entry.month,
        value=orm_entry.value,
        created_at=orm_entry.created_at,
    )


def goal_to_domain(orm_goal: ORMGoal) -> domain.Goal:
    """Convert SQLAlchemy Goal model to domain Goal entity."""
    return domain.Goal(
        id=orm_goal.id,
        owner_id=orm_goal.owner_id,
        name=orm_goal.name,
        target_amount=orm_goal.target_amount,
        current_amount=orm_goal.current_amount,
        deadline=orm_goal.deadline,
        created_at=orm_goal.created_at,
    )

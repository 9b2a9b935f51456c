"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested record does not exist or belongs to another owner."""


class ConsistencyError(DomainError):
    """An internal invariant broke in the middle of an operation."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def debt_not_found(debt_id: int) -> str:
    """Return message for missing debt."""
    return f"Debt {debt_id} not found"


def income_entry_not_found(entry_id: int) -> str:
    """Return message for missing income entry."""
    return f"Income entry {entry_id} not found"


def fixed_income_not_found(fixed_id: int) -> str:
    """Return message for missing fixed income."""
    return f"Fixed income {fixed_id} not found"


def investment_not_found(investment_id: int) -> str:
    """Return message for missing investment."""
    return f"Investment {investment_id} not found"


def investment_entry_not_found(entry_id: int) -> str:
    """Return message for missing investment entry."""
    return f"Investment entry {entry_id} not found"


def invalid_choice(field: str, value: object, choices: tuple[str, ...]) -> str:
    """Return message for a value outside a closed set."""
    return f"Invalid {field} '{value}'. Expected one of: {', '.join(choices)}"


def goal_not_found(goal_id: int) -> str:
    """Return message for missing goal."""
    return f"Goal {goal_id} not found"

"""Utility for resolving account names to IDs."""

from pocketledger.domain.account import AccountService
from pocketledger.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, owner_id: str, account: str | int) -> int:
    """Resolve an account name or ID to the owner's account ID.

    Args:
        account_service: AccountService instance
        owner_id: Owner the account must belong to
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If the owner has no such account
    """
    if isinstance(account, int):
        account_id = account
    else:
        try:
            account_id = int(account)
        except (ValueError, TypeError):
            account_id = None

    if account_id is not None:
        if account_service.get_account(account_id, owner_id) is None:
            raise NotFoundError(f"Account ID {account_id} not found")
        return account_id

    for acc in account_service.list_accounts(owner_id):
        if acc.name == account:
            return acc.id

    raise NotFoundError(f"Account '{account}' not found")

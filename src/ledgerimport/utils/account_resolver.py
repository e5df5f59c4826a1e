"""Utility for resolving account names to IDs."""

from ledgerimport.domain.account import AccountService
from ledgerimport.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, user_id: str, account: str | int) -> int:
    """Resolve an account name or ID owned by ``user_id`` to its ID.

    Raises:
        NotFoundError: If no such account belongs to the user
    """
    if isinstance(account, int):
        return account_service.require_account(account, user_id).id

    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None

    if account_id is not None:
        return account_service.require_account(account_id, user_id).id

    for acc in account_service.list_accounts(user_id):
        if acc.name == account:
            return acc.id

    raise NotFoundError(f"Account '{account}' not found")

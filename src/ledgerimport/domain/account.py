"""Account domain service."""

import logging
from decimal import Decimal
from typing import Optional

from ledgerimport.database.base import Database
from ledgerimport.domain.entities import Account as AccountEntity
from ledgerimport.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
)

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing accounts and their running balance."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        user_id: str,
        name: str,
        bank_name: str,
        currency: str = "ZAR",
        opening_balance: Decimal = Decimal("0"),
    ) -> int:
        """Create a new account.

        Args:
            user_id: Owner of the account
            name: Account name, unique per user
            bank_name: Bank name
            currency: ISO currency code
            opening_balance: Starting balance

        Returns:
            Account ID

        Raises:
            ValidationError: If name or currency is malformed
            ConflictError: If the user already has an account with this name
        """
        if not name or not name.strip():
            raise ValidationError("Account name must not be empty")
        if len(currency) != 3 or not currency.isalpha():
            raise ValidationError(f"Invalid currency code '{currency}'")

        for acc in self.db.list_accounts(user_id):
            if acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")

        return self.db.create_account(
            user_id=user_id,
            name=name,
            bank_name=bank_name,
            currency=currency.upper(),
            current_balance=opening_balance,
        )

    def get_account(self, account_id: int, user_id: str) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id, user_id)

    def require_account(self, account_id: int, user_id: str) -> AccountEntity:
        """Get account by ID.

        Raises:
            NotFoundError: If the account does not exist for the user
        """
        account = self.db.get_account(account_id, user_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self, user_id: str) -> list[AccountEntity]:
        """List all accounts for a user."""
        return self.db.list_accounts(user_id)

    def adjust_balance(self, account_id: int, user_id: str, delta: Decimal) -> AccountEntity:
        """Add a signed delta to the account's current balance.

        The store applies it as a single additive update, so concurrent
        adjustments do not overwrite each other.
        """
        account = self.db.adjust_account_balance(account_id, user_id, delta)
        logger.debug("Adjusted account %s balance by %s", account_id, delta)
        return account

"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerimport.domain.entities import (
    Account,
    Category,
    CategorizationRule,
    ImportRecord,
    MerchantMapping,
    RuleMatcher,
    Transaction,
)


class Database(ABC):
    """Abstract ledger store interface for ledgerimport.

    Every mutating call is its own unit of work: it either commits or, on
    error, rolls back its own changes and re-raises.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        user_id: str,
        name: str,
        bank_name: str,
        currency: str = "ZAR",
        current_balance: Decimal = Decimal("0"),
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int, user_id: str) -> Optional[Account]:
        """Get account by ID, scoped to its owner."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: str) -> list[Account]:
        """List all accounts for a user."""
        pass

    @abstractmethod
    def adjust_account_balance(self, account_id: int, user_id: str, delta: Decimal) -> Account:
        """Add a signed delta to the account balance in one atomic update.

        Returns the updated account. Raises ValueError if the account does
        not exist for the user.
        """
        pass

    # Category operations
    @abstractmethod
    def create_category(self, user_id: str, name: str, category_type: str) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int, user_id: str) -> Optional[Category]:
        """Get category by ID, scoped to its owner."""
        pass

    @abstractmethod
    def list_categories(self, user_id: str) -> list[Category]:
        """List categories for a user."""
        pass

    # Statement import operations
    @abstractmethod
    def create_import(self, user_id: str, account_id: int, **fields: Any) -> ImportRecord:
        """Create an import record in status 'processing'."""
        pass

    @abstractmethod
    def get_import(self, import_id: int, user_id: str) -> Optional[ImportRecord]:
        """Get an import record by ID, scoped to its owner."""
        pass

    @abstractmethod
    def list_imports(self, user_id: str, account_id: Optional[int] = None) -> list[ImportRecord]:
        """List import records, newest first, optionally for one account."""
        pass

    @abstractmethod
    def claim_import(self, import_id: int, user_id: str) -> bool:
        """Mark an import as being processed.

        A single conditional update: succeeds only while the record is in
        status 'processing' and not yet claimed. Returns True if this call
        won the claim.
        """
        pass

    @abstractmethod
    def update_import(self, import_id: int, user_id: str, **fields: Any) -> Optional[ImportRecord]:
        """Update import record fields. Returns the updated record or None."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        user_id: str,
        account_id: int,
        amount: Decimal,
        transaction_type: str,
        transaction_date: date,
        description: str,
        posted_date: Optional[date] = None,
        merchant_original: Optional[str] = None,
        merchant_normalized: Optional[str] = None,
        external_id: Optional[str] = None,
        category_id: Optional[int] = None,
        source: str = "manual",
        is_reviewed: bool = False,
        categorization_confidence: Optional[Decimal] = None,
        categorization_method: Optional[str] = None,
        import_id: Optional[int] = None,
    ) -> Transaction:
        """Create a ledger transaction."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int, user_id: str) -> Optional[Transaction]:
        """Get transaction by ID, scoped to its owner."""
        pass

    @abstractmethod
    def find_transactions_by_date_and_amount(
        self, account_id: int, transaction_date: date, amount: Decimal
    ) -> list[Transaction]:
        """Find transactions on an account with the given date and unsigned amount."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: str,
        account_id: Optional[int] = None,
        import_id: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters, newest first."""
        pass

    # Categorization rule operations
    @abstractmethod
    def create_rule(
        self,
        user_id: str,
        category_id: int,
        matcher: RuleMatcher,
        amount_min: Optional[Decimal] = None,
        amount_max: Optional[Decimal] = None,
        priority: int = 50,
        confidence: Decimal = Decimal("1.00"),
    ) -> CategorizationRule:
        """Create a categorization rule."""
        pass

    @abstractmethod
    def get_rule(self, rule_id: int, user_id: str) -> Optional[CategorizationRule]:
        """Get rule by ID, scoped to its owner."""
        pass

    @abstractmethod
    def list_rules(self, user_id: str, include_inactive: bool = False) -> list[CategorizationRule]:
        """List rules sorted ascending by priority, then by ID."""
        pass

    @abstractmethod
    def update_rule_active(self, rule_id: int, user_id: str, is_active: bool) -> bool:
        """Enable or disable a rule. Returns False if the rule does not exist."""
        pass

    @abstractmethod
    def delete_rule(self, rule_id: int, user_id: str) -> bool:
        """Delete a rule. Returns False if the rule does not exist."""
        pass

    @abstractmethod
    def increment_rule_applied(self, rule_id: int, user_id: str) -> None:
        """Add one to the rule's applied counter."""
        pass

    @abstractmethod
    def increment_rule_corrected(self, rule_id: int, user_id: str) -> None:
        """Add one to the rule's corrected counter."""
        pass

    # Merchant mapping operations
    @abstractmethod
    def create_merchant_mapping(
        self,
        user_id: str,
        original_name: str,
        normalized_name: str,
        is_global: bool = False,
    ) -> MerchantMapping:
        """Create a merchant mapping."""
        pass

    @abstractmethod
    def find_merchant_mapping(self, user_id: str, original_name: str) -> Optional[MerchantMapping]:
        """Find the user's mapping for an original name, case-insensitively."""
        pass

    @abstractmethod
    def list_merchant_mappings(self, user_id: str) -> list[MerchantMapping]:
        """List the user's mappings followed by global mappings."""
        pass

    @abstractmethod
    def delete_merchant_mapping(self, mapping_id: int, user_id: str) -> bool:
        """Delete a mapping owned by the user. Returns False if absent."""
        pass

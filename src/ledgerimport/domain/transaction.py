"""Transaction domain service."""

from typing import Optional

from ledgerimport.database.base import Database
from ledgerimport.domain.entities import Transaction as TransactionEntity
from ledgerimport.domain.errors import NotFoundError, transaction_not_found


class TransactionService:
    """Read access to ledger transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_transaction(self, transaction_id: int, user_id: str) -> TransactionEntity:
        """Get transaction by ID.

        Raises:
            NotFoundError: If the transaction does not exist for the user
        """
        txn = self.db.get_transaction(transaction_id, user_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def list_transactions(
        self,
        user_id: str,
        account_id: Optional[int] = None,
        import_id: Optional[int] = None,
    ) -> list[TransactionEntity]:
        """List transactions, newest first.

        Args:
            user_id: Owner of the transactions
            account_id: Optional account ID filter
            import_id: Optional statement import ID filter
        """
        return self.db.list_transactions(user_id, account_id=account_id, import_id=import_id)

"""Duplicate detection for imported statement rows."""

from ledgerimport.database.base import Database
from ledgerimport.domain.entities import CandidateRow


def is_duplicate(db: Database, account_id: int, row: CandidateRow) -> bool:
    """Return True if the account already has a transaction like ``row``.

    The duplicate key is (account, transaction date, unsigned amount).
    Description and direction are ignored, so two genuine transactions with
    the same date and amount on one account are treated as duplicates.
    Overlapping statement exports repeat rows exactly this way.
    """
    matches = db.find_transactions_by_date_and_amount(
        account_id, row.transaction_date, row.amount
    )
    return len(matches) > 0

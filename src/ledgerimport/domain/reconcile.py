"""Statement balance reconciliation."""

from decimal import Decimal
from typing import Iterable, Optional

from ledgerimport.domain.entities import TWO_PLACES, BalanceCheck, CandidateRow, format_money


def reconcile(
    opening_balance: Optional[Decimal],
    closing_balance: Optional[Decimal],
    imported_rows: Iterable[CandidateRow],
) -> Optional[BalanceCheck]:
    """Compare the statement's closing balance with the one implied by its rows.

    Only rows that were actually imported should be passed in. Returns None
    when the statement did not report both balances.
    """
    if opening_balance is None or closing_balance is None:
        return None

    computed_closing = opening_balance + sum(
        (row.signed_amount for row in imported_rows), Decimal("0")
    )
    difference = abs(computed_closing - closing_balance).quantize(TWO_PLACES)

    return BalanceCheck(
        opening_balance=format_money(opening_balance),
        closing_balance=format_money(closing_balance),
        computed_closing=format_money(computed_closing),
        difference=format_money(difference),
        is_reconciled=difference == 0,
    )

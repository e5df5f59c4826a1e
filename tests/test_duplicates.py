"""Tests for duplicate detection."""

from datetime import date
from decimal import Decimal

from ledgerimport.domain.duplicates import is_duplicate
from ledgerimport.domain.entities import CandidateRow, TransactionType

from conftest import USER_ID


def candidate(txn_date=date(2025, 1, 15), amount="250.00", description="Anything", kind="debit"):
    return CandidateRow(
        transaction_date=txn_date,
        amount=Decimal(amount),
        description=description,
        transaction_type=TransactionType(kind),
    )


def existing(db, account_id, txn_date=date(2025, 1, 15), amount="250.00", kind="debit"):
    db.create_transaction(
        user_id=USER_ID,
        account_id=account_id,
        amount=Decimal(amount),
        transaction_type=kind,
        transaction_date=txn_date,
        description="Existing",
    )


def test_no_existing_transactions(temp_db, sample_account):
    assert is_duplicate(temp_db, sample_account.id, candidate()) is False


def test_same_date_and_amount_is_duplicate(temp_db, sample_account):
    existing(temp_db, sample_account.id)

    assert is_duplicate(temp_db, sample_account.id, candidate(description="Different text"))


def test_direction_is_not_part_of_the_key(temp_db, sample_account):
    existing(temp_db, sample_account.id, kind="credit")

    assert is_duplicate(temp_db, sample_account.id, candidate(kind="debit"))


def test_different_amount_is_not_duplicate(temp_db, sample_account):
    existing(temp_db, sample_account.id)

    assert not is_duplicate(temp_db, sample_account.id, candidate(amount="250.01"))


def test_different_date_is_not_duplicate(temp_db, sample_account):
    existing(temp_db, sample_account.id)

    assert not is_duplicate(temp_db, sample_account.id, candidate(txn_date=date(2025, 1, 16)))


def test_other_account_is_not_duplicate(temp_db, sample_account, account_service):
    other_id = account_service.create_account(USER_ID, "Savings", "Test Bank")
    existing(temp_db, other_id)

    assert not is_duplicate(temp_db, sample_account.id, candidate())


def test_amount_scale_does_not_matter(temp_db, sample_account):
    existing(temp_db, sample_account.id, amount="100")

    assert is_duplicate(temp_db, sample_account.id, candidate(amount="100.00"))

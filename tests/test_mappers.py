"""Tests for database mappers."""

import pytest
from datetime import datetime, date, UTC
from decimal import Decimal

from ledgerimport.database.models import (
    Account as ORMAccount,
    CategorizationRule as ORMCategorizationRule,
    MerchantMapping as ORMMerchantMapping,
    StatementImport as ORMStatementImport,
    Transaction as ORMTransaction,
)
from ledgerimport.database.mappers import (
    account_to_domain,
    categorization_rule_to_domain,
    merchant_mapping_to_domain,
    statement_import_to_domain,
    transaction_to_domain,
)
from ledgerimport.domain.entities import (
    Account,
    DescriptionPattern,
    ImportStatus,
    MerchantExact,
    TransactionSource,
    TransactionType,
)


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        """Test converting ORM Account to domain Account."""
        orm_account = ORMAccount(
            id=1,
            user_id="user-1",
            name="Cheque",
            bank_name="Test Bank",
            currency="ZAR",
            current_balance=1500.5,
            created_at=datetime.now(UTC),
        )
        account = account_to_domain(orm_account)

        assert isinstance(account, Account)
        assert account.name == "Cheque"
        assert account.current_balance == Decimal("1500.5")
        assert isinstance(account.current_balance, Decimal)


class TestStatementImportMapper:
    """Tests for StatementImport mapper."""

    def test_statement_import_to_domain(self):
        """Test converting ORM StatementImport to domain ImportRecord."""
        orm_import = ORMStatementImport(
            id=4,
            user_id="user-1",
            account_id=1,
            filename="jan.csv",
            file_type="csv",
            statement_start_date=date(2025, 1, 1),
            statement_end_date=date(2025, 1, 31),
            opening_balance=Decimal("10000.00"),
            closing_balance=None,
            status="partial",
            transactions_imported=3,
            imported_at=datetime.now(UTC),
        )
        record = statement_import_to_domain(orm_import)

        assert record.status is ImportStatus.PARTIAL
        assert record.opening_balance == Decimal("10000.00")
        assert record.closing_balance is None
        assert record.transactions_imported == 3
        assert record.transactions_failed == 0

    def test_unknown_status_rejected(self):
        """Test a status outside the lifecycle is not mapped."""
        orm_import = ORMStatementImport(id=1, user_id="u", account_id=1, status="archived")

        with pytest.raises(ValueError):
            statement_import_to_domain(orm_import)


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def test_transaction_to_domain(self):
        """Test converting ORM Transaction to domain Transaction."""
        orm_txn = ORMTransaction(
            id=9,
            user_id="user-1",
            account_id=1,
            amount=Decimal("99.95"),
            transaction_type="debit",
            transaction_date=date(2025, 1, 15),
            description="Card purchase",
            source="import",
            is_reviewed=False,
            categorization_confidence=0.8,
            created_at=datetime.now(UTC),
        )
        txn = transaction_to_domain(orm_txn)

        assert txn.transaction_type is TransactionType.DEBIT
        assert txn.source is TransactionSource.IMPORT
        assert txn.signed_amount == Decimal("-99.95")
        assert txn.categorization_confidence == Decimal("0.8")


class TestMerchantMappingMapper:
    """Tests for MerchantMapping mapper."""

    def test_merchant_mapping_to_domain(self):
        """Test converting ORM MerchantMapping to domain MerchantMapping."""
        orm_mapping = ORMMerchantMapping(
            id=2,
            user_id=None,
            original_name="NETFLIX.COM",
            normalized_name="Netflix",
            is_global=True,
            created_at=datetime.now(UTC),
        )
        mapping = merchant_mapping_to_domain(orm_mapping)

        assert mapping.user_id is None
        assert mapping.is_global is True
        assert mapping.normalized_name == "Netflix"


class TestCategorizationRuleMapper:
    """Tests for CategorizationRule mapper."""

    def test_rule_to_domain(self):
        """Test the stored match kind becomes a matcher variant."""
        orm_rule = ORMCategorizationRule(
            id=5,
            user_id="user-1",
            category_id=3,
            match_kind="merchant_exact",
            match_value="Checkers",
            amount_min=None,
            amount_max=Decimal("500.00"),
            priority=10,
            confidence=Decimal("0.75"),
            is_active=True,
            created_at=datetime.now(UTC),
        )
        rule = categorization_rule_to_domain(orm_rule)

        assert rule.matcher == MerchantExact("Checkers")
        assert rule.amount_min is None
        assert rule.amount_max == Decimal("500.00")
        assert rule.times_applied == 0

    def test_description_pattern_kind(self):
        """Test description patterns survive mapping."""
        orm_rule = ORMCategorizationRule(
            id=6,
            user_id="user-1",
            category_id=3,
            match_kind="description_pattern",
            match_value="^salary",
            priority=50,
            confidence=1,
            is_active=True,
        )

        assert categorization_rule_to_domain(orm_rule).matcher == DescriptionPattern("^salary")

    def test_unknown_match_kind_rejected(self):
        """Test an unknown stored match kind raises."""
        orm_rule = ORMCategorizationRule(
            id=7, user_id="u", category_id=1, match_kind="amount_only", match_value="x"
        )

        with pytest.raises(ValueError, match="Unknown rule match kind"):
            categorization_rule_to_domain(orm_rule)

"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from ledgerimport.domain import entities
from ledgerimport.domain.entities import ImportStatus, MerchantPattern

from conftest import USER_ID, OTHER_USER_ID


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models scoped to a user."""

    def test_get_account_returns_domain_model(self, temp_db):
        """Test that get_account returns a domain Account entity."""
        account_id = temp_db.create_account(
            user_id=USER_ID, name="Test Account", bank_name="Test Bank", current_balance=Decimal("12.50")
        )

        account = temp_db.get_account(account_id, USER_ID)

        assert isinstance(account, entities.Account)
        assert account.id == account_id
        assert account.currency == "ZAR"
        assert account.current_balance == Decimal("12.50")
        assert isinstance(account.created_at, datetime)

    def test_get_account_other_user(self, temp_db):
        """Test an account is invisible to other users."""
        account_id = temp_db.create_account(user_id=USER_ID, name="A", bank_name="B")

        assert temp_db.get_account(account_id, OTHER_USER_ID) is None
        assert temp_db.list_accounts(OTHER_USER_ID) == []

    def test_adjust_account_balance(self, temp_db):
        """Test balance adjustments accumulate."""
        account_id = temp_db.create_account(
            user_id=USER_ID, name="A", bank_name="B", current_balance=Decimal("100.00")
        )

        temp_db.adjust_account_balance(account_id, USER_ID, Decimal("-30.25"))
        account = temp_db.adjust_account_balance(account_id, USER_ID, Decimal("10.00"))

        assert account.current_balance == Decimal("79.75")

    def test_adjust_missing_account_raises(self, temp_db):
        """Test adjusting another user's account raises and changes nothing."""
        account_id = temp_db.create_account(
            user_id=USER_ID, name="A", bank_name="B", current_balance=Decimal("100.00")
        )

        with pytest.raises(ValueError):
            temp_db.adjust_account_balance(account_id, OTHER_USER_ID, Decimal("5"))

        assert temp_db.get_account(account_id, USER_ID).current_balance == Decimal("100.00")

    def test_import_lifecycle(self, temp_db):
        """Test create, claim and finalize of an import record."""
        account_id = temp_db.create_account(user_id=USER_ID, name="A", bank_name="B")
        record = temp_db.create_import(USER_ID, account_id, filename="jan.csv")

        assert isinstance(record, entities.ImportRecord)
        assert record.status is ImportStatus.PROCESSING
        assert temp_db.claim_import(record.id, USER_ID) is True
        assert temp_db.get_import(record.id, USER_ID).processing_started_at is not None

        updated = temp_db.update_import(
            record.id,
            USER_ID,
            status=ImportStatus.COMPLETED,
            transactions_imported=4,
            transactions_duplicates=1,
            transactions_failed=0,
        )

        assert updated.status is ImportStatus.COMPLETED
        assert updated.transactions_imported == 4
        assert updated.transactions_duplicates == 1

    def test_claim_other_users_import(self, temp_db):
        """Test another user cannot claim an import."""
        account_id = temp_db.create_account(user_id=USER_ID, name="A", bank_name="B")
        record = temp_db.create_import(USER_ID, account_id)

        assert temp_db.claim_import(record.id, OTHER_USER_ID) is False
        assert temp_db.claim_import(record.id, USER_ID) is True

    def test_update_import_rejects_unknown_fields(self, temp_db):
        """Test only outcome fields of an import can be updated."""
        account_id = temp_db.create_account(user_id=USER_ID, name="A", bank_name="B")
        record = temp_db.create_import(USER_ID, account_id)

        with pytest.raises(ValueError, match="account_id"):
            temp_db.update_import(record.id, USER_ID, account_id=99)

    def test_find_transactions_by_date_and_amount(self, temp_db):
        """Test duplicate lookup filters on account, date and amount."""
        account_id = temp_db.create_account(user_id=USER_ID, name="A", bank_name="B")
        txn = temp_db.create_transaction(
            user_id=USER_ID,
            account_id=account_id,
            amount=Decimal("45.10"),
            transaction_type="credit",
            transaction_date=date(2025, 3, 1),
            description="Refund",
        )

        found = temp_db.find_transactions_by_date_and_amount(account_id, date(2025, 3, 1), Decimal("45.10"))

        assert [t.id for t in found] == [txn.id]
        assert isinstance(found[0], entities.Transaction)
        assert temp_db.find_transactions_by_date_and_amount(account_id, date(2025, 3, 2), Decimal("45.10")) == []

    def test_list_rules_returns_domain_models(self, temp_db):
        """Test that list_rules returns domain rules with matcher variants."""
        category_id = temp_db.create_category(USER_ID, "Transport", "expense")
        temp_db.create_rule(USER_ID, category_id, MerchantPattern("uber|bolt"), priority=5)

        [rule] = temp_db.list_rules(USER_ID)

        assert isinstance(rule, entities.CategorizationRule)
        assert rule.matcher == MerchantPattern("uber|bolt")
        assert rule.priority == 5

    def test_list_merchant_mappings_own_before_global(self, temp_db):
        """Test the user's own mappings are listed before global ones."""
        global_mapping = temp_db.create_merchant_mapping(OTHER_USER_ID, "SHELL", "Shell", is_global=True)
        own = temp_db.create_merchant_mapping(USER_ID, "SHELL", "Fuel")
        temp_db.create_merchant_mapping(OTHER_USER_ID, "BP", "BP")

        mappings = temp_db.list_merchant_mappings(USER_ID)

        assert [m.id for m in mappings] == [own.id, global_mapping.id]

    def test_list_merchant_mappings_order_within_groups(self, temp_db):
        """Test each group is ordered by ID, and own global mappings count as own."""
        other_first = temp_db.create_merchant_mapping(OTHER_USER_ID, "A", "A", is_global=True)
        own_global = temp_db.create_merchant_mapping(USER_ID, "B", "B", is_global=True)
        other_second = temp_db.create_merchant_mapping(OTHER_USER_ID, "C", "C", is_global=True)
        own_private = temp_db.create_merchant_mapping(USER_ID, "D", "D")

        mappings = temp_db.list_merchant_mappings(USER_ID)

        assert [m.id for m in mappings] == [
            own_global.id,
            own_private.id,
            other_first.id,
            other_second.id,
        ]

    def test_find_merchant_mapping_is_case_insensitive(self, temp_db):
        """Test mapping lookup ignores case."""
        temp_db.create_merchant_mapping(USER_ID, "Pick n Pay", "PnP")

        assert temp_db.find_merchant_mapping(USER_ID, "PICK N PAY").normalized_name == "PnP"
        assert temp_db.find_merchant_mapping(OTHER_USER_ID, "PICK N PAY") is None

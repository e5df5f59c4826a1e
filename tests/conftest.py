"""Shared pytest fixtures for ledgerimport tests."""

import tempfile
import os
from decimal import Decimal

import pytest

from ledgerimport.database.factories import create_sqlite_database
from ledgerimport.domain.account import AccountService
from ledgerimport.domain.category import CategoryService
from ledgerimport.domain.merchant import MerchantMappingService
from ledgerimport.domain.rules import CategorizationRuleService
from ledgerimport.domain.statement_import import StatementImportService
from ledgerimport.domain.transaction import TransactionService

USER_ID = "user-1"
OTHER_USER_ID = "user-2"


@pytest.fixture
def user_id():
    """The user most tests act as."""
    return USER_ID


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def merchant_service(temp_db):
    """Create a MerchantMappingService with a temporary database."""
    return MerchantMappingService(temp_db)


@pytest.fixture
def rule_service(temp_db):
    """Create a CategorizationRuleService with a temporary database."""
    return CategorizationRuleService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a StatementImportService with a temporary database."""
    return StatementImportService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a sample account with a balance of 10000.00."""
    account_id = account_service.create_account(
        user_id=USER_ID,
        name="Test Account",
        bank_name="Test Bank",
        opening_balance=Decimal("10000.00"),
    )
    return account_service.get_account(account_id, USER_ID)


@pytest.fixture
def sample_category(category_service):
    """Create a Groceries expense category."""
    category_id = category_service.create_category(USER_ID, "Groceries", "expense")
    return category_service.get_category(category_id, USER_ID)


@pytest.fixture
def make_import(import_service, sample_account):
    """Factory for statement imports on the sample account."""

    def _make(**overrides):
        payload = {
            "accountId": sample_account.id,
            "filename": "statement.csv",
            "fileType": "csv",
            "statementStartDate": "2025-01-01",
            "statementEndDate": "2025-01-31",
        }
        payload.update(overrides)
        return import_service.create_import(USER_ID, payload)

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def row(
    date="2025-01-15",
    amount="100.00",
    description="Card purchase",
    transaction_type="debit",
    **extra,
):
    """Build one row of a process payload."""
    data = {
        "transactionDate": date,
        "amount": amount,
        "description": description,
        "transactionType": transaction_type,
    }
    data.update(extra)
    return data

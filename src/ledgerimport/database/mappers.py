"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay stable
when the schema changes.
"""

from decimal import Decimal
from typing import Optional

from ledgerimport.domain import entities as domain
from ledgerimport.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    StatementImport as ORMStatementImport,
    Transaction as ORMTransaction,
    MerchantMapping as ORMMerchantMapping,
    CategorizationRule as ORMCategorizationRule,
)


def _decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    return value if isinstance(value, Decimal) else Decimal(str(value))


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        name=orm_account.name,
        bank_name=orm_account.bank_name,
        currency=orm_account.currency,
        current_balance=_decimal(orm_account.current_balance),
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        user_id=orm_category.user_id,
        name=orm_category.name,
        category_type=domain.CategoryType(orm_category.category_type),
        created_at=orm_category.created_at,
    )


def statement_import_to_domain(orm_import: ORMStatementImport) -> domain.ImportRecord:
    """Convert SQLAlchemy StatementImport model to domain ImportRecord entity."""
    return domain.ImportRecord(
        id=orm_import.id,
        user_id=orm_import.user_id,
        account_id=orm_import.account_id,
        filename=orm_import.filename,
        file_type=orm_import.file_type,
        statement_start_date=orm_import.statement_start_date,
        statement_end_date=orm_import.statement_end_date,
        opening_balance=_decimal(orm_import.opening_balance),
        closing_balance=_decimal(orm_import.closing_balance),
        transactions_imported=orm_import.transactions_imported or 0,
        transactions_duplicates=orm_import.transactions_duplicates or 0,
        transactions_failed=orm_import.transactions_failed or 0,
        status=domain.ImportStatus(orm_import.status),
        error_message=orm_import.error_message,
        processing_started_at=orm_import.processing_started_at,
        imported_at=orm_import.imported_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        user_id=orm_transaction.user_id,
        account_id=orm_transaction.account_id,
        category_id=orm_transaction.category_id,
        amount=_decimal(orm_transaction.amount),
        transaction_type=domain.TransactionType(orm_transaction.transaction_type),
        transaction_date=orm_transaction.transaction_date,
        posted_date=orm_transaction.posted_date,
        description=orm_transaction.description,
        merchant_original=orm_transaction.merchant_original,
        merchant_normalized=orm_transaction.merchant_normalized,
        external_id=orm_transaction.external_id,
        source=domain.TransactionSource(orm_transaction.source),
        is_reviewed=bool(orm_transaction.is_reviewed),
        categorization_confidence=_decimal(orm_transaction.categorization_confidence),
        categorization_method=orm_transaction.categorization_method,
        import_id=orm_transaction.import_id,
        created_at=orm_transaction.created_at,
    )


def merchant_mapping_to_domain(orm_mapping: ORMMerchantMapping) -> domain.MerchantMapping:
    """Convert SQLAlchemy MerchantMapping model to domain MerchantMapping entity."""
    return domain.MerchantMapping(
        id=orm_mapping.id,
        user_id=orm_mapping.user_id,
        original_name=orm_mapping.original_name,
        normalized_name=orm_mapping.normalized_name,
        is_global=bool(orm_mapping.is_global),
        created_at=orm_mapping.created_at,
    )


def categorization_rule_to_domain(orm_rule: ORMCategorizationRule) -> domain.CategorizationRule:
    """Convert SQLAlchemy CategorizationRule model to domain CategorizationRule entity."""
    return domain.CategorizationRule(
        id=orm_rule.id,
        user_id=orm_rule.user_id,
        category_id=orm_rule.category_id,
        matcher=domain.build_matcher(orm_rule.match_kind, orm_rule.match_value),
        amount_min=_decimal(orm_rule.amount_min),
        amount_max=_decimal(orm_rule.amount_max),
        priority=orm_rule.priority,
        confidence=_decimal(orm_rule.confidence),
        times_applied=orm_rule.times_applied or 0,
        times_corrected=orm_rule.times_corrected or 0,
        is_active=bool(orm_rule.is_active),
        created_at=orm_rule.created_at,
    )

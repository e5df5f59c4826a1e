"""Statement import domain service.

Commits a parsed bank statement into the ledger exactly once. Rows are
processed one at a time, in input order, and each row is committed on its
own: a failing row is counted and skipped, never rolled back together with
its neighbours. Later rows therefore see the transactions and balance
changes of earlier rows in the same batch.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from ledgerimport.database.base import Database
from ledgerimport.domain.duplicates import is_duplicate
from ledgerimport.domain.entities import (
    CandidateRow,
    CategorizationRule,
    ImportRecord,
    ImportResult,
    ImportStatus,
    MerchantMapping,
    Transaction,
    TransactionSource,
)
from ledgerimport.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    import_already_processed,
    import_not_found,
)
from ledgerimport.domain.merchant import resolve_merchant
from ledgerimport.domain.reconcile import reconcile
from ledgerimport.domain.rules import match_rule
from ledgerimport.domain.validation import parse_create_import_payload, parse_process_payload

logger = logging.getLogger(__name__)

CATEGORIZATION_METHOD_RULE = "rule"


class RowStatus(str, Enum):
    """What happened to one candidate row."""

    IMPORTED = "imported"
    DUPLICATE = "duplicate"
    FAILED = "failed"


@dataclass(frozen=True)
class RowOutcome:
    """Result of processing one candidate row."""

    status: RowStatus
    transaction: Optional[Transaction] = None
    rule: Optional[CategorizationRule] = None
    error: Optional[str] = None


def derive_status(total: int, failed: int) -> ImportStatus:
    """Final import status as a function of the row counters."""
    if failed == total:
        return ImportStatus.FAILED
    if failed > 0:
        return ImportStatus.PARTIAL
    return ImportStatus.COMPLETED


class StatementImportService:
    """Service for creating and processing statement imports."""

    def __init__(self, db: Database):
        """Initialize statement import service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_import(self, user_id: str, payload: Mapping[str, Any]) -> ImportRecord:
        """Create an import record in status 'processing'.

        Args:
            user_id: Owner of the import
            payload: Mapping with accountId and optional filename, fileType,
                statementStartDate, statementEndDate, openingBalance and
                closingBalance

        Raises:
            ValidationError: If the payload is invalid
            NotFoundError: If the account does not exist for the user
        """
        data = parse_create_import_payload(payload)

        if self.db.get_account(data.account_id, user_id) is None:
            raise NotFoundError(account_not_found(data.account_id))

        record = self.db.create_import(
            user_id=user_id,
            account_id=data.account_id,
            filename=data.filename,
            file_type=data.file_type,
            statement_start_date=data.statement_start_date,
            statement_end_date=data.statement_end_date,
            opening_balance=data.opening_balance,
            closing_balance=data.closing_balance,
        )
        logger.info("Created statement import %s for account %s", record.id, data.account_id)
        return record

    def get_import(self, import_id: int, user_id: str) -> ImportRecord:
        """Get an import record.

        Raises:
            NotFoundError: If the import does not exist for the user
        """
        record = self.db.get_import(import_id, user_id)
        if record is None:
            raise NotFoundError(import_not_found(import_id))
        return record

    def list_imports(self, user_id: str, account_id: Optional[int] = None) -> list[ImportRecord]:
        """List import records, newest first."""
        return self.db.list_imports(user_id, account_id=account_id)

    def list_import_transactions(self, import_id: int, user_id: str) -> list[Transaction]:
        """List the ledger transactions an import created."""
        self.get_import(import_id, user_id)
        return self.db.list_transactions(user_id, import_id=import_id)

    def process(self, import_id: int, user_id: str, payload: Mapping[str, Any]) -> ImportResult:
        """Commit a batch of parsed statement rows into the ledger.

        Args:
            import_id: Import record to process
            user_id: Owner of the import
            payload: Mapping with a non-empty "transactions" list

        Returns:
            ImportResult with counters, the finalized import record and, when
            the statement reported both balances, a balance check

        Raises:
            ValidationError: If the payload is invalid or empty, or the import
                was already processed
            NotFoundError: If the import or its account does not exist
        """
        rows = parse_process_payload(payload)

        record = self.db.get_import(import_id, user_id)
        if record is None:
            raise NotFoundError(import_not_found(import_id))

        if record.status is not ImportStatus.PROCESSING:
            raise ValidationError(
                import_already_processed(),
                {"status": [f"Import is currently {record.status.value}"]},
            )

        if self.db.get_account(record.account_id, user_id) is None:
            raise NotFoundError(account_not_found(record.account_id))

        if not self.db.claim_import(import_id, user_id):
            raise ValidationError(
                import_already_processed(),
                {"status": ["Import is already being processed"]},
            )

        rules = self.db.list_rules(user_id)
        mappings = self.db.list_merchant_mappings(user_id)
        logger.info(
            "Processing import %s: %d rows, %d rules, %d merchant mappings",
            import_id,
            len(rows),
            len(rules),
            len(mappings),
        )

        imported_rows: list[CandidateRow] = []
        duplicates = 0
        failed = 0
        errors: list[str] = []

        for row_num, row in enumerate(rows, start=1):
            outcome = self._process_row(record, row, rules, mappings)
            if outcome.status is RowStatus.IMPORTED:
                imported_rows.append(row)
            elif outcome.status is RowStatus.DUPLICATE:
                duplicates += 1
            else:
                failed += 1
                errors.append(f"Row {row_num}: {outcome.error}")

        imported = len(imported_rows)
        status = derive_status(len(rows), failed)
        error_message = None
        if failed:
            error_message = f"{failed} of {len(rows)} transactions failed to import"

        updated = self.db.update_import(
            import_id,
            user_id,
            status=status,
            transactions_imported=imported,
            transactions_duplicates=duplicates,
            transactions_failed=failed,
            error_message=error_message,
        )
        logger.info(
            "Import %s %s: imported=%d duplicates=%d failed=%d",
            import_id,
            status.value,
            imported,
            duplicates,
            failed,
        )

        return ImportResult(
            import_record=updated or record,
            imported=imported,
            duplicates=duplicates,
            failed=failed,
            balance_check=reconcile(record.opening_balance, record.closing_balance, imported_rows),
            errors=errors,
        )

    def _process_row(
        self,
        record: ImportRecord,
        row: CandidateRow,
        rules: Sequence[CategorizationRule],
        mappings: Sequence[MerchantMapping],
    ) -> RowOutcome:
        """Run one row through duplicate check, categorization and persistence."""
        try:
            if is_duplicate(self.db, record.account_id, row):
                logger.debug("Skipping duplicate %s %s", row.transaction_date, row.amount)
                return RowOutcome(RowStatus.DUPLICATE)

            merchant_normalized = resolve_merchant(row.merchant_original or "", mappings)
            rule = match_rule(rules, merchant_normalized, row.description, row.amount)

            transaction = self.db.create_transaction(
                user_id=record.user_id,
                account_id=record.account_id,
                amount=row.amount,
                transaction_type=row.transaction_type.value,
                transaction_date=row.transaction_date,
                posted_date=row.posted_date,
                description=row.description,
                merchant_original=row.merchant_original,
                merchant_normalized=merchant_normalized or None,
                external_id=row.external_id,
                category_id=rule.category_id if rule else None,
                source=TransactionSource.IMPORT.value,
                is_reviewed=False,
                categorization_confidence=rule.confidence if rule else None,
                categorization_method=CATEGORIZATION_METHOD_RULE if rule else None,
                import_id=record.id,
            )
            self.db.adjust_account_balance(record.account_id, record.user_id, row.signed_amount)
            logger.debug(
                "Imported %s %s as transaction %s", row.transaction_date, row.amount, transaction.id
            )
        except Exception as e:
            logger.warning(
                "Import %s: row %s %s failed", record.id, row.transaction_date, row.amount,
                exc_info=True,
            )
            return RowOutcome(RowStatus.FAILED, error=str(e) or type(e).__name__)

        if rule is not None:
            try:
                self.db.increment_rule_applied(rule.id, record.user_id)
            except Exception:
                # The row is committed; only the usage statistic is lost.
                logger.warning("Could not record use of rule %s", rule.id, exc_info=True)

        return RowOutcome(RowStatus.IMPORTED, transaction=transaction, rule=rule)

"""Domain model entities for ledgerimport.

These are pure data classes representing business concepts, independent of
database schema. The store converts its rows into these before handing them
to the domain services.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union


class ImportStatus(str, Enum):
    """Lifecycle of a statement import."""

    PROCESSING = "processing"
    COMPLETED = "completed"
    PARTIAL = "partial"
    FAILED = "failed"


class TransactionType(str, Enum):
    """Direction of a statement row."""

    DEBIT = "debit"
    CREDIT = "credit"


class TransactionSource(str, Enum):
    """Provenance of a ledger transaction."""

    MANUAL = "manual"
    IMPORT = "import"


class CategoryType(str, Enum):
    """Kind of category."""

    INCOME = "income"
    EXPENSE = "expense"


FILE_TYPES = ("csv", "ofx", "qfx", "pdf", "xls", "xlsx")


def signed_amount(amount: Decimal, transaction_type: TransactionType) -> Decimal:
    """Return the effect of an unsigned amount on an account balance."""
    if TransactionType(transaction_type) is TransactionType.DEBIT:
        return -amount
    return amount


@dataclass(frozen=True)
class Account:
    """Bank account domain entity."""

    id: int
    user_id: str
    name: str
    bank_name: str
    currency: str
    current_balance: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: int
    user_id: str
    name: str
    category_type: CategoryType
    created_at: datetime


@dataclass(frozen=True)
class ImportRecord:
    """One statement-ingestion attempt and its outcome."""

    id: int
    user_id: str
    account_id: int
    filename: Optional[str]
    file_type: Optional[str]
    statement_start_date: Optional[date]
    statement_end_date: Optional[date]
    opening_balance: Optional[Decimal]
    closing_balance: Optional[Decimal]
    transactions_imported: int
    transactions_duplicates: int
    transactions_failed: int
    status: ImportStatus
    error_message: Optional[str]
    processing_started_at: Optional[datetime]
    imported_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Render the record with decimals as fixed two-decimal strings."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "accountId": self.account_id,
            "filename": self.filename,
            "fileType": self.file_type,
            "statementStartDate": _iso(self.statement_start_date),
            "statementEndDate": _iso(self.statement_end_date),
            "openingBalance": format_money(self.opening_balance),
            "closingBalance": format_money(self.closing_balance),
            "transactionsImported": self.transactions_imported,
            "transactionsDuplicates": self.transactions_duplicates,
            "transactionsFailed": self.transactions_failed,
            "status": self.status.value,
            "errorMessage": self.error_message,
            "importedAt": _iso(self.imported_at),
        }


@dataclass(frozen=True)
class CandidateRow:
    """A parsed statement row that has not been committed to the ledger."""

    transaction_date: date
    amount: Decimal
    description: str
    transaction_type: TransactionType
    merchant_original: Optional[str] = None
    external_id: Optional[str] = None
    posted_date: Optional[date] = None

    @property
    def signed_amount(self) -> Decimal:
        return signed_amount(self.amount, self.transaction_type)


@dataclass(frozen=True)
class Transaction:
    """Ledger transaction domain entity.

    ``amount`` is the unsigned magnitude; ``transaction_type`` carries the
    direction.
    """

    id: int
    user_id: str
    account_id: int
    category_id: Optional[int]
    amount: Decimal
    transaction_type: TransactionType
    transaction_date: date
    posted_date: Optional[date]
    description: str
    merchant_original: Optional[str]
    merchant_normalized: Optional[str]
    external_id: Optional[str]
    source: TransactionSource
    is_reviewed: bool
    categorization_confidence: Optional[Decimal]
    categorization_method: Optional[str]
    import_id: Optional[int]
    created_at: datetime

    @property
    def signed_amount(self) -> Decimal:
        return signed_amount(self.amount, self.transaction_type)


@dataclass(frozen=True)
class MerchantMapping:
    """Maps a raw merchant string to the name the user wants to see."""

    id: int
    user_id: Optional[str]
    original_name: str
    normalized_name: str
    is_global: bool
    created_at: datetime


# Rule predicates. A rule carries exactly one of these.


@dataclass(frozen=True)
class MerchantExact:
    """Case-insensitive equality with the normalized merchant."""

    value: str


@dataclass(frozen=True)
class MerchantPattern:
    """Case-insensitive regex search on the normalized merchant."""

    pattern: str


@dataclass(frozen=True)
class DescriptionPattern:
    """Case-insensitive regex search on the raw description."""

    pattern: str


RuleMatcher = Union[MerchantExact, MerchantPattern, DescriptionPattern]

MATCH_KINDS: dict[str, type] = {
    "merchant_exact": MerchantExact,
    "merchant_pattern": MerchantPattern,
    "description_pattern": DescriptionPattern,
}


def matcher_kind(matcher: RuleMatcher) -> str:
    """Return the storage tag for a matcher variant."""
    for kind, cls in MATCH_KINDS.items():
        if isinstance(matcher, cls):
            return kind
    raise TypeError(f"Unknown rule matcher: {matcher!r}")


def matcher_value(matcher: RuleMatcher) -> str:
    """Return the string a matcher variant matches with."""
    if isinstance(matcher, MerchantExact):
        return matcher.value
    return matcher.pattern


def build_matcher(kind: str, value: str) -> RuleMatcher:
    """Rebuild a matcher variant from its storage tag and value."""
    try:
        cls = MATCH_KINDS[kind]
    except KeyError:
        raise ValueError(f"Unknown rule match kind '{kind}'") from None
    return cls(value)


@dataclass(frozen=True)
class CategorizationRule:
    """User-defined predicate plus the category it assigns."""

    id: int
    user_id: str
    category_id: int
    matcher: RuleMatcher
    amount_min: Optional[Decimal]
    amount_max: Optional[Decimal]
    priority: int
    confidence: Decimal
    times_applied: int
    times_corrected: int
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class BalanceCheck:
    """Statement balances against the balance computed from imported rows.

    All amounts are fixed two-decimal strings.
    """

    opening_balance: str
    closing_balance: str
    computed_closing: str
    difference: str
    is_reconciled: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "openingBalance": self.opening_balance,
            "closingBalance": self.closing_balance,
            "computedClosing": self.computed_closing,
            "difference": self.difference,
            "isReconciled": self.is_reconciled,
        }


@dataclass(frozen=True)
class ImportResult:
    """Outcome of processing one statement import."""

    import_record: ImportRecord
    imported: int
    duplicates: int
    failed: int
    balance_check: Optional[BalanceCheck] = None
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Render the batch output contract."""
        result: dict[str, Any] = {
            "import": self.import_record.to_dict(),
            "imported": self.imported,
            "duplicates": self.duplicates,
            "failed": self.failed,
        }
        if self.balance_check is not None:
            result["balanceCheck"] = self.balance_check.to_dict()
        return result


TWO_PLACES = Decimal("0.01")


def format_money(amount: Optional[Decimal]) -> Optional[str]:
    """Render a decimal as a fixed two-decimal string."""
    if amount is None:
        return None
    return str(Decimal(amount).quantize(TWO_PLACES))


def _iso(value: Optional[Union[date, datetime]]) -> Optional[str]:
    return value.isoformat() if value is not None else None

"""Input validation for statement import payloads.

Payloads arrive as plain mappings (decoded JSON) using the camelCase keys of
the import API. Each parser either returns typed values or raises a
ValidationError whose ``field_errors`` are keyed by dotted path.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from ledgerimport.domain.entities import FILE_TYPES, CandidateRow, TransactionType
from ledgerimport.domain.errors import ValidationError, collect_field_errors
from ledgerimport.utils.amount_parser import parse_decimal_string
from ledgerimport.utils.date_parser import parse_iso_date

MAX_DESCRIPTION_LENGTH = 500
MAX_MERCHANT_LENGTH = 200
MAX_EXTERNAL_ID_LENGTH = 100
MAX_FILENAME_LENGTH = 255


@dataclass(frozen=True)
class CreateImportInput:
    """Validated input for creating a statement import."""

    account_id: int
    filename: Optional[str] = None
    file_type: Optional[str] = None
    statement_start_date: Optional[date] = None
    statement_end_date: Optional[date] = None
    opening_balance: Optional[Decimal] = None
    closing_balance: Optional[Decimal] = None


class _Issues:
    """Collects (path, message) pairs while parsing."""

    def __init__(self) -> None:
        self.items: list[tuple[str, str]] = []

    def add(self, path: str, message: str) -> None:
        self.items.append((path, message))

    def raise_if_any(self, message: str) -> None:
        if self.items:
            raise ValidationError(message, collect_field_errors(self.items))


def _optional_string(issues: _Issues, path: str, value: Any, max_length: int) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        issues.add(path, "Expected a string")
        return None
    if len(value) > max_length:
        issues.add(path, f"Must be at most {max_length} characters")
        return None
    return value


def _optional_date(issues: _Issues, path: str, value: Any) -> Optional[date]:
    if value is None:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        issues.add(path, "Invalid date, expected YYYY-MM-DD")
        return None


def _optional_decimal(issues: _Issues, path: str, value: Any, signed: bool = True) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return parse_decimal_string(value, signed=signed)
    except ValueError:
        issues.add(path, "Invalid amount format")
        return None


def _parse_row(issues: _Issues, index: int, raw: Any) -> Optional[CandidateRow]:
    prefix = f"transactions.{index}"
    if not isinstance(raw, Mapping):
        issues.add(prefix, "Expected an object")
        return None

    start = len(issues.items)

    transaction_date = None
    if raw.get("transactionDate") is None:
        issues.add(f"{prefix}.transactionDate", "Required")
    else:
        transaction_date = _optional_date(issues, f"{prefix}.transactionDate", raw["transactionDate"])

    amount = None
    if raw.get("amount") is None:
        issues.add(f"{prefix}.amount", "Required")
    else:
        amount = _optional_decimal(issues, f"{prefix}.amount", raw["amount"], signed=False)

    description = raw.get("description")
    if not isinstance(description, str) or not description:
        issues.add(f"{prefix}.description", "Required")
    elif len(description) > MAX_DESCRIPTION_LENGTH:
        issues.add(f"{prefix}.description", f"Must be at most {MAX_DESCRIPTION_LENGTH} characters")

    transaction_type = None
    try:
        transaction_type = TransactionType(raw.get("transactionType"))
    except ValueError:
        issues.add(f"{prefix}.transactionType", "Must be 'debit' or 'credit'")

    merchant_original = _optional_string(
        issues, f"{prefix}.merchantOriginal", raw.get("merchantOriginal"), MAX_MERCHANT_LENGTH
    )
    external_id = _optional_string(
        issues, f"{prefix}.externalId", raw.get("externalId"), MAX_EXTERNAL_ID_LENGTH
    )
    posted_date = _optional_date(issues, f"{prefix}.postedDate", raw.get("postedDate"))

    if len(issues.items) > start:
        return None

    return CandidateRow(
        transaction_date=transaction_date,
        amount=amount,
        description=description,
        transaction_type=transaction_type,
        merchant_original=merchant_original,
        external_id=external_id,
        posted_date=posted_date,
    )


def parse_process_payload(payload: Any) -> list[CandidateRow]:
    """Validate a batch payload ``{"transactions": [...]}`` into candidate rows.

    Raises:
        ValidationError: If the payload is malformed, empty, or any row is
            invalid. No rows are returned unless all of them are valid.
    """
    issues = _Issues()

    if not isinstance(payload, Mapping):
        raise ValidationError("Invalid import data", {"": ["Expected an object"]})

    transactions = payload.get("transactions")
    if not isinstance(transactions, (list, tuple)):
        raise ValidationError("Invalid import data", {"transactions": ["Expected a list"]})
    if len(transactions) == 0:
        raise ValidationError(
            "Invalid import data",
            {"transactions": ["At least one transaction is required"]},
        )

    rows = [_parse_row(issues, index, raw) for index, raw in enumerate(transactions)]
    issues.raise_if_any("Invalid import data")
    return rows


def parse_create_import_payload(payload: Mapping[str, Any]) -> CreateImportInput:
    """Validate input for creating a statement import.

    Raises:
        ValidationError: If any field is invalid
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("Invalid import data", {"": ["Expected an object"]})

    issues = _Issues()

    account_id = payload.get("accountId")
    if isinstance(account_id, bool) or not isinstance(account_id, int):
        issues.add("accountId", "Must be an account ID")

    filename = _optional_string(issues, "filename", payload.get("filename"), MAX_FILENAME_LENGTH)

    file_type = payload.get("fileType")
    if file_type is not None and file_type not in FILE_TYPES:
        issues.add("fileType", f"Must be one of {', '.join(FILE_TYPES)}")

    start = _optional_date(issues, "statementStartDate", payload.get("statementStartDate"))
    end = _optional_date(issues, "statementEndDate", payload.get("statementEndDate"))
    if start is not None and end is not None and start > end:
        issues.add("statementEndDate", "Must not be before statementStartDate")

    opening = _optional_decimal(issues, "openingBalance", payload.get("openingBalance"))
    closing = _optional_decimal(issues, "closingBalance", payload.get("closingBalance"))

    issues.raise_if_any("Invalid import data")

    return CreateImportInput(
        account_id=account_id,
        filename=filename,
        file_type=file_type,
        statement_start_date=start,
        statement_end_date=end,
        opening_balance=opening,
        closing_balance=closing,
    )

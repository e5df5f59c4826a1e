"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic.

    ``field_errors`` maps a dotted field path (e.g. ``transactions.0.amount``)
    to the messages collected for it.
    """

    def __init__(self, message: str, field_errors: Optional[dict[str, list[str]]] = None):
        super().__init__(message)
        self.field_errors = field_errors or {}


class NotFoundError(DomainError):
    """Requested domain entity does not exist for the given user."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def import_not_found(import_id: int) -> str:
    """Return message for missing statement import."""
    return f"Statement import {import_id} not found"


def rule_not_found(rule_id: int) -> str:
    """Return message for missing categorization rule."""
    return f"Categorization rule {rule_id} not found"


def mapping_not_found(mapping_id: int) -> str:
    """Return message for missing merchant mapping."""
    return f"Merchant mapping {mapping_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def import_already_processed() -> str:
    """Return message when an import batch was already consumed."""
    return "Import has already been processed"


def collect_field_errors(issues: list[tuple[str, str]]) -> dict[str, list[str]]:
    """Group (path, message) issues into a field error map, keeping order."""
    field_errors: dict[str, list[str]] = {}
    for path, message in issues:
        field_errors.setdefault(path, []).append(message)
    return field_errors


def format_field_errors(field_errors: dict[str, list[str]]) -> str:
    """Render a field error map as a single line."""
    return "; ".join(
        f"{path}: {', '.join(messages)}" if path else ", ".join(messages)
        for path, messages in field_errors.items()
    )

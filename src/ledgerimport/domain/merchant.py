"""Merchant name resolution."""

from typing import Iterable

from ledgerimport.database.base import Database
from ledgerimport.domain.entities import MerchantMapping
from ledgerimport.domain.errors import (
    NotFoundError,
    ValidationError,
    mapping_not_found,
)

MAX_MERCHANT_NAME_LENGTH = 200


def resolve_merchant(raw_name: str, mappings: Iterable[MerchantMapping]) -> str:
    """Map a raw merchant string to the user's normalized name.

    Matching is a case-insensitive exact comparison with each mapping's
    original name; the first match wins. Empty or unmapped names come back
    unchanged.
    """
    if not raw_name:
        return raw_name

    needle = raw_name.lower()
    for mapping in mappings:
        if mapping.original_name.lower() == needle:
            return mapping.normalized_name
    return raw_name


class MerchantMappingService:
    """Service for managing merchant mappings."""

    def __init__(self, db: Database):
        """Initialize merchant mapping service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_mapping(
        self,
        user_id: str,
        original_name: str,
        normalized_name: str,
        is_global: bool = False,
    ) -> MerchantMapping:
        """Create a merchant mapping.

        Raises:
            ValidationError: If a name is empty or too long, or the user
                already maps this original name
        """
        original_name = (original_name or "").strip()
        normalized_name = (normalized_name or "").strip()

        issues = {}
        for field_name, value in (("originalName", original_name), ("normalizedName", normalized_name)):
            if not value:
                issues[field_name] = ["Must not be empty"]
            elif len(value) > MAX_MERCHANT_NAME_LENGTH:
                issues[field_name] = [f"Must be at most {MAX_MERCHANT_NAME_LENGTH} characters"]
        if issues:
            raise ValidationError("Invalid merchant mapping data", issues)

        if self.db.find_merchant_mapping(user_id, original_name) is not None:
            raise ValidationError(
                "A mapping for this original name already exists",
                {"originalName": ["Duplicate merchant mapping"]},
            )

        return self.db.create_merchant_mapping(
            user_id=user_id,
            original_name=original_name,
            normalized_name=normalized_name,
            is_global=is_global,
        )

    def list_mappings(self, user_id: str) -> list[MerchantMapping]:
        """List the user's mappings, then global ones."""
        return self.db.list_merchant_mappings(user_id)

    def resolve(self, user_id: str, raw_name: str) -> str:
        """Resolve a single merchant name against the user's mappings."""
        return resolve_merchant(raw_name, self.list_mappings(user_id))

    def delete_mapping(self, mapping_id: int, user_id: str) -> None:
        """Delete a mapping.

        Raises:
            NotFoundError: If the user owns no such mapping
        """
        if not self.db.delete_merchant_mapping(mapping_id, user_id):
            raise NotFoundError(mapping_not_found(mapping_id))

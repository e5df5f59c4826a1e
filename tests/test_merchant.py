"""Tests for merchant name resolution and mappings."""

from datetime import datetime, UTC

import pytest

from ledgerimport.domain.entities import MerchantMapping
from ledgerimport.domain.errors import NotFoundError, ValidationError
from ledgerimport.domain.merchant import resolve_merchant

from conftest import USER_ID, OTHER_USER_ID


def mapping(original, normalized, mapping_id=1):
    return MerchantMapping(
        id=mapping_id,
        user_id=USER_ID,
        original_name=original,
        normalized_name=normalized,
        is_global=False,
        created_at=datetime.now(UTC),
    )


class TestResolveMerchant:
    """Tests for the pure resolver."""

    def test_empty_name_returned_unchanged(self):
        assert resolve_merchant("", [mapping("", "Something")]) == ""

    def test_case_insensitive_exact_match(self):
        mappings = [mapping("WOOLWORTHS SANDTON", "Woolworths")]
        assert resolve_merchant("woolworths sandton", mappings) == "Woolworths"

    def test_partial_name_does_not_match(self):
        mappings = [mapping("WOOLWORTHS SANDTON", "Woolworths")]
        assert resolve_merchant("WOOLWORTHS", mappings) == "WOOLWORTHS"

    def test_first_match_wins(self):
        mappings = [
            mapping("UBER *TRIP", "Uber", mapping_id=1),
            mapping("uber *trip", "Uber Rides", mapping_id=2),
        ]
        assert resolve_merchant("Uber *Trip", mappings) == "Uber"

    def test_unmapped_name_returned_unchanged(self):
        assert resolve_merchant("Corner Cafe", [mapping("Spar", "SPAR")]) == "Corner Cafe"


class TestMerchantMappingService:
    """Tests for MerchantMappingService against the database."""

    def test_create_and_resolve(self, merchant_service):
        merchant_service.create_mapping(USER_ID, "CHECKERS HYPER 123", "Checkers")

        assert merchant_service.resolve(USER_ID, "checkers hyper 123") == "Checkers"

    def test_duplicate_original_name_rejected(self, merchant_service):
        merchant_service.create_mapping(USER_ID, "Netflix.com", "Netflix")

        with pytest.raises(ValidationError) as excinfo:
            merchant_service.create_mapping(USER_ID, "NETFLIX.COM", "Netflix Inc")

        assert "originalName" in excinfo.value.field_errors

    def test_empty_names_rejected(self, merchant_service):
        with pytest.raises(ValidationError) as excinfo:
            merchant_service.create_mapping(USER_ID, "  ", "")

        assert set(excinfo.value.field_errors) == {"originalName", "normalizedName"}

    def test_mappings_are_user_scoped(self, merchant_service):
        merchant_service.create_mapping(OTHER_USER_ID, "SPOTIFY AB", "Spotify")

        assert merchant_service.resolve(USER_ID, "SPOTIFY AB") == "SPOTIFY AB"

    def test_global_mapping_visible_to_other_users(self, merchant_service):
        merchant_service.create_mapping(OTHER_USER_ID, "SPOTIFY AB", "Spotify", is_global=True)

        assert merchant_service.resolve(USER_ID, "spotify ab") == "Spotify"

    def test_own_mapping_shadows_global(self, merchant_service):
        merchant_service.create_mapping(OTHER_USER_ID, "SPOTIFY AB", "Spotify", is_global=True)
        merchant_service.create_mapping(USER_ID, "SPOTIFY AB", "Music")

        assert merchant_service.resolve(USER_ID, "SPOTIFY AB") == "Music"

    def test_delete_mapping(self, merchant_service):
        created = merchant_service.create_mapping(USER_ID, "ENGEN", "Engen")

        merchant_service.delete_mapping(created.id, USER_ID)

        assert merchant_service.list_mappings(USER_ID) == []

    def test_delete_other_users_mapping_not_found(self, merchant_service):
        created = merchant_service.create_mapping(OTHER_USER_ID, "ENGEN", "Engen")

        with pytest.raises(NotFoundError):
            merchant_service.delete_mapping(created.id, USER_ID)

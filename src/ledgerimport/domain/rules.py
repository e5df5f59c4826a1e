"""Categorization rules: matching engine and rule management."""

import logging
import re
from decimal import Decimal
from typing import Optional, Sequence

from ledgerimport.database.base import Database
from ledgerimport.domain.entities import (
    CategorizationRule,
    DescriptionPattern,
    MerchantExact,
    MerchantPattern,
    RuleMatcher,
)
from ledgerimport.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    collect_field_errors,
    rule_not_found,
)
from ledgerimport.utils.amount_parser import parse_decimal_string

logger = logging.getLogger(__name__)

MAX_CRITERION_LENGTH = 200
MIN_PRIORITY = 0
MAX_PRIORITY = 100
DEFAULT_PRIORITY = 50


def _pattern_matches(pattern: str, text: str) -> bool:
    """Case-insensitive regex search. A pattern that does not compile never matches."""
    try:
        return re.search(pattern, text, re.IGNORECASE) is not None
    except re.error:
        logger.debug("Ignoring invalid rule pattern %r", pattern)
        return False


def matcher_matches(matcher: RuleMatcher, merchant_normalized: str, description: str) -> bool:
    """Evaluate one rule predicate against a row."""
    if isinstance(matcher, MerchantExact):
        return matcher.value.lower() == merchant_normalized.lower()
    if isinstance(matcher, MerchantPattern):
        return _pattern_matches(matcher.pattern, merchant_normalized)
    if isinstance(matcher, DescriptionPattern):
        return _pattern_matches(matcher.pattern, description)
    raise TypeError(f"Unknown rule matcher: {matcher!r}")


def match_rule(
    rules: Sequence[CategorizationRule],
    merchant_normalized: Optional[str],
    description: str,
    amount: Decimal,
) -> Optional[CategorizationRule]:
    """Return the first rule that matches a row, or None.

    ``rules`` must already be sorted by ascending priority. A rule is skipped
    when the amount falls outside its inclusive bounds.
    """
    merchant = merchant_normalized or ""
    description = description or ""

    for rule in rules:
        if rule.amount_min is not None and amount < rule.amount_min:
            continue
        if rule.amount_max is not None and amount > rule.amount_max:
            continue
        if matcher_matches(rule.matcher, merchant, description):
            return rule
    return None


def build_rule_matcher(
    merchant_exact: Optional[str] = None,
    merchant_pattern: Optional[str] = None,
    description_pattern: Optional[str] = None,
) -> RuleMatcher:
    """Build the single predicate for a rule from user-facing options.

    Raises:
        ValidationError: If none or more than one criterion is given, or a
            criterion is too long
    """
    given = [
        (name, value)
        for name, value in (
            ("merchantExact", merchant_exact),
            ("merchantPattern", merchant_pattern),
            ("descriptionPattern", description_pattern),
        )
        if value
    ]
    if not given:
        raise ValidationError(
            "At least one matching criterion is required "
            "(merchantExact, merchantPattern, or descriptionPattern)"
        )
    if len(given) > 1:
        raise ValidationError(
            "A rule takes exactly one matching criterion",
            {name: ["Conflicts with another criterion"] for name, _ in given},
        )

    name, value = given[0]
    if len(value) > MAX_CRITERION_LENGTH:
        raise ValidationError(
            "Invalid categorization rule data",
            {name: [f"Must be at most {MAX_CRITERION_LENGTH} characters"]},
        )

    if merchant_exact:
        return MerchantExact(merchant_exact)
    if merchant_pattern:
        return MerchantPattern(merchant_pattern)
    return DescriptionPattern(description_pattern)


class CategorizationRuleService:
    """Service for managing categorization rules."""

    def __init__(self, db: Database):
        """Initialize rule service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_rule(
        self,
        user_id: str,
        category_id: int,
        merchant_exact: Optional[str] = None,
        merchant_pattern: Optional[str] = None,
        description_pattern: Optional[str] = None,
        amount_min: Optional[str] = None,
        amount_max: Optional[str] = None,
        priority: int = DEFAULT_PRIORITY,
        confidence: str = "1.00",
    ) -> CategorizationRule:
        """Create a categorization rule.

        Args:
            user_id: Owner of the rule
            category_id: Category assigned on match
            merchant_exact: Exact merchant name (case-insensitive)
            merchant_pattern: Regex searched in the normalized merchant
            description_pattern: Regex searched in the description
            amount_min: Optional inclusive lower bound, decimal string
            amount_max: Optional inclusive upper bound, decimal string
            priority: 0..100, lower is evaluated first
            confidence: Decimal string between 0 and 1

        Returns:
            The created rule

        Raises:
            ValidationError: If the rule data is invalid
            NotFoundError: If the category does not exist for the user
        """
        matcher = build_rule_matcher(merchant_exact, merchant_pattern, description_pattern)

        issues: list[tuple[str, str]] = []
        bounds: dict[str, Optional[Decimal]] = {}
        for name, value in (("amountMin", amount_min), ("amountMax", amount_max)):
            bounds[name] = None
            if value is None:
                continue
            try:
                bounds[name] = parse_decimal_string(value)
            except ValueError:
                issues.append((name, "Must be a valid decimal"))

        if (
            bounds["amountMin"] is not None
            and bounds["amountMax"] is not None
            and bounds["amountMin"] > bounds["amountMax"]
        ):
            issues.append(("amountMax", "Must not be less than amountMin"))

        if not isinstance(priority, int) or not MIN_PRIORITY <= priority <= MAX_PRIORITY:
            issues.append(("priority", f"Must be an integer between {MIN_PRIORITY} and {MAX_PRIORITY}"))

        confidence_value = None
        try:
            confidence_value = parse_decimal_string(confidence, signed=False)
            if confidence_value > 1:
                issues.append(("confidence", "Must be between 0 and 1"))
        except ValueError:
            issues.append(("confidence", "Must be a valid decimal"))

        if issues:
            raise ValidationError("Invalid categorization rule data", collect_field_errors(issues))

        if self.db.get_category(category_id, user_id) is None:
            raise NotFoundError(category_not_found(category_id))

        rule = self.db.create_rule(
            user_id=user_id,
            category_id=category_id,
            matcher=matcher,
            amount_min=bounds["amountMin"],
            amount_max=bounds["amountMax"],
            priority=priority,
            confidence=confidence_value,
        )
        logger.info("Created categorization rule %s for category %s", rule.id, category_id)
        return rule

    def list_rules(self, user_id: str, include_inactive: bool = False) -> list[CategorizationRule]:
        """List rules in evaluation order."""
        return self.db.list_rules(user_id, include_inactive=include_inactive)

    def get_rule(self, rule_id: int, user_id: str) -> CategorizationRule:
        """Get a rule.

        Raises:
            NotFoundError: If the rule does not exist for the user
        """
        rule = self.db.get_rule(rule_id, user_id)
        if rule is None:
            raise NotFoundError(rule_not_found(rule_id))
        return rule

    def set_active(self, rule_id: int, user_id: str, is_active: bool) -> None:
        """Enable or disable a rule."""
        if not self.db.update_rule_active(rule_id, user_id, is_active):
            raise NotFoundError(rule_not_found(rule_id))

    def delete_rule(self, rule_id: int, user_id: str) -> None:
        """Delete a rule."""
        if not self.db.delete_rule(rule_id, user_id):
            raise NotFoundError(rule_not_found(rule_id))

    def record_applied(self, rule_id: int, user_id: str) -> None:
        """Count one automatic application of a rule."""
        self.db.increment_rule_applied(rule_id, user_id)

    def record_corrected(self, rule_id: int, user_id: str) -> None:
        """Count one manual correction of a rule's category."""
        self.db.increment_rule_corrected(rule_id, user_id)

"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

# Plain decimal with at most two fractional digits, as sent by statement parsers.
DECIMAL_STRING = re.compile(r"-?[0-9]+(\.[0-9]{1,2})?")
UNSIGNED_DECIMAL_STRING = re.compile(r"[0-9]+(\.[0-9]{1,2})?")


def parse_decimal_string(value: str, signed: bool = True) -> Decimal:
    """Parse a strict decimal string such as "1500.00" or "-20.5".

    Args:
        value: Decimal string
        signed: If False, a leading minus sign is rejected

    Returns:
        Decimal amount

    Raises:
        ValueError: If the string is not a plain decimal with at most two
            fractional digits
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected a decimal string, got {type(value).__name__}")

    pattern = DECIMAL_STRING if signed else UNSIGNED_DECIMAL_STRING
    if not pattern.fullmatch(value):
        raise ValueError(f"Invalid amount format '{value}'")
    return Decimal(value)


def parse_amount(amount_str: str) -> Decimal:
    """Parse a human-entered amount string into a Decimal.

    Handles "1234.56", "R1,234.56", "-$12", "(12.50)" and similar. Used for
    command line options, not for batch payloads.

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = amount_str.strip()

    is_negative = False
    if cleaned.startswith("(") and cleaned.endswith(")"):
        is_negative = True
        cleaned = cleaned[1:-1]
    if cleaned.startswith("-"):
        is_negative = not is_negative
        cleaned = cleaned[1:]

    cleaned = re.sub(r"^(R|ZAR|\$|€|£)\s*", "", cleaned.strip())
    cleaned = cleaned.replace(",", "").replace(" ", "")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'") from None
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount

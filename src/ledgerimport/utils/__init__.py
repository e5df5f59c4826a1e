"""Utility functions for ledgerimport."""

from ledgerimport.utils.date_parser import parse_date, parse_iso_date
from ledgerimport.utils.amount_parser import parse_amount, parse_decimal_string

__all__ = ["parse_date", "parse_iso_date", "parse_amount", "parse_decimal_string"]

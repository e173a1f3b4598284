"""Utility functions for banktxn."""

from banktxn.utils.amount_parser import parse_amount, sanitize_amount
from banktxn.utils.csv_reader import read_csv
from banktxn.utils.date_format import DateFormatter, DateFormatterCache, simplify_pattern
from banktxn.utils.date_parser import parse_date

__all__ = [
    "parse_amount",
    "sanitize_amount",
    "read_csv",
    "DateFormatter",
    "DateFormatterCache",
    "simplify_pattern",
    "parse_date",
]

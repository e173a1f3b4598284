"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

_NOT_DIGIT_OR_POINT = re.compile(r"[^0-9.]")
_CENTS = Decimal("0.01")


def sanitize_amount(amount_str: str) -> str:
    """Strip every character that is not a digit or a decimal point.

    Currency symbols, thousands separators, whitespace, parentheses and minus
    signs are all removed. The direction of a transaction never comes from the
    amount text.
    """
    return _NOT_DIGIT_OR_POINT.sub("", amount_str)


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a positive two-place Decimal.

    Handles various formats:
    - "123.45"
    - "$1,234.56"
    - "-123.45" (parsed as 123.45)
    - "(123.45)" (parsed as 123.45)
    - "฿ 5,000"

    Args:
        amount_str: Amount string

    Returns:
        Decimal magnitude quantized to cents

    Raises:
        ValueError: If amount string is blank or not a number once sanitized
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = sanitize_amount(amount_str)
    try:
        return Decimal(cleaned).quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e

"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

# Brokerage exports use "--" for "not applicable" in numeric columns
_PLACEHOLDERS = {"", "--"}


def parse_amount(amount_str: str) -> Decimal:
    """Parse a numeric export field into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)
    - "" or "--" (parsed as zero; common on non-trade rows)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    amount_str = (amount_str or "").strip()
    if amount_str in _PLACEHOLDERS:
        return Decimal("0")

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and thousands separators
    cleaned = re.sub(r"[$,]", "", amount_str).strip()
    if not cleaned:
        return Decimal("0")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount

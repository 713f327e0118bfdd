"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from timebill.utils.money import quantize_hours


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "1,234.56"
    - "-123.45"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥]", "", amount_str)

    # Remove commas
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount


def parse_hours(hours_str: str) -> Decimal:
    """Parse an hour quantity such as "1.5" or "0.25".

    Quarter-hour increments are customary but any positive value is accepted.

    Raises:
        ValueError: If the value cannot be parsed or is not positive
    """
    hours = quantize_hours(parse_amount(hours_str))
    if hours <= 0:
        raise ValueError(f"Hours must be greater than zero (got {hours})")
    return hours

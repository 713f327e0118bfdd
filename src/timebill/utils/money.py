"""Money and hour quantities: rounding and display formatting.

All currency rounding goes through :func:`money` so that a printed total is
always the same rounding of the same exact product as the stored total.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

CURRENCY_SYMBOL = "$"
CENT = Decimal("0.01")
# Hours are kept to 1/10000 h so stored JSON numbers reload exactly
HOUR_STEP = Decimal("0.0001")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert a number to Decimal without binary float artifacts.

    Floats go through ``str`` so that ``1.1`` becomes ``Decimal("1.1")``.

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise ValueError(f"Not a number: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def money(value: Decimal | int | float | str) -> Decimal:
    """Round a currency value to cents (half up)."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def quantize_hours(hours: Decimal | int | float | str) -> Decimal:
    """Round an hour quantity to the stored precision (half up)."""
    value = to_decimal(hours)
    if value.as_tuple().exponent < HOUR_STEP.as_tuple().exponent:
        value = value.quantize(HOUR_STEP, rounding=ROUND_HALF_UP)
    return value


def line_amount(hours: Decimal, rate: Decimal) -> Decimal:
    """Amount billed for ``hours`` at ``rate``, rounded once to cents."""
    return money(to_decimal(hours) * to_decimal(rate))


def format_hours(hours: Decimal | int | float | str) -> str:
    """Format an hour quantity with exactly two decimals, e.g. ``3.50``."""
    return f"{to_decimal(hours).quantize(CENT, rounding=ROUND_HALF_UP)}"


def format_currency(value: Decimal | int | float | str) -> str:
    """Format a currency value, e.g. ``$1,234.50`` or ``-$5.00``."""
    amount = money(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(amount):,.2f}"

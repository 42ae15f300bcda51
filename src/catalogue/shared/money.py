"""Monetary amounts as ``Decimal``.

Amounts are never floats inside the domain: floats are converted through
their string form so that ``999.99`` stays ``Decimal("999.99")``.
"""

from decimal import Decimal

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")


def to_money(value: Decimal | int | float | str) -> Decimal:
    """Convert ``value`` to a ``Decimal`` amount."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Boolean is not a monetary amount")
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def clamp_non_negative(amount: Decimal) -> Decimal:
    return amount if amount > ZERO else ZERO


def clamp_percentage(value: Decimal | int | float | str) -> Decimal:
    """Clamp a percentage into the inclusive range [0, 100]."""
    return min(max(to_money(value), ZERO), HUNDRED)


def format_money(amount: Decimal) -> str:
    """Render an amount with two decimals, e.g. ``$1999.98``."""
    return f"${amount.quantize(CENT)}"

"""Unit counts for stock and order lines.

Counts are whole numbers. ``bool`` is an ``int`` subclass in Python, but a
flag is never a count, so it is refused along with floats and strings.
"""

from protean.exceptions import ValidationError


def is_whole_quantity(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def whole_quantity(value, field_name: str = "quantity") -> int:
    """Return ``value`` unchanged, or raise if it is not a whole number."""
    if not is_whole_quantity(value):
        raise ValidationError({field_name: [f"Must be a whole number, got {value!r}"]})
    return value

"""Discount strategies.

A discount turns a line's original price and quantity into the price the
customer pays for that line. Strategies are pure and never return a negative
amount. Out-of-range settings are clamped when the strategy is built, not
rejected:

    FixedDiscount(amount=-5)          -> amount 0
    PercentageDiscount(percentage=150) -> percentage 100
    BulkDiscount(minimum_quantity=0)   -> minimum_quantity 1

Applying a discount to an order line always starts from the line's original
price, so a second discount replaces the first instead of compounding it.
Use ``StackedDiscount`` to compound on purpose.
"""

from collections.abc import Callable
from decimal import Decimal
from typing import Protocol, runtime_checkable

from catalogue.shared.money import HUNDRED, ZERO, clamp_non_negative, clamp_percentage, to_money
from pydantic import BaseModel, field_validator


@runtime_checkable
class DiscountStrategy(Protocol):
    def apply(self, original_price: Decimal, quantity: int = 1) -> Decimal: ...


DiscountFunction = Callable[[Decimal, int], Decimal]


def as_discount_function(discount: DiscountStrategy | DiscountFunction) -> DiscountFunction:
    """Accept either a strategy object or a bare ``(price, quantity)`` callable."""
    if isinstance(discount, DiscountStrategy):
        return discount.apply
    if callable(discount):
        return discount
    raise TypeError(f"Not a discount: {discount!r}")


class FixedDiscount(BaseModel):
    """Takes a flat amount off every unit."""

    model_config = {"frozen": True}

    amount: Decimal = ZERO

    @field_validator("amount")
    @classmethod
    def amount_is_not_negative(cls, value: Decimal) -> Decimal:
        return clamp_non_negative(value)

    def apply(self, original_price: Decimal, quantity: int = 1) -> Decimal:
        return clamp_non_negative(to_money(original_price) - self.amount * quantity)


class PercentageDiscount(BaseModel):
    """Takes a percentage off the line."""

    model_config = {"frozen": True}

    percentage: Decimal = ZERO

    @field_validator("percentage")
    @classmethod
    def percentage_in_range(cls, value: Decimal) -> Decimal:
        return clamp_percentage(value)

    def apply(self, original_price: Decimal, quantity: int = 1) -> Decimal:
        return clamp_non_negative(to_money(original_price) * (1 - self.percentage / HUNDRED))


class BulkDiscount(BaseModel):
    """Takes a percentage off once the line reaches a minimum quantity."""

    model_config = {"frozen": True}

    minimum_quantity: int = 1
    percentage: Decimal = ZERO

    @field_validator("minimum_quantity")
    @classmethod
    def minimum_quantity_is_positive(cls, value: int) -> int:
        return value if value > 0 else 1

    @field_validator("percentage")
    @classmethod
    def percentage_in_range(cls, value: Decimal) -> Decimal:
        return clamp_percentage(value)

    def apply(self, original_price: Decimal, quantity: int = 1) -> Decimal:
        original_price = to_money(original_price)
        if quantity >= self.minimum_quantity:
            return clamp_non_negative(original_price * (1 - self.percentage / HUNDRED))
        return original_price


class StackedDiscount:
    """Feeds each discount the previous one's result, in order."""

    def __init__(self, *discounts: DiscountStrategy | DiscountFunction) -> None:
        self._functions = [as_discount_function(discount) for discount in discounts]

    def apply(self, original_price: Decimal, quantity: int = 1) -> Decimal:
        price = to_money(original_price)
        for function in self._functions:
            price = function(price, quantity)
        return clamp_non_negative(price)

"""Product aggregate: price, stock and out-of-stock notification.

A Product is created once when the catalog is loaded and is shared by
reference with every order line that sells it. Its stock can only move
through two operations:

    deduct_stock(q)   succeeds iff q <= stock, otherwise leaves stock alone
    restore_stock(q)  always succeeds, no upper bound

Reaching exactly zero through a deduction notifies every registered
out-of-stock listener, synchronously and in registration order.

Variants (physical, digital) share the common fields and differ only in the
value object they carry for ``describe()``.
"""

from enum import Enum
from typing import Protocol, runtime_checkable

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Decimal, Float, Integer, String, ValueObject
from pydantic import PrivateAttr

from catalogue.domain import catalogue, logger
from catalogue.shared.money import to_money
from catalogue.shared.quantity import whole_quantity


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ProductKind(Enum):
    PHYSICAL = "Physical"
    DIGITAL = "Digital"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@catalogue.value_object(part_of="Product")
class PhysicalAttributes:
    weight_kg = Float(required=True, min_value=0.0)


@catalogue.value_object(part_of="Product")
class DigitalAttributes:
    download_link = String(required=True, max_length=500)


# Name of the value object field each kind must carry
_ATTRIBUTES_FIELD_FOR_KIND = {
    ProductKind.PHYSICAL: "physical_attributes",
    ProductKind.DIGITAL: "digital_attributes",
}


@runtime_checkable
class OutOfStockListener(Protocol):
    """Anything that wants to hear about a product selling out."""

    def on_out_of_stock(self, product_name: str) -> None: ...


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@catalogue.aggregate
class Product:
    """A sellable item with a unit price and a non-negative stock level."""

    name = String(required=True, max_length=255)
    unit_price = Decimal(required=True, min_value=0)
    stock_quantity = Integer(default=0, min_value=0)
    kind = String(choices=ProductKind, default=ProductKind.PHYSICAL.value)
    physical_attributes = ValueObject(PhysicalAttributes)
    digital_attributes = ValueObject(DigitalAttributes)

    # Runtime collaborators, not part of the product's state
    _listeners = PrivateAttr(default_factory=list)
    _logger = PrivateAttr(default=None)

    @invariant.post
    def carries_attributes_of_its_kind(self):
        field_name = _ATTRIBUTES_FIELD_FOR_KIND[ProductKind(self.kind)]
        if getattr(self, field_name) is None:
            raise ValidationError({field_name: [f"{self.kind} products require {field_name}"]})

    # -------------------------------------------------------------------
    # Factory methods
    # -------------------------------------------------------------------
    @classmethod
    def physical(cls, name, unit_price, stock_quantity, weight_kg, logger=None):
        product = cls(
            name=name,
            unit_price=to_money(unit_price),
            stock_quantity=whole_quantity(stock_quantity, "stock_quantity"),
            kind=ProductKind.PHYSICAL.value,
            physical_attributes=PhysicalAttributes(weight_kg=weight_kg),
        )
        product._logger = logger
        return product

    @classmethod
    def digital(cls, name, unit_price, stock_quantity, download_link, logger=None):
        product = cls(
            name=name,
            unit_price=to_money(unit_price),
            stock_quantity=whole_quantity(stock_quantity, "stock_quantity"),
            kind=ProductKind.DIGITAL.value,
            digital_attributes=DigitalAttributes(download_link=download_link),
        )
        product._logger = logger
        return product

    @property
    def attributes(self):
        """The value object matching the product's kind."""
        return getattr(self, _ATTRIBUTES_FIELD_FOR_KIND[ProductKind(self.kind)])

    @property
    def log(self):
        return self._logger if self._logger is not None else logger

    # -------------------------------------------------------------------
    # Out-of-stock listeners
    # -------------------------------------------------------------------
    def add_out_of_stock_listener(self, listener: OutOfStockListener) -> None:
        self._listeners.append(listener)

    def remove_out_of_stock_listener(self, listener: OutOfStockListener) -> None:
        self._listeners.remove(listener)

    @property
    def out_of_stock_listeners(self) -> tuple[OutOfStockListener, ...]:
        return tuple(self._listeners)

    def _notify_out_of_stock(self) -> None:
        for listener in list(self._listeners):
            listener.on_out_of_stock(self.name)

    # -------------------------------------------------------------------
    # Stock movements
    # -------------------------------------------------------------------
    def deduct_stock(self, quantity) -> bool:
        """Take ``quantity`` units out of stock.

        Returns False and leaves stock untouched when there is not enough.
        """
        whole_quantity(quantity)
        if quantity < 0:
            raise ValidationError({"quantity": [f"Must not be negative, got {quantity}"]})
        if quantity > self.stock_quantity:
            return False

        self.stock_quantity -= quantity
        if self.stock_quantity == 0:
            self._notify_out_of_stock()
        return True

    def restore_stock(self, quantity) -> None:
        """Put ``quantity`` units back into stock."""
        whole_quantity(quantity)
        if quantity < 0:
            raise ValidationError({"quantity": [f"Must not be negative, got {quantity}"]})

        self.stock_quantity += quantity
        self.log.info(
            f"Restored {quantity} units to {self.name}. New stock: {self.stock_quantity}",
            product=self.name,
            quantity=quantity,
            new_stock=self.stock_quantity,
        )

    # -------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------
    def describe(self) -> str:
        return _DESCRIBERS[ProductKind(self.kind)](self)

    def __repr__(self) -> str:
        return f"<Product {self.name!r} {self.kind} stock={self.stock_quantity}>"


def _describe_physical(product: Product) -> str:
    return (
        f"Physical Product: {product.name}, Price: ${product.unit_price}, "
        f"Stock: {product.stock_quantity}, Weight: {product.physical_attributes.weight_kg}kg"
    )


def _describe_digital(product: Product) -> str:
    return (
        f"Digital Product: {product.name}, Price: ${product.unit_price}, "
        f"Stock: {product.stock_quantity}, Download Link: {product.digital_attributes.download_link}"
    )


_DESCRIBERS = {
    ProductKind.PHYSICAL: _describe_physical,
    ProductKind.DIGITAL: _describe_digital,
}

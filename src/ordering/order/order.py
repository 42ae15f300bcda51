"""Order aggregate: the order state machine with stock deduction and rollback.

State Machine (3 states):
    CREATED → COMPLETED → CANCELLED

    CREATED    lines can be added and discounted; process() charges it
    COMPLETED  stock deducted and payment approved; cancel() undoes it
    CANCELLED  terminal, stock restored

There is no CREATED → CANCELLED path: an order that was never fulfilled is
simply left unprocessed.

Every operation reports failure by returning False and logging the reason.
A failed process() leaves the status CREATED and undoes its deductions by
compensating restoration rather than a transaction. Under the default
RollbackPolicy.ALL_LINES a shortfall restores every line, including lines
that were never deducted in that pass.

Order lines hold a live reference to the catalog Product they sell. The
model is single-threaded. Nothing locks a Product between the stock check in
add_item() and the deduction in process(), so two orders sharing products
must not be processed concurrently without an outer lock.
"""

from collections.abc import Callable
from enum import Enum

from catalogue.shared.money import ZERO, format_money
from catalogue.shared.quantity import is_whole_quantity, whole_quantity
from protean.fields import Decimal, HasMany, Integer, String
from pydantic import PrivateAttr

from ordering.domain import logger, ordering
from ordering.pricing.discounts import DiscountFunction, DiscountStrategy, as_discount_function


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    CREATED = "Created"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class RollbackPolicy(Enum):
    """Which lines get their stock back when a deduction fails mid-way.

    ALL_LINES restores every line, including lines the failed pass never
    reached, so it can credit stock that was never taken. DEDUCTED_ONLY
    restores just the lines deducted before the failure.
    """

    ALL_LINES = "All_Lines"
    DEDUCTED_ONLY = "Deducted_Only"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.CREATED: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: {OrderStatus.CANCELLED},
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A line of an order: one product, a quantity and its price.

    The original price is fixed when the line is created; later price or
    stock changes on the product do not touch it. Only the discounted price
    moves, and always from the original price.
    """

    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    original_price = Decimal(required=True, min_value=0)
    discounted_price = Decimal(required=True)

    # The catalog product itself, shared with every other line selling it
    _product = PrivateAttr(default=None)

    @classmethod
    def create(cls, product, quantity):
        whole_quantity(quantity)
        original_price = product.unit_price * quantity
        item = cls(
            product_name=product.name,
            quantity=quantity,
            original_price=original_price,
            discounted_price=original_price,
        )
        item._product = product
        return item

    @property
    def product(self):
        return self._product

    def apply_discount(self, discount: DiscountStrategy | DiscountFunction) -> None:
        self.discounted_price = as_discount_function(discount)(self.original_price, self.quantity)

    def __repr__(self) -> str:
        return f"<OrderItem {self.product_name!r} x{self.quantity} {self.discounted_price}>"


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_name = String(required=True, max_length=255)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.CREATED.value,
    )
    rollback_policy = String(
        choices=RollbackPolicy,
        default=RollbackPolicy.ALL_LINES.value,
    )
    items = HasMany(OrderItem)

    _customer = PrivateAttr(default=None)
    _logger = PrivateAttr(default=None)

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        customer,
        rollback_policy: RollbackPolicy = RollbackPolicy.ALL_LINES,
        logger=None,
        id_factory: Callable[[], str] | None = None,
    ):
        """Open an empty order for ``customer``.

        ``logger`` replaces the module logger for everything this order
        reports, and ``id_factory`` replaces the generated identity.
        """
        identity = {"id": id_factory()} if id_factory is not None else {}
        order = cls(
            customer_name=customer.display_name,
            rollback_policy=rollback_policy.value,
            items=[],
            **identity,
        )
        order._customer = customer
        order._logger = logger
        return order

    @property
    def customer(self):
        return self._customer

    @property
    def log(self):
        return self._logger if self._logger is not None else logger

    @property
    def total_price(self):
        return sum((item.discounted_price for item in self.items), ZERO)

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _can_transition(self, target_status: OrderStatus) -> bool:
        return target_status in _VALID_TRANSITIONS.get(OrderStatus(self.status), set())

    # -------------------------------------------------------------------
    # Order modification (only in CREATED state)
    # -------------------------------------------------------------------
    def add_item(self, product, quantity) -> bool:
        """Append a line if the product currently has ``quantity`` in stock.

        The stock check is a snapshot, not a reservation: stock is only taken
        when the order is processed.
        """
        if OrderStatus(self.status) != OrderStatus.CREATED:
            self.log.warning(
                f"Cannot add {product.name} to order {self.id}. Current status: {self.status}",
                order_id=self.id,
                product=product.name,
                status=self.status,
            )
            return False
        if not is_whole_quantity(quantity) or quantity <= 0:
            self.log.warning(
                f"Failed to add item: {product.name}. Quantity must be a positive whole number.",
                order_id=self.id,
                product=product.name,
                quantity=quantity,
            )
            return False
        if product.stock_quantity < quantity:
            self.log.warning(
                f"Failed to add item: {product.name}. Insufficient stock.",
                order_id=self.id,
                product=product.name,
                requested=quantity,
                available=product.stock_quantity,
            )
            return False

        self.add_items(OrderItem.create(product, quantity))
        return True

    def apply_discount(self, discount: DiscountStrategy | DiscountFunction) -> bool:
        """Reprice every line with ``discount``, replacing earlier discounts."""
        if OrderStatus(self.status) != OrderStatus.CREATED:
            self.log.warning(
                f"Cannot apply discount to order {self.id}. Current status: {self.status}",
                order_id=self.id,
                status=self.status,
            )
            return False

        for item in self.items:
            item.apply_discount(discount)
        return True

    # -------------------------------------------------------------------
    # Order lifecycle transitions
    # -------------------------------------------------------------------
    def process(self, gateway) -> bool:
        """Deduct stock for every line, then charge the total.

        Any shortfall or a declined payment puts the stock back and leaves
        the order CREATED, so it can be retried.
        """
        if not self._can_transition(OrderStatus.COMPLETED):
            self.log.warning(
                f"Cannot process order {self.id}. Current status: {self.status}",
                order_id=self.id,
                status=self.status,
            )
            return False

        deducted = []
        for item in self.items:
            if not item.product.deduct_stock(item.quantity):
                self.log.warning(
                    f"Failed to process order {self.id}. Insufficient stock for {item.product_name}",
                    order_id=self.id,
                    product=item.product_name,
                )
                self._rollback(deducted)
                return False
            deducted.append(item)

        total = self.total_price
        if not gateway.process(total):
            self._restore_all_stock()
            self.log.warning(
                f"Payment failed for order {self.id}. All stock has been restored.",
                order_id=self.id,
                amount=str(total),
            )
            return False

        self.status = OrderStatus.COMPLETED.value
        self.log.info(
            f"Order {self.id} processed successfully. Total amount: {format_money(total)}",
            order_id=self.id,
            amount=str(total),
        )
        return True

    def cancel(self) -> bool:
        """Cancel a completed order and put its stock back."""
        if not self._can_transition(OrderStatus.CANCELLED):
            self.log.warning(
                f"Cannot cancel order {self.id}. Current status: {self.status}",
                order_id=self.id,
                status=self.status,
            )
            return False

        self._restore_all_stock()
        self.status = OrderStatus.CANCELLED.value
        self.log.info(f"Order {self.id} cancelled successfully", order_id=self.id)
        return True

    # -------------------------------------------------------------------
    # Compensation
    # -------------------------------------------------------------------
    def _rollback(self, deducted) -> None:
        if RollbackPolicy(self.rollback_policy) is RollbackPolicy.DEDUCTED_ONLY:
            for item in deducted:
                item.product.restore_stock(item.quantity)
        else:
            self._restore_all_stock()

    def _restore_all_stock(self) -> None:
        for item in self.items:
            item.product.restore_stock(item.quantity)

    def __repr__(self) -> str:
        return f"<Order {self.id} {self.status} lines={len(self.items)}>"

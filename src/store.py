"""Storefront facade.

Ties the catalog, the customers and the order history together, the way a
shop front end or a script would use the domain. The catalogue and ordering
domains must be initialized, and the work done inside a domain context:

    catalogue.init()
    ordering.init()

    with ordering.domain_context():
        store = Store.with_defaults()
        order = store.open_order(store.customers[0])
        order.add_item(store.catalog["Smartphone"], 2)
        store.checkout(order)

``checkout`` charges through the gateway selected by ``PAYMENT_GATEWAY``
unless one is passed in.
"""

from catalogue.catalog import Catalog
from catalogue.product.alerts import OutOfStockAlert
from identity.customer.customer import Customer
from ordering.order.order import Order, OrderStatus, RollbackPolicy
from payments.gateway import get_gateway
from payments.gateway.port import PaymentGateway
from shared.logging import get_logger


class Store:
    def __init__(self, catalog: Catalog | None = None, logger=None) -> None:
        self._logger = logger if logger is not None else get_logger(__name__)
        self.catalog = catalog if catalog is not None else Catalog()
        self.out_of_stock_alert = OutOfStockAlert(logger=self._logger)
        self.catalog.watch(self.out_of_stock_alert)
        self._customers: list[Customer] = []
        self._orders: list[Order] = []

    @classmethod
    def with_defaults(cls, logger=None) -> "Store":
        """A store stocked with the default catalog and one customer."""
        store = cls(Catalog.default(), logger=logger)
        store.register_customer("John", "Doe")
        return store

    @property
    def customers(self) -> tuple[Customer, ...]:
        return tuple(self._customers)

    @property
    def orders(self) -> tuple[Order, ...]:
        """Every order that was checked out, including later cancellations."""
        return tuple(self._orders)

    def register_customer(self, first_name: str, last_name: str) -> Customer:
        customer = Customer(first_name=first_name, last_name=last_name)
        self._customers.append(customer)
        self._logger.info(f"Customer: {customer.display_name}", customer=customer.display_name)
        return customer

    def open_order(self, customer: Customer, rollback_policy: RollbackPolicy = RollbackPolicy.ALL_LINES) -> Order:
        return Order.create(customer, rollback_policy=rollback_policy, logger=self._logger)

    def checkout(self, order: Order, gateway: PaymentGateway | None = None) -> bool:
        """Process ``order`` and keep it in the history when it completes."""
        if gateway is None:
            gateway = get_gateway()
        if not order.process(gateway):
            return False
        if order not in self._orders:
            self._orders.append(order)
        return True

    def cancel(self, order: Order) -> bool:
        return order.cancel()

    def orders_with_status(self, status: OrderStatus) -> list[Order]:
        return [order for order in self._orders if order.status == status.value]

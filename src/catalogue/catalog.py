"""In-memory product catalog.

The catalog is the data source orders read products from. It owns the
products for the life of the process and hands out shared references; it
never copies them, so stock changes made through an order are visible here.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from shared.logging import get_logger

from catalogue.product.product import OutOfStockListener, Product
from catalogue.product.schemas import ProductRecord

logger = get_logger(__name__)

DEFAULT_RECORDS = (
    {"kind": "physical", "name": "Smartphone", "price": "999.99", "stock": 10, "weight_kg": 0.2},
    {"kind": "physical", "name": "Laptop", "price": "1499.99", "stock": 5, "weight_kg": 2.0},
    {
        "kind": "digital",
        "name": "Python Programming Guide",
        "price": "29.99",
        "stock": 100,
        "download_link": "download.example.com/ebook",
    },
)


def product_from_record(record: ProductRecord, logger=None) -> Product:
    if record.kind == "physical":
        return Product.physical(record.name, record.price, record.stock, record.weight_kg, logger=logger)
    return Product.digital(record.name, record.price, record.stock, record.download_link, logger=logger)


class Catalog:
    """Products keyed by name, in insertion order.

    Listeners passed at construction are attached to every product that is
    added afterwards.
    """

    def __init__(self, listeners: Iterable[OutOfStockListener] = ()) -> None:
        self._products: dict[str, Product] = {}
        self._listeners = list(listeners)

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        listeners: Iterable[OutOfStockListener] = (),
        logger=None,
    ) -> "Catalog":
        """Build a catalog from raw records, validating each one."""
        catalog = cls(listeners=listeners)
        for raw in records:
            catalog.add(product_from_record(ProductRecord.model_validate(raw), logger=logger))
        return catalog

    @classmethod
    def default(cls, listeners: Iterable[OutOfStockListener] = ()) -> "Catalog":
        return cls.from_records(DEFAULT_RECORDS, listeners=listeners)

    def add(self, product: Product) -> Product:
        if product.name in self._products:
            raise ValueError(f"Product already in catalog: {product.name}")
        for listener in self._listeners:
            product.add_out_of_stock_listener(listener)
        self._products[product.name] = product
        logger.debug("Product added to catalog", product=product.name, stock=product.stock_quantity)
        return product

    def watch(self, listener: OutOfStockListener) -> None:
        """Attach ``listener`` to every current and future product."""
        self._listeners.append(listener)
        for product in self._products.values():
            product.add_out_of_stock_listener(listener)

    def get(self, name: str) -> Product | None:
        return self._products.get(name)

    def __getitem__(self, name: str) -> Product:
        return self._products[name]

    def __contains__(self, name: object) -> bool:
        return name in self._products

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products.values())

    def __len__(self) -> int:
        return len(self._products)

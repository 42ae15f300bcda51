"""Out-of-stock listeners."""

from shared.logging import get_logger


class OutOfStockAlert:
    """Logs a warning whenever a product it watches sells out."""

    def __init__(self, logger=None) -> None:
        self._logger = logger if logger is not None else get_logger(__name__)
        self.alerted: list[str] = []

    def on_out_of_stock(self, product_name: str) -> None:
        self.alerted.append(product_name)
        self._logger.warning(f"Alert: {product_name} is out of stock!", product=product_name)

"""Simulated card and wallet gateways.

Both adapters log the charge and approve it. They stand in for real
providers, which are out of scope.
"""

from decimal import Decimal

from catalogue.shared.money import format_money
from shared.logging import get_logger

from payments.gateway.port import PaymentGateway


class _LoggingGateway(PaymentGateway):
    method_label = ""

    def __init__(self, logger=None) -> None:
        self._logger = logger if logger is not None else get_logger(__name__)

    def process(self, amount: Decimal) -> bool:
        self._logger.info(
            f"Processing {self.method_label} payment for {format_money(amount)}",
            payment_method=self.method_label,
            amount=str(amount),
        )
        return True


class CreditCardGateway(_LoggingGateway):
    method_label = "credit card"


class PayPalGateway(_LoggingGateway):
    method_label = "PayPal"

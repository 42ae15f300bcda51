"""Configurable fake payment gateway for development and testing.

The adapter approves or declines every charge according to its current
configuration and records each call, so tests can assert on what was
charged without any external service.
"""

from decimal import Decimal

from payments.gateway.port import PaymentGateway


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self, should_succeed: bool = True) -> None:
        self.should_succeed: bool = should_succeed
        self.calls: list[Decimal] = []

    def configure(self, should_succeed: bool) -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed

    def process(self, amount: Decimal) -> bool:
        self.calls.append(amount)
        return self.should_succeed

"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations. The adapter
is chosen by the PAYMENT_GATEWAY environment variable:

- ``fake`` (default): FakeGateway, approves everything unless configured
- ``credit_card``: CreditCardGateway
- ``paypal``: PayPalGateway
"""

import os

from payments.gateway.card_adapters import CreditCardGateway, PayPalGateway
from payments.gateway.fake_adapter import FakeGateway
from payments.gateway.port import PaymentGateway

_ADAPTERS = {
    "fake": FakeGateway,
    "credit_card": CreditCardGateway,
    "paypal": PayPalGateway,
}

_current_gateway: PaymentGateway | None = None


def build_gateway(name: str) -> PaymentGateway:
    """Build a fresh adapter by name."""
    try:
        adapter = _ADAPTERS[name]
    except KeyError:
        raise ValueError(f"Unknown payment gateway: {name}") from None
    return adapter()


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway (singleton)."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = build_gateway(os.environ.get("PAYMENT_GATEWAY", "fake"))
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None


__all__ = [
    "CreditCardGateway",
    "FakeGateway",
    "PayPalGateway",
    "PaymentGateway",
    "build_gateway",
    "get_gateway",
    "reset_gateway",
    "set_gateway",
]

"""Payment gateway port (abstract interface).

Orders charge through whatever ``PaymentGateway`` the caller hands them and
never learn which concrete adapter they got. Gateways answer with a plain
approval flag: a decline is a normal outcome, not an exception.
"""

from abc import ABC, abstractmethod
from decimal import Decimal


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def process(self, amount: Decimal) -> bool:
        """Charge ``amount``. Returns True when the payment is approved."""
        ...

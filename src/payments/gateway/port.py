"""Payment gateway port (abstract interface).

Defines the contract that every gateway adapter fulfils. Calling code only
ever talks to ``PaymentGateway`` and ``PaymentRequest``; the Null Gateway is
one more adapter, not a special case.
"""

from abc import ABC, abstractmethod

from payments.payable import Payable


class PaymentRequest(ABC):
    """What a gateway hands back to start a payment for a payable."""

    @abstractmethod
    def will_redirect(self) -> bool:
        """Whether the customer leaves the shop to complete the payment."""
        ...

    @abstractmethod
    def html_snippet(self, **options) -> str:
        """Markup to embed on the checkout page (a form, a button, a script)."""
        ...

    def is_placeholder(self) -> bool:
        """True when no real payment processing stands behind the request."""
        return False


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @classmethod
    @abstractmethod
    def get_name(cls) -> str:
        """Human readable name, e.g. for a gateway picker."""
        ...

    @abstractmethod
    def is_offline(self) -> bool:
        """Whether a payment completes without a live round-trip to the gateway."""
        ...

    @abstractmethod
    def create_payment_request(
        self,
        payable: Payable,
        timeout: int | None = None,
        **options,
    ) -> PaymentRequest:
        """Create a payment request for ``payable``.

        ``timeout`` is the payment method's configured timeout in seconds;
        gateways apply their own retry policy around it.
        """
        ...

"""Configurable fake payment gateway for development and testing.

This adapter simulates a hosted-checkout gateway without any external calls:
every payment request redirects to a fake checkout URL. It records each call
so tests can assert on what reached the gateway, including the timeout passed
through from the payment method.
"""

from dataclasses import dataclass, field
from uuid import uuid4

from payments.gateway.port import PaymentGateway, PaymentRequest
from payments.payable import Payable

FAKE_CHECKOUT_URL = "https://checkout.fake-gateway.test"


@dataclass(frozen=True)
class CheckoutRequest(PaymentRequest):
    """Redirect to the gateway's hosted checkout page."""

    payable: Payable
    checkout_url: str
    session_id: str = field(default_factory=lambda: f"fake_cs_{uuid4().hex[:12]}")

    def will_redirect(self) -> bool:
        return True

    def html_snippet(self, **options) -> str:
        label = options.get("button_label", "Pay now")
        return f'<a class="fake-gateway-checkout" href="{self.checkout_url}?session={self.session_id}">{label}</a>'


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    IDENTIFIER = "fake"

    def __init__(self) -> None:
        self.offline: bool = False
        self.calls: list[dict] = []

    @classmethod
    def get_name(cls) -> str:
        return "Fake Gateway"

    def configure(self, offline: bool) -> None:
        """Configure gateway behavior at runtime."""
        self.offline = offline

    def is_offline(self) -> bool:
        return self.offline

    def create_payment_request(self, payable: Payable, timeout: int | None = None, **options) -> CheckoutRequest:
        call = {
            "method": "create_payment_request",
            "payable_id": payable.payable_id,
            "amount": payable.amount,
            "currency": payable.currency,
            "timeout": timeout,
            "options": options,
        }
        self.calls.append(call)

        return CheckoutRequest(
            payable=payable,
            checkout_url=f"{FAKE_CHECKOUT_URL}/{payable.payable_type}/{payable.payable_id}",
        )

"""Null gateway: the inert default when no gateway is configured."""

from dataclasses import dataclass

from payments.gateway.port import PaymentGateway, PaymentRequest
from payments.payable import Payable


@dataclass(frozen=True)
class NullRequest(PaymentRequest):
    """Placeholder request: nothing to render, nowhere to redirect.

    Downstream code must treat it as "payment not processed", never as a
    completed transaction.
    """

    payable: Payable

    def will_redirect(self) -> bool:
        return False

    def html_snippet(self, **options) -> str:  # noqa: ARG002
        return ""

    def is_placeholder(self) -> bool:
        return True


class NullGateway(PaymentGateway):
    """Gateway that processes nothing. Always available, never registered explicitly."""

    IDENTIFIER = "null"

    @classmethod
    def get_name(cls) -> str:
        return "Null Gateway"

    def is_offline(self) -> bool:
        return True

    def create_payment_request(self, payable: Payable, timeout: int | None = None, **options) -> NullRequest:  # noqa: ARG002
        return NullRequest(payable=payable)

"""The Payable boundary: anything a payment request can be created for."""

from decimal import Decimal
from typing import Protocol, runtime_checkable


@runtime_checkable
class Payable(Protocol):
    """Minimal view of a payable entity (an order, an invoice, ...).

    Only what gateways need to start a payment is required here; owning
    modules are free to expose more.
    """

    @property
    def payable_id(self) -> str: ...

    @property
    def payable_type(self) -> str: ...

    @property
    def title(self) -> str: ...

    @property
    def amount(self) -> Decimal | float: ...

    @property
    def currency(self) -> str: ...

"""Payments bounded context: payment methods and the gateways behind them.

A payment method binds a display name to a gateway identifier plus free-form
configuration. Identifiers are resolved through the process-wide registry in
``payments.gateway``; methods without a gateway fall back to the inert Null
Gateway.
"""

from protean.domain import Domain
from shared.logging import configure_logging, get_logger

configure_logging()

payments = Domain(name="payments")

logger = get_logger(__name__)

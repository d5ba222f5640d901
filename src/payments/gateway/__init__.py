"""Payment gateway registry.

A process-wide map from gateway identifier to a factory producing a
``PaymentGateway``. Gateways are registered once at startup (or in test
setup); during request handling the map is only read.

Writes are serialised by a lock and replace the map wholesale, so ``resolve``
never needs the lock and never sees a half-applied change.

Startup state: the Null Gateway is bound to ``"null"`` unless
``PAYMENTS_REGISTER_NULL_GATEWAY`` is set to a false value.
"""

import os
import threading
from collections.abc import Callable

import structlog

from payments.gateway.exceptions import UnknownGatewayError
from payments.gateway.null_adapter import NullGateway
from payments.gateway.port import PaymentGateway

logger = structlog.get_logger(__name__)

GatewayFactory = Callable[[], PaymentGateway]

_FALSE_VALUES = {"0", "false", "no", "off"}

_lock = threading.Lock()
_factories: dict[str, GatewayFactory] = {}


def register_null_gateway_enabled() -> bool:
    """Read the startup switch for binding the Null Gateway to ``"null"``."""
    return os.getenv("PAYMENTS_REGISTER_NULL_GATEWAY", "true").strip().lower() not in _FALSE_VALUES


def register(identifier: str, factory: GatewayFactory) -> None:
    """Bind ``identifier`` to ``factory``. An existing binding is replaced."""
    global _factories
    with _lock:
        factories = dict(_factories)
        replaced = identifier in factories
        factories[identifier] = factory
        _factories = factories

    logger.debug("Payment gateway registered", gateway=identifier, replaced=replaced)


def deregister(identifier: str) -> None:
    """Remove the binding for ``identifier``, if any."""
    global _factories
    with _lock:
        if identifier not in _factories:
            return
        factories = dict(_factories)
        del factories[identifier]
        _factories = factories

    logger.debug("Payment gateway deregistered", gateway=identifier)


def resolve(identifier: str) -> PaymentGateway:
    """Return a gateway instance for ``identifier``.

    Raises ``UnknownGatewayError`` when nothing is registered under it.
    """
    factory = _factories.get(identifier)
    if factory is None:
        raise UnknownGatewayError(f"No payment gateway is registered under '{identifier}'")
    return factory()


def ids() -> list[str]:
    """Registered identifiers, in registration order."""
    return list(_factories)


def choices() -> dict[str, str]:
    """Map of identifier to display name, e.g. for an admin dropdown."""
    names = {}
    for identifier, factory in _factories.items():
        get_name = getattr(factory, "get_name", None)
        names[identifier] = get_name() if callable(get_name) else identifier
    return names


def reset() -> None:
    """Drop every binding and restore the startup state."""
    global _factories
    factories: dict[str, GatewayFactory] = {}
    if register_null_gateway_enabled():
        factories[NullGateway.IDENTIFIER] = NullGateway

    with _lock:
        _factories = factories


reset()

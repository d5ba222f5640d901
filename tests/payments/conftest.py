from dataclasses import dataclass
from decimal import Decimal

import pytest


@dataclass(frozen=True)
class Order:
    """Payable stand-in for an order awaiting payment."""

    payable_id: str = "ord-001"
    payable_type: str = "order"
    title: str = "Order #ord-001"
    amount: Decimal = Decimal("59.99")
    currency: str = "EUR"


@pytest.fixture(scope="session")
def _payments_domain():
    """Initialize the payments domain once per session."""
    from payments.domain import payments

    payments.init()
    return payments


@pytest.fixture(scope="session", autouse=True)
def setup_db(_payments_domain):
    from shared.db import drop_db, setup_db

    setup_db(_payments_domain)

    yield

    drop_db(_payments_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_payments_domain):
    """Push domain context before each test, cleanup after."""
    from payments import gateway

    ctx = _payments_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()

    gateway.reset()


@pytest.fixture()
def fake_gateway():
    """A FakeGateway registered under "fake"; every resolve returns this instance."""
    from payments import gateway
    from payments.gateway.fake_adapter import FakeGateway

    instance = FakeGateway()
    gateway.register(FakeGateway.IDENTIFIER, lambda: instance)
    return instance


@pytest.fixture()
def order():
    return Order()

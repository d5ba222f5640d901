"""Tests for the PaymentMethod aggregate root."""

import json

import pytest
from payments.gateway.exceptions import UnknownGatewayError
from payments.gateway.fake_adapter import FakeGateway
from payments.gateway.null_adapter import NullGateway, NullRequest
from payments.method.events import (
    PaymentMethodConfigured,
    PaymentMethodCreated,
    PaymentMethodDetailsUpdated,
    PaymentMethodDisabled,
    PaymentMethodEnabled,
    PaymentMethodGatewayChanged,
)
from payments.method.payment_method import DEFAULT_TIMEOUT, PaymentMethod
from protean.exceptions import ValidationError
from protean.utils.reflection import declared_fields


class TestPaymentMethodConstruction:
    def test_element_type(self):
        from protean.utils import DomainObjects

        assert PaymentMethod.element_type == DomainObjects.AGGREGATE

    def test_declared_fields(self):
        fields = declared_fields(PaymentMethod)
        for name in ["name", "description", "gateway", "configuration", "is_enabled"]:
            assert name in fields

    def test_create_defaults(self):
        method = PaymentMethod.create(name="Cash on delivery")

        assert method.gateway is None
        assert method.is_enabled is True
        assert method.get_configuration() == {}

    def test_name_is_required(self):
        with pytest.raises(ValidationError):
            PaymentMethod.create(name=None)

    def test_missing_configuration_is_stored_as_empty_mapping(self):
        method = PaymentMethod.create(name="Cash", configuration=None)
        assert json.loads(method.configuration) == {}

    def test_configuration_must_be_a_mapping(self):
        with pytest.raises(ValidationError) as exc:
            PaymentMethod.create(name="Cash", configuration=["timeout", 30])
        assert "configuration" in exc.value.messages

    def test_empty_gateway_is_stored_as_none(self):
        assert PaymentMethod.create(name="Cash", gateway="").gateway is None

    def test_create_raises_event(self):
        method = PaymentMethod.create(name="Card", gateway="fake", is_enabled=False)

        assert len(method._events) == 1
        event = method._events[0]
        assert isinstance(event, PaymentMethodCreated)
        assert event.gateway == "fake"
        assert event.is_enabled is False


class TestTimeout:
    def test_default_timeout_for_empty_configuration(self):
        assert PaymentMethod.create(name="Cash", configuration={}).get_timeout() == 180

    def test_configured_timeout(self):
        method = PaymentMethod.create(name="Card", configuration={"timeout": 30})
        assert method.get_timeout() == 30

    def test_numeric_string_timeout(self):
        method = PaymentMethod.create(name="Card", configuration={"timeout": "45"})
        assert method.get_timeout() == 45

    def test_unreadable_timeout_falls_back(self):
        method = PaymentMethod.create(name="Card", configuration={"timeout": "soon"})
        assert method.get_timeout() == DEFAULT_TIMEOUT

    @pytest.mark.parametrize("raw", ["not json", "[1, 2]", '"timeout"', ""])
    def test_malformed_configuration_falls_back(self, raw):
        method = PaymentMethod.create(name="Card")
        method.configuration = raw

        assert method.get_configuration() == {}
        assert method.get_timeout() == DEFAULT_TIMEOUT


class TestGatewayResolution:
    def test_no_gateway_gives_null_gateway(self):
        method = PaymentMethod.create(name="Cash")

        gw = method.get_gateway()
        assert isinstance(gw, NullGateway)
        assert gw.is_offline() is True

    def test_no_gateway_does_not_consult_the_registry(self, monkeypatch):
        monkeypatch.setenv("PAYMENTS_REGISTER_NULL_GATEWAY", "false")
        from payments import gateway

        gateway.reset()
        assert isinstance(PaymentMethod.create(name="Cash").get_gateway(), NullGateway)

    def test_registered_gateway(self, fake_gateway):
        method = PaymentMethod.create(name="Card", gateway="fake")
        assert method.get_gateway() is fake_gateway

    def test_unknown_gateway_raises(self):
        method = PaymentMethod.create(name="Card", gateway="paypal")
        with pytest.raises(UnknownGatewayError):
            method.get_gateway()

    def test_null_gateway_request_is_a_placeholder(self, order):
        request = PaymentMethod.create(name="Cash").create_payment_request(order)

        assert isinstance(request, NullRequest)
        assert request.is_placeholder() is True
        assert request.will_redirect() is False

    def test_configured_timeout_reaches_the_gateway(self, fake_gateway, order):
        method = PaymentMethod.create(name="Card", gateway="fake", configuration={"timeout": 30})

        method.create_payment_request(order, locale="en")

        assert fake_gateway.calls[-1]["timeout"] == 30
        assert fake_gateway.calls[-1]["options"] == {"locale": "en"}

    def test_default_timeout_reaches_the_gateway(self, fake_gateway, order):
        PaymentMethod.create(name="Card", gateway=FakeGateway.IDENTIFIER).create_payment_request(order)
        assert fake_gateway.calls[-1]["timeout"] == 180


class TestPaymentMethodMutations:
    def test_update_details(self):
        method = PaymentMethod.create(name="Card")
        method._events.clear()

        method.update_details(description="Visa and Mastercard")
        assert method.name == "Card"
        assert method.description == "Visa and Mastercard"
        assert isinstance(method._events[0], PaymentMethodDetailsUpdated)

    def test_change_gateway(self):
        method = PaymentMethod.create(name="Card")
        method._events.clear()

        method.change_gateway("fake")
        assert method.gateway == "fake"

        event = method._events[0]
        assert isinstance(event, PaymentMethodGatewayChanged)
        assert event.previous_gateway is None
        assert event.gateway == "fake"

    def test_configure_publishes_keys_only(self):
        method = PaymentMethod.create(name="Card")
        method._events.clear()

        method.configure({"timeout": 30, "secret_key": "sk_live_123"})
        assert method.get_timeout() == 30

        event = method._events[0]
        assert isinstance(event, PaymentMethodConfigured)
        assert json.loads(event.configuration_keys) == ["secret_key", "timeout"]
        assert "sk_live_123" not in event.configuration_keys

    def test_disable_and_enable(self):
        method = PaymentMethod.create(name="Card")
        method._events.clear()

        method.disable()
        assert method.is_enabled is False
        assert isinstance(method._events[-1], PaymentMethodDisabled)

        method.enable()
        assert method.is_enabled is True
        assert isinstance(method._events[-1], PaymentMethodEnabled)

    def test_enable_twice_rejected(self):
        with pytest.raises(ValidationError):
            PaymentMethod.create(name="Card").enable()

    def test_disable_twice_rejected(self):
        method = PaymentMethod.create(name="Card", is_enabled=False)
        with pytest.raises(ValidationError):
            method.disable()

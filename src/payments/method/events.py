"""Domain events for the PaymentMethod aggregate.

Configuration values can hold gateway credentials, so no event carries them.
"""

from protean.fields import Boolean, DateTime, Identifier, String, Text

from payments.domain import payments


@payments.event(part_of="PaymentMethod")
class PaymentMethodCreated:
    """A payment method was set up."""

    __version__ = 1

    payment_method_id: Identifier(required=True)
    name: String(required=True)
    gateway: String()
    is_enabled: Boolean(required=True)


@payments.event(part_of="PaymentMethod")
class PaymentMethodDetailsUpdated:
    """A payment method's name or description changed."""

    __version__ = 1

    payment_method_id: Identifier(required=True)
    name: String(required=True)
    description: Text()


@payments.event(part_of="PaymentMethod")
class PaymentMethodGatewayChanged:
    """A payment method was bound to another gateway, or to none."""

    __version__ = 1

    payment_method_id: Identifier(required=True)
    previous_gateway: String()
    gateway: String()


@payments.event(part_of="PaymentMethod")
class PaymentMethodConfigured:
    """A payment method's configuration was replaced."""

    __version__ = 1

    payment_method_id: Identifier(required=True)
    configuration_keys: Text()  # JSON list of configuration keys


@payments.event(part_of="PaymentMethod")
class PaymentMethodEnabled:
    """A payment method became available at checkout."""

    __version__ = 1

    payment_method_id: Identifier(required=True)
    enabled_at: DateTime(required=True)


@payments.event(part_of="PaymentMethod")
class PaymentMethodDisabled:
    """A payment method was withdrawn from checkout."""

    __version__ = 1

    payment_method_id: Identifier(required=True)
    disabled_at: DateTime(required=True)

"""PaymentMethod aggregate root: a named, enable-able binding to a gateway."""

import json
from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, Text

from payments import gateway as gateways
from payments.domain import payments
from payments.gateway.null_adapter import NullGateway
from payments.gateway.port import PaymentGateway, PaymentRequest
from payments.payable import Payable

DEFAULT_TIMEOUT = 180  # seconds


def _dump_configuration(configuration) -> str:
    if configuration is None:
        configuration = {}
    if not isinstance(configuration, dict):
        raise ValidationError({"configuration": ["Configuration must be a mapping"]})
    return json.dumps(configuration)


@payments.aggregate
class PaymentMethod:
    """A payment option offered at checkout, e.g. "Credit Card" or "Cash on delivery".

    ``gateway`` names a registered gateway; leaving it empty selects the Null
    Gateway. ``configuration`` holds gateway settings (timeout, credentials,
    ...) as a JSON object and is never empty-as-null: a missing configuration
    is stored as ``{}``.
    """

    name: String(required=True, max_length=255)
    description: Text()
    gateway: String(max_length=255)
    configuration: Text(default="{}")
    is_enabled: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, gateway=None, description=None, configuration=None, is_enabled=True):
        from payments.method.events import PaymentMethodCreated

        now = datetime.now()
        method = cls(
            name=name,
            description=description,
            gateway=gateway or None,
            configuration=_dump_configuration(configuration),
            is_enabled=is_enabled,
            created_at=now,
            updated_at=now,
        )
        method.raise_(
            PaymentMethodCreated(
                payment_method_id=method.id,
                name=method.name,
                gateway=method.gateway,
                is_enabled=method.is_enabled,
            )
        )
        return method

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_configuration(self) -> dict:
        """The configuration mapping. Anything unreadable reads as ``{}``."""
        if not self.configuration:
            return {}
        try:
            configuration = json.loads(self.configuration)
        except (TypeError, ValueError):
            return {}
        return configuration if isinstance(configuration, dict) else {}

    def get_timeout(self) -> int:
        timeout = self.get_configuration().get("timeout", DEFAULT_TIMEOUT)
        try:
            return int(timeout)
        except (TypeError, ValueError):
            return DEFAULT_TIMEOUT

    def get_gateway(self) -> PaymentGateway:
        """The gateway behind this method.

        Without a gateway identifier the Null Gateway is returned and the
        registry is not consulted. An identifier the registry does not know is
        a configuration error and raises ``UnknownGatewayError``.
        """
        if not self.gateway:
            return NullGateway()
        return gateways.resolve(self.gateway)

    def create_payment_request(self, payable: Payable, **options) -> PaymentRequest:
        return self.get_gateway().create_payment_request(payable, timeout=self.get_timeout(), **options)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def update_details(self, name=None, description=None):
        from payments.method.events import PaymentMethodDetailsUpdated

        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        self.updated_at = datetime.now()

        self.raise_(
            PaymentMethodDetailsUpdated(
                payment_method_id=self.id,
                name=self.name,
                description=self.description,
            )
        )

    def change_gateway(self, gateway):
        from payments.method.events import PaymentMethodGatewayChanged

        previous_gateway = self.gateway
        self.gateway = gateway or None
        self.updated_at = datetime.now()

        self.raise_(
            PaymentMethodGatewayChanged(
                payment_method_id=self.id,
                previous_gateway=previous_gateway,
                gateway=self.gateway,
            )
        )

    def configure(self, configuration):
        """Replace the configuration. Only the keys travel on the event."""
        from payments.method.events import PaymentMethodConfigured

        self.configuration = _dump_configuration(configuration)
        self.updated_at = datetime.now()

        self.raise_(
            PaymentMethodConfigured(
                payment_method_id=self.id,
                configuration_keys=json.dumps(sorted(self.get_configuration())),
            )
        )

    def enable(self):
        from payments.method.events import PaymentMethodEnabled

        if self.is_enabled:
            raise ValidationError({"is_enabled": ["Payment method is already enabled"]})

        self.is_enabled = True
        self.updated_at = datetime.now()

        self.raise_(PaymentMethodEnabled(payment_method_id=self.id, enabled_at=self.updated_at))

    def disable(self):
        from payments.method.events import PaymentMethodDisabled

        if not self.is_enabled:
            raise ValidationError({"is_enabled": ["Payment method is already disabled"]})

        self.is_enabled = False
        self.updated_at = datetime.now()

        self.raise_(PaymentMethodDisabled(payment_method_id=self.id, disabled_at=self.updated_at))

"""Payment method management: commands and handlers."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from payments.domain import payments
from payments.method.payment_method import PaymentMethod


def _parse_configuration(raw):
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationError({"configuration": ["Configuration must be valid JSON"]}) from None


@payments.command(part_of="PaymentMethod")
class CreatePaymentMethod:
    name: String(required=True, max_length=255)
    description: Text()
    gateway: String(max_length=255)
    configuration: Text()  # JSON object
    is_enabled: Boolean(default=True)


@payments.command(part_of="PaymentMethod")
class UpdatePaymentMethod:
    payment_method_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()


@payments.command(part_of="PaymentMethod")
class ChangePaymentGateway:
    payment_method_id: Identifier(required=True)
    gateway: String(max_length=255)


@payments.command(part_of="PaymentMethod")
class ConfigurePaymentMethod:
    payment_method_id: Identifier(required=True)
    configuration: Text()  # JSON object


@payments.command(part_of="PaymentMethod")
class EnablePaymentMethod:
    payment_method_id: Identifier(required=True)


@payments.command(part_of="PaymentMethod")
class DisablePaymentMethod:
    payment_method_id: Identifier(required=True)


@payments.command(part_of="PaymentMethod")
class DeletePaymentMethod:
    payment_method_id: Identifier(required=True)


@payments.command_handler(part_of=PaymentMethod)
class ManagePaymentMethodHandler:
    @handle(CreatePaymentMethod)
    def create_payment_method(self, command):
        method = PaymentMethod.create(
            name=command.name,
            description=command.description,
            gateway=command.gateway,
            configuration=_parse_configuration(command.configuration),
            is_enabled=command.is_enabled,
        )
        current_domain.repository_for(PaymentMethod).add(method)
        return str(method.id)

    @handle(UpdatePaymentMethod)
    def update_payment_method(self, command):
        repo = current_domain.repository_for(PaymentMethod)
        method = repo.get(command.payment_method_id)
        method.update_details(name=command.name, description=command.description)
        repo.add(method)

    @handle(ChangePaymentGateway)
    def change_payment_gateway(self, command):
        repo = current_domain.repository_for(PaymentMethod)
        method = repo.get(command.payment_method_id)
        method.change_gateway(command.gateway)
        repo.add(method)

    @handle(ConfigurePaymentMethod)
    def configure_payment_method(self, command):
        repo = current_domain.repository_for(PaymentMethod)
        method = repo.get(command.payment_method_id)
        method.configure(_parse_configuration(command.configuration))
        repo.add(method)

    @handle(EnablePaymentMethod)
    def enable_payment_method(self, command):
        repo = current_domain.repository_for(PaymentMethod)
        method = repo.get(command.payment_method_id)
        method.enable()
        repo.add(method)

    @handle(DisablePaymentMethod)
    def disable_payment_method(self, command):
        repo = current_domain.repository_for(PaymentMethod)
        method = repo.get(command.payment_method_id)
        method.disable()
        repo.add(method)

    @handle(DeletePaymentMethod)
    def delete_payment_method(self, command):
        repo = current_domain.repository_for(PaymentMethod)
        method = repo.get(command.payment_method_id)
        repo._dao.delete(method)

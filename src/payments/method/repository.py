"""Repository for the PaymentMethod aggregate."""

from payments.domain import payments
from payments.method.payment_method import PaymentMethod

QUERY_LIMIT = 1_000


@payments.repository(part_of=PaymentMethod)
class PaymentMethodRepository:
    def find_enabled(self) -> list[PaymentMethod]:
        return self._dao.query.filter(is_enabled=True).limit(QUERY_LIMIT).all().items

    def find_by_gateway(self, identifier: str) -> list[PaymentMethod]:
        return self._dao.query.filter(gateway=identifier).limit(QUERY_LIMIT).all().items

from datetime import datetime
from typing import Callable

from skybooking.payment.domain.entity import Invoice
from skybooking.payment.domain.enum import PaymentStatus
from skybooking.payment.domain.factory import InvoiceFactory
from skybooking.payment.domain.repository import InvoiceRepository, PaymentRepository
from skybooking.payment.domain.value_object import InvoiceId, PaymentId
from skybooking.reservation.domain.repository import ReservationRepository
from skybooking.reservation.domain.value_object import ReservationId
from skybooking.shared.domain import CustomerId, utc_now
from skybooking.shared.domain.exception import (
    BusinessRuleViolationException,
    ResourceNotFoundException,
)


class GenerateInvoiceService:
    """請求書発行ユースケース

    同じ決済に対しては発行済みの請求書を返す。
    """

    def __init__(
        self,
        payment_repository: PaymentRepository,
        invoice_repository: InvoiceRepository,
        reservation_repository: ReservationRepository,
        factory: InvoiceFactory,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._payment_repository = payment_repository
        self._invoice_repository = invoice_repository
        self._reservation_repository = reservation_repository
        self._factory = factory
        self._clock = clock

    def generate(self, payment_id: str) -> Invoice:
        try:
            key = PaymentId(value=payment_id)
        except ValueError as e:
            raise ResourceNotFoundException(f"Payment not found: {payment_id}") from e
        payment = self._payment_repository.find_by_id(key)
        if payment is None:
            raise ResourceNotFoundException(f"Payment not found: {payment_id}")
        if payment.status not in (PaymentStatus.COMPLETED, PaymentStatus.REFUNDED):
            raise BusinessRuleViolationException(
                f"Cannot invoice payment in {payment.status.value} status"
            )

        existing = self._invoice_repository.find_by_payment(payment.id)
        if existing is not None:
            return existing

        reservation = self._reservation_repository.find_by_id(
            ReservationId(value=payment.reservation_id)
        )
        email = reservation.passengers[0].email if reservation else ""

        invoice = self._factory.create(payment, email, self._clock())
        self._invoice_repository.save(invoice)
        return invoice

    def get_invoice(self, invoice_id: str) -> Invoice | None:
        try:
            key = InvoiceId(value=invoice_id)
        except ValueError:
            return None
        return self._invoice_repository.find_by_id(key)

    def get_customer_invoices(self, customer_id: str) -> list[Invoice]:
        try:
            key = CustomerId(value=customer_id)
        except ValueError:
            return []
        invoices = self._invoice_repository.find_by_customer(key)
        return sorted(invoices, key=lambda i: i.issue_date.value, reverse=True)

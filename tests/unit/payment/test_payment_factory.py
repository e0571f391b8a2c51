from datetime import datetime, timezone
from decimal import Decimal

from skybooking.payment.domain.enum import PaymentStatus, RefundStatus
from skybooking.payment.domain.factory import InvoiceFactory, RefundFactory
from skybooking.shared.domain import Money

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestInvoiceFactory:
    def test_tax_and_due_date(self, create_payment):
        payment = create_payment(status=PaymentStatus.COMPLETED, amount=Decimal("10000"))

        invoice = InvoiceFactory().create(payment, "amina@example.com", NOW)

        assert invoice.tax_amount.amount == Decimal("1900.00")
        assert invoice.total_amount.amount == Decimal("11900.00")
        assert invoice.billed_to == "Amina Benali"
        assert invoice.due_date.date_string() == "2025-07-01"
        assert invoice.id.reservation_id == payment.reservation_id


class TestRefundFactory:
    def test_completed_when_amount_and_payment_present(self, create_payment):
        payment = create_payment(status=PaymentStatus.REFUNDED)

        refund = RefundFactory().create(
            reservation_id=payment.reservation_id,
            amount=Money.dzd("5000"),
            reason="Cancelled",
            now=NOW,
            payment_id=payment.id,
        )

        assert refund.status == RefundStatus.COMPLETED

    def test_skipped_when_nothing_to_refund(self):
        refund = RefundFactory().create(
            reservation_id="RES-9F2C41AB",
            amount=Money.zero(),
            reason="Late cancellation",
            now=NOW,
            hours_before_departure=5,
        )

        assert refund.status == RefundStatus.SKIPPED
        assert refund.hours_before_departure == 5

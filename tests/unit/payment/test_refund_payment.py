import pytest

from skybooking.payment.domain.enum import PaymentStatus, RefundStatus
from skybooking.shared.domain import Money
from skybooking.shared.domain.exception import RefundException


class TestRefundPaymentService:
    def test_refund_completed_payment(
        self, container, repositories, bank_gateway, create_reservation, pay_reservation
    ):
        reservation = create_reservation()
        payment = pay_reservation(reservation)

        assert container.refund_payment.refund(str(payment.id), "Customer request")

        stored = repositories.payments.find_by_id(payment.id)
        assert stored.status == PaymentStatus.REFUNDED
        assert bank_gateway.refunded == [payment.id]
        refunds = container.payment_query.get_refunds(str(reservation.id))
        assert [(r.status, r.amount.amount) for r in refunds] == [
            (RefundStatus.COMPLETED, payment.amount.amount)
        ]

    def test_refund_twice_is_rejected(
        self, container, bank_gateway, create_reservation, pay_reservation
    ):
        """同じ決済は二重に払い戻さない"""
        payment = pay_reservation(create_reservation())
        container.refund_payment.refund(str(payment.id))

        with pytest.raises(RefundException):
            container.refund_payment.refund(str(payment.id))

        assert len(bank_gateway.refunded) == 1

    @pytest.mark.parametrize("payment_id", ["PAY-RES-00000000-00000000", "garbage"])
    def test_unknown_payment(self, container, payment_id):
        with pytest.raises(RefundException):
            container.refund_payment.refund(payment_id)


class TestSettleCancellation:
    def test_partial_refund_marks_payment_refunded(
        self, container, repositories, create_reservation, pay_reservation
    ):
        reservation = create_reservation()
        payment = pay_reservation(reservation)

        refund = container.refund_payment.settle_cancellation(
            reservation_id=str(reservation.id),
            amount=Money.dzd("5000.00"),
            reason="Cancelled",
            hours_before_departure=30,
        )

        assert refund.status == RefundStatus.COMPLETED
        assert refund.payment_id == payment.id
        assert refund.amount.amount == 5000
        assert repositories.payments.find_by_id(payment.id).status == PaymentStatus.REFUNDED

    def test_zero_amount_is_skipped(
        self, container, repositories, bank_gateway, create_reservation, pay_reservation
    ):
        reservation = create_reservation()
        payment = pay_reservation(reservation)

        refund = container.refund_payment.settle_cancellation(
            reservation_id=str(reservation.id),
            amount=Money.zero(),
            reason="Late cancellation",
            hours_before_departure=5,
        )

        assert refund.status == RefundStatus.SKIPPED
        assert bank_gateway.refunded == []
        assert repositories.payments.find_by_id(payment.id).status == PaymentStatus.COMPLETED

    def test_unpaid_reservation_is_skipped(self, container, create_reservation):
        reservation = create_reservation()

        refund = container.refund_payment.settle_cancellation(
            reservation_id=str(reservation.id),
            amount=Money.dzd("10000"),
            reason="Cancelled",
            hours_before_departure=72,
        )

        assert refund.status == RefundStatus.SKIPPED
        assert refund.amount.is_zero()
        assert refund.payment_id is None

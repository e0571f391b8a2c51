from skybooking.payment.domain.enum import PaymentStatus


class TestPaymentQueryService:
    def test_get_payment(self, container, create_reservation, pay_reservation):
        payment = pay_reservation(create_reservation())

        found = container.payment_query.get_payment(str(payment.id))

        assert found.status == PaymentStatus.COMPLETED
        assert container.payment_query.get_payment("garbage") is None

    def test_customer_payments_newest_first(
        self, container, create_flight, create_reservation, pay_reservation, clock
    ):
        flight = create_flight()
        first = pay_reservation(create_reservation(seat_numbers=["3A"], flight=flight))
        clock.advance(1)
        second = pay_reservation(create_reservation(seat_numbers=["3B"], flight=flight))

        payments = container.payment_query.get_customer_payments("customer-1")

        assert [p.id for p in payments] == [second.id, first.id]
        assert container.payment_query.get_customer_payments("customer-2") == []

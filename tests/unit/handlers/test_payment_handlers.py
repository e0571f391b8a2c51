import pytest

from skybooking.payment.handlers import (
    generate_invoice,
    get_invoice,
    get_payment,
    list_customer,
    list_refunds,
    process,
    refund,
)
from support.http import parse_body


@pytest.fixture(autouse=True)
def _container(use_container):
    use_container(
        "skybooking.payment.handlers.process",
        "skybooking.payment.handlers.refund",
        "skybooking.payment.handlers.generate_invoice",
        "skybooking.payment.handlers.get_invoice",
        "skybooking.payment.handlers.get_payment",
        "skybooking.payment.handlers.list_customer",
        "skybooking.payment.handlers.list_refunds",
    )


@pytest.fixture
def payment_body():
    """決済リクエストのボディを生成する"""

    def _factory(reservation, **overrides) -> dict:
        body = {
            "reservation_id": str(reservation.id),
            "customer_id": str(reservation.customer_id),
            "amount": str(reservation.total_price.amount),
            "payment_method": "cib",
            "card_number": "4111 1111 1111 1111",
            "card_holder": "Amina Benali",
            "expiry_date": "12/27",
            "cvv": "123",
        }
        body.update(overrides)
        return body

    return _factory


class TestProcessHandler:
    def test_completes_payment(
        self, create_reservation, payment_body, api_event, lambda_context
    ):
        # Arrange
        reservation = create_reservation(seat_numbers=["3A"])
        event = api_event(method="POST", path="/payments", body=payment_body(reservation))

        # Act
        response = process.lambda_handler(event, lambda_context)

        # Assert
        assert response["statusCode"] == 201
        data = parse_body(response)["data"]
        assert data["status"] == "COMPLETED"
        assert data["payment_method"] == "CIB"
        assert data["amount"] == "10000"
        assert data["card_number"].endswith("1111")
        assert "4111" not in data["card_number"]

    def test_amount_mismatch_is_rejected(
        self, create_reservation, payment_body, api_event, lambda_context
    ):
        reservation = create_reservation(seat_numbers=["3A"])
        event = api_event(
            method="POST",
            path="/payments",
            body=payment_body(reservation, amount="9000"),
        )

        response = process.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 400

    @pytest.mark.parametrize("amount", ["abc", "0", "-5"])
    def test_invalid_amount(
        self, create_reservation, payment_body, api_event, lambda_context, amount
    ):
        reservation = create_reservation(seat_numbers=["3A"])
        event = api_event(
            method="POST",
            path="/payments",
            body=payment_body(reservation, amount=amount),
        )

        response = process.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 400
        assert parse_body(response)["error"] == "VALIDATION"


class TestPaymentQueries:
    def test_get_payment(
        self, create_reservation, pay_reservation, api_event, lambda_context
    ):
        payment = pay_reservation(create_reservation())
        event = api_event(
            path=f"/payments/{payment.id}",
            path_parameters={"payment_id": str(payment.id)},
        )

        response = get_payment.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 200
        assert parse_body(response)["data"]["payment_id"] == str(payment.id)

    def test_get_unknown_payment(self, api_event, lambda_context):
        event = api_event(
            path="/payments/PAY-00000000",
            path_parameters={"payment_id": "PAY-00000000"},
        )

        response = get_payment.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 404

    def test_list_customer_payments_and_invoices(
        self, container, create_reservation, pay_reservation, api_event, lambda_context
    ):
        payment = pay_reservation(create_reservation())
        container.generate_invoice.generate(str(payment.id))

        def _list(listing: str) -> dict:
            event = api_event(
                path="/customers/customer-1/payments",
                path_parameters={"customer_id": "customer-1"},
                query={"type": listing},
            )
            return list_customer.lambda_handler(event, lambda_context)

        payments = _list("payments")
        invoices = _list("invoices")
        unsupported = _list("receipts")

        assert parse_body(payments)["count"] == 1
        assert parse_body(invoices)["data"][0]["payment_id"] == str(payment.id)
        assert unsupported["statusCode"] == 400


class TestRefundHandler:
    def test_refunds_payment(
        self, create_reservation, pay_reservation, api_event, lambda_context
    ):
        reservation = create_reservation()
        payment = pay_reservation(reservation)
        event = api_event(
            method="POST",
            path=f"/payments/{payment.id}/refund",
            path_parameters={"payment_id": str(payment.id)},
            body={"reason": "Customer request"},
        )

        response = refund.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 200
        assert parse_body(response)["refunded"] is True

        listed = list_refunds.lambda_handler(
            api_event(
                path=f"/reservations/{reservation.id}/refunds",
                path_parameters={"reservation_id": str(reservation.id)},
            ),
            lambda_context,
        )
        data = parse_body(listed)["data"]
        assert len(data) == 1
        assert data[0]["reason"] == "Customer request"
        assert data[0]["amount"] == "10000"

    def test_unknown_payment_is_conflict(self, api_event, lambda_context):
        event = api_event(
            method="POST",
            path="/payments/PAY-00000000/refund",
            path_parameters={"payment_id": "PAY-00000000"},
            body={},
        )

        response = refund.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 409


class TestInvoiceHandlers:
    def test_generate_and_fetch_invoice(
        self, create_reservation, pay_reservation, api_event, lambda_context
    ):
        payment = pay_reservation(create_reservation())
        event = api_event(
            method="POST",
            path="/invoices",
            body={"payment_id": str(payment.id)},
        )

        created = generate_invoice.lambda_handler(event, lambda_context)

        assert created["statusCode"] == 201
        invoice = parse_body(created)["data"]
        assert invoice["email"] == "amina.benali@example.com"

        fetched = get_invoice.lambda_handler(
            api_event(
                path=f"/invoices/{invoice['invoice_id']}",
                path_parameters={"invoice_id": invoice["invoice_id"]},
            ),
            lambda_context,
        )
        assert fetched["statusCode"] == 200
        assert parse_body(fetched)["data"] == invoice

    def test_generate_for_unknown_payment(self, api_event, lambda_context):
        event = api_event(
            method="POST", path="/invoices", body={"payment_id": "PAY-00000000"}
        )

        response = generate_invoice.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 404

    def test_get_unknown_invoice(self, api_event, lambda_context):
        event = api_event(
            path="/invoices/INV-00000000",
            path_parameters={"invoice_id": "INV-00000000"},
        )

        response = get_invoice.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 404

from decimal import Decimal

import pytest

from skybooking.payment.domain.entity import Payment
from skybooking.payment.domain.enum import PaymentMethod, PaymentStatus
from skybooking.payment.domain.value_object import PaymentId
from skybooking.shared.domain import CustomerId, Money


@pytest.fixture
def create_payment():
    """Payment を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        status: PaymentStatus = PaymentStatus.PENDING,
        reservation_id: str = "RES-9F2C41AB",
        amount: Decimal = Decimal("10000"),
        method: PaymentMethod = PaymentMethod.CIB,
    ) -> Payment:
        return Payment(
            id=PaymentId.for_reservation(reservation_id),
            reservation_id=reservation_id,
            customer_id=CustomerId(value="customer-1"),
            amount=Money.dzd(amount),
            method=method,
            masked_card_number="**** **** **** 1111",
            card_holder="Amina Benali",
            status=status,
        )

    return _factory


@pytest.fixture
def card_payment():
    """決済リクエストの既定値（金額以外）"""
    return {
        "method": "CIB",
        "card_number": "4111 1111 1111 1111",
        "card_holder": "Amina Benali",
        "expiry_date": "12/27",
        "cvv": "123",
    }

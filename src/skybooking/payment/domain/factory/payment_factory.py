from datetime import datetime, timedelta
from decimal import Decimal
from typing import Final

from skybooking.payment.domain.entity import Invoice, Payment, Refund
from skybooking.payment.domain.enum import PaymentMethod, PaymentStatus, RefundStatus
from skybooking.payment.domain.value_object import (
    CardDetails,
    InvoiceId,
    PaymentId,
    RefundId,
)
from skybooking.shared.domain import CustomerId, IsoDateTime, Money

TAX_RATE: Final = Decimal("0.19")
INVOICE_DUE_DAYS: Final[int] = 30


class PaymentFactory:
    """決済ファクトリ"""

    def create(
        self,
        reservation_id: str,
        customer_id: CustomerId,
        amount: Money,
        method: PaymentMethod,
        card: CardDetails,
    ) -> Payment:
        """新規決済エンティティ（PENDING）を生成する"""
        return Payment(
            id=PaymentId.for_reservation(reservation_id),
            reservation_id=reservation_id,
            customer_id=customer_id,
            amount=amount,
            method=method,
            masked_card_number=card.masked_number,
            card_holder=card.card_holder,
            status=PaymentStatus.PENDING,
        )


class RefundFactory:
    """払い戻しファクトリ"""

    def create(
        self,
        reservation_id: str,
        amount: Money,
        reason: str,
        now: datetime,
        payment_id: PaymentId | None = None,
        hours_before_departure: int | None = None,
    ) -> Refund:
        """払い戻し記録を生成する

        金額が 0、または払い戻す決済がない場合は SKIPPED として記録する。
        """
        status = (
            RefundStatus.COMPLETED
            if payment_id is not None and not amount.is_zero()
            else RefundStatus.SKIPPED
        )
        return Refund(
            id=RefundId.for_reservation(reservation_id),
            reservation_id=reservation_id,
            amount=amount,
            status=status,
            reason=reason,
            refund_date=IsoDateTime(now),
            payment_id=payment_id,
            hours_before_departure=hours_before_departure,
        )


class InvoiceFactory:
    """請求書ファクトリ（税率 19%、支払期限 30 日後）"""

    def create(self, payment: Payment, email: str, now: datetime) -> Invoice:
        tax = payment.amount.percentage(TAX_RATE)
        return Invoice(
            id=InvoiceId.for_reservation(payment.reservation_id),
            payment_id=payment.id,
            reservation_id=payment.reservation_id,
            customer_id=payment.customer_id,
            billed_to=payment.card_holder,
            email=email,
            amount=payment.amount,
            tax_amount=tax,
            total_amount=payment.amount.add(tax),
            issue_date=IsoDateTime(now),
            due_date=IsoDateTime(now + timedelta(days=INVOICE_DUE_DAYS)),
        )

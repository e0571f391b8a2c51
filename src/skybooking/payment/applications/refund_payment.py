from datetime import datetime
from typing import Callable

from skybooking.payment.domain.entity import Payment, Refund
from skybooking.payment.domain.enum import PaymentStatus
from skybooking.payment.domain.factory import RefundFactory
from skybooking.payment.domain.gateway import BankGateway
from skybooking.payment.domain.repository import PaymentRepository, RefundRepository
from skybooking.payment.domain.value_object import PaymentId
from skybooking.shared.domain import IsoDateTime, Money, utc_now
from skybooking.shared.domain.exception import (
    OptimisticLockException,
    RefundException,
)


class RefundPaymentService:
    """払い戻しユースケース

    決済ステータスを条件付きで REFUNDED に更新してから銀行に払い戻しを依頼する。
    同じ決済が二重に払い戻されることはない。
    """

    def __init__(
        self,
        payment_repository: PaymentRepository,
        refund_repository: RefundRepository,
        bank_gateway: BankGateway,
        factory: RefundFactory,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._payment_repository = payment_repository
        self._refund_repository = refund_repository
        self._bank_gateway = bank_gateway
        self._factory = factory
        self._clock = clock

    def refund(self, payment_id: str, reason: str = "Refund requested") -> bool:
        """決済を全額払い戻す"""
        try:
            key = PaymentId(value=payment_id)
        except ValueError as e:
            raise RefundException(f"Payment not found: {payment_id}") from e
        payment = self._payment_repository.find_by_id(key)
        if payment is None:
            raise RefundException(f"Payment not found: {payment_id}")

        now = self._clock()
        self._mark_refunded(payment, now, payment.amount)
        self._refund_repository.save(
            self._factory.create(
                reservation_id=payment.reservation_id,
                amount=payment.amount,
                reason=reason,
                now=now,
                payment_id=payment.id,
            )
        )
        return True

    def settle_cancellation(
        self,
        reservation_id: str,
        amount: Money,
        reason: str,
        hours_before_departure: int,
    ) -> Refund:
        """キャンセルに伴う払い戻しを記録する

        払い戻し額が 0、または完了済みの決済がない場合は SKIPPED として記録する。
        払い戻し額は実際に支払われた決済額を上限とする。
        """
        now = self._clock()
        payment = next(
            (
                p
                for p in self._payment_repository.find_by_reservation(reservation_id)
                if p.status == PaymentStatus.COMPLETED
            ),
            None,
        )
        if payment is not None:
            if amount.amount > payment.amount.amount:
                amount = payment.amount
            if not amount.is_zero():
                self._mark_refunded(payment, now, amount)

        refund = self._factory.create(
            reservation_id=reservation_id,
            amount=amount if payment is not None else Money.zero(amount.currency),
            reason=reason,
            now=now,
            payment_id=payment.id if payment is not None else None,
            hours_before_departure=hours_before_departure,
        )
        self._refund_repository.save(refund)
        return refund

    def _mark_refunded(self, payment: Payment, now: datetime, amount: Money) -> None:
        payment.refund(IsoDateTime(now))
        try:
            self._payment_repository.update(
                payment, expected_status=PaymentStatus.COMPLETED
            )
        except OptimisticLockException as e:
            raise RefundException(
                f"Payment {payment.id} changed state during refund"
            ) from e
        self._bank_gateway.refund(payment, amount)

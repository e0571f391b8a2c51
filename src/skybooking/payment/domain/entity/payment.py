from skybooking.payment.domain.enum import PaymentMethod, PaymentStatus
from skybooking.payment.domain.value_object import PaymentId
from skybooking.shared.domain import AggregateRoot, CustomerId, IsoDateTime, Money
from skybooking.shared.domain.exception import (
    BusinessRuleViolationException,
    RefundException,
)


class Payment(AggregateRoot[PaymentId]):
    """決済エンティティ

    PENDING → COMPLETED / FAILED、COMPLETED → REFUNDED。
    """

    def __init__(
        self,
        id: PaymentId,
        reservation_id: str,
        customer_id: CustomerId,
        amount: Money,
        method: PaymentMethod,
        masked_card_number: str,
        card_holder: str,
        status: PaymentStatus = PaymentStatus.PENDING,
        transaction_id: str | None = None,
        bank_reference: str | None = None,
        payment_date: IsoDateTime | None = None,
        failure_reason: str | None = None,
        refunded_at: IsoDateTime | None = None,
    ) -> None:
        super().__init__(id)
        self._reservation_id = reservation_id
        self._customer_id = customer_id
        self._amount = amount
        self._method = method
        self._masked_card_number = masked_card_number
        self._card_holder = card_holder
        self._status = status
        self._transaction_id = transaction_id
        self._bank_reference = bank_reference
        self._payment_date = payment_date
        self._failure_reason = failure_reason
        self._refunded_at = refunded_at

    @property
    def reservation_id(self) -> str:
        return self._reservation_id

    @property
    def customer_id(self) -> CustomerId:
        return self._customer_id

    @property
    def amount(self) -> Money:
        return self._amount

    @property
    def method(self) -> PaymentMethod:
        return self._method

    @property
    def masked_card_number(self) -> str:
        return self._masked_card_number

    @property
    def card_holder(self) -> str:
        return self._card_holder

    @property
    def status(self) -> PaymentStatus:
        return self._status

    @property
    def transaction_id(self) -> str | None:
        return self._transaction_id

    @property
    def bank_reference(self) -> str | None:
        return self._bank_reference

    @property
    def payment_date(self) -> IsoDateTime | None:
        return self._payment_date

    @property
    def failure_reason(self) -> str | None:
        return self._failure_reason

    @property
    def refunded_at(self) -> IsoDateTime | None:
        return self._refunded_at

    def complete(
        self, transaction_id: str, bank_reference: str, completed_at: IsoDateTime
    ) -> None:
        """決済を完了する"""
        if self._status != PaymentStatus.PENDING:
            raise BusinessRuleViolationException(
                f"Cannot complete payment in {self._status.value} status"
            )
        self._status = PaymentStatus.COMPLETED
        self._transaction_id = transaction_id
        self._bank_reference = bank_reference
        self._payment_date = completed_at

    def fail(self, reason: str, failed_at: IsoDateTime) -> None:
        """銀行に拒否された決済を記録する"""
        if self._status != PaymentStatus.PENDING:
            raise BusinessRuleViolationException(
                f"Cannot fail payment in {self._status.value} status"
            )
        self._status = PaymentStatus.FAILED
        self._failure_reason = reason
        self._payment_date = failed_at

    def refund(self, refunded_at: IsoDateTime) -> None:
        """払い戻しを行う（COMPLETED のみ）"""
        if self._status == PaymentStatus.REFUNDED:
            raise RefundException(f"Payment {self.id} is already refunded")
        if self._status != PaymentStatus.COMPLETED:
            raise RefundException(
                f"Cannot refund payment in {self._status.value} status"
            )
        self._status = PaymentStatus.REFUNDED
        self._refunded_at = refunded_at

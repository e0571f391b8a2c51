from skybooking.payment.domain.entity import Payment, Refund
from skybooking.payment.domain.repository import PaymentRepository, RefundRepository
from skybooking.payment.domain.value_object import PaymentId
from skybooking.shared.domain import CustomerId


class PaymentQueryService:
    """決済参照ユースケース"""

    def __init__(
        self,
        payment_repository: PaymentRepository,
        refund_repository: RefundRepository,
    ) -> None:
        self._payment_repository = payment_repository
        self._refund_repository = refund_repository

    def get_payment(self, payment_id: str) -> Payment | None:
        try:
            key = PaymentId(value=payment_id)
        except ValueError:
            return None
        return self._payment_repository.find_by_id(key)

    def get_customer_payments(self, customer_id: str) -> list[Payment]:
        """顧客の決済一覧（新しい順）"""
        try:
            key = CustomerId(value=customer_id)
        except ValueError:
            return []
        payments = self._payment_repository.find_by_customer(key)
        return sorted(
            payments,
            key=lambda p: str(p.payment_date or ""),
            reverse=True,
        )

    def get_refunds(self, reservation_id: str) -> list[Refund]:
        refunds = self._refund_repository.find_by_reservation(reservation_id)
        return sorted(refunds, key=lambda r: r.refund_date.value)

from skybooking.payment.domain.enum import RefundStatus
from skybooking.payment.domain.value_object import PaymentId, RefundId
from skybooking.shared.domain import AggregateRoot, IsoDateTime, Money


class Refund(AggregateRoot[RefundId]):
    """払い戻し記録

    キャンセル成功時、または明示的な払い戻し要求時にのみ作られる。
    """

    def __init__(
        self,
        id: RefundId,
        reservation_id: str,
        amount: Money,
        status: RefundStatus,
        reason: str,
        refund_date: IsoDateTime,
        payment_id: PaymentId | None = None,
        hours_before_departure: int | None = None,
    ) -> None:
        super().__init__(id)
        self._reservation_id = reservation_id
        self._amount = amount
        self._status = status
        self._reason = reason
        self._refund_date = refund_date
        self._payment_id = payment_id
        self._hours_before_departure = hours_before_departure

    @property
    def reservation_id(self) -> str:
        return self._reservation_id

    @property
    def amount(self) -> Money:
        return self._amount

    @property
    def status(self) -> RefundStatus:
        return self._status

    @property
    def reason(self) -> str:
        return self._reason

    @property
    def refund_date(self) -> IsoDateTime:
        return self._refund_date

    @property
    def payment_id(self) -> PaymentId | None:
        return self._payment_id

    @property
    def hours_before_departure(self) -> int | None:
        return self._hours_before_departure

from abc import abstractmethod

from skybooking.payment.domain.entity import Refund
from skybooking.payment.domain.value_object import RefundId
from skybooking.shared.domain import Repository


class RefundRepository(Repository[Refund, RefundId]):
    """払い戻しリポジトリのインターフェース"""

    @abstractmethod
    def save(self, refund: Refund) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, refund_id: RefundId) -> Refund | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_reservation(self, reservation_id: str) -> list[Refund]:
        raise NotImplementedError

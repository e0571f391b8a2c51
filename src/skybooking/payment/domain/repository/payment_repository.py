from abc import abstractmethod

from skybooking.payment.domain.entity import Payment
from skybooking.payment.domain.enum import PaymentStatus
from skybooking.payment.domain.value_object import PaymentId
from skybooking.shared.domain import CustomerId, StatusGuardedRepository


class PaymentRepository(StatusGuardedRepository[Payment, PaymentId, PaymentStatus]):
    """決済リポジトリのインターフェース"""

    @abstractmethod
    def save(self, payment: Payment) -> None:
        """決済を保存する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        """決済IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_reservation(self, reservation_id: str) -> list[Payment]:
        """予約に紐づく決済（失敗分を含む）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_customer(self, customer_id: CustomerId) -> list[Payment]:
        """顧客の決済一覧"""
        raise NotImplementedError

    @abstractmethod
    def update(self, payment: Payment, expected_status: PaymentStatus) -> None:
        """決済を更新する（ステータス不一致は OptimisticLockException）"""
        raise NotImplementedError

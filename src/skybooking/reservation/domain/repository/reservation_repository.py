from abc import abstractmethod

from skybooking.reservation.domain.entity import Reservation
from skybooking.reservation.domain.enum import ReservationStatus
from skybooking.reservation.domain.value_object import ReservationId
from skybooking.shared.domain import CustomerId, StatusGuardedRepository


class ReservationRepository(
    StatusGuardedRepository[Reservation, ReservationId, ReservationStatus]
):
    """予約リポジトリのインターフェース"""

    @abstractmethod
    def save(self, reservation: Reservation) -> None:
        """予約を新規保存する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, reservation_id: ReservationId) -> Reservation | None:
        """予約IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_customer(self, customer_id: CustomerId) -> list[Reservation]:
        """顧客の予約一覧"""
        raise NotImplementedError

    @abstractmethod
    def update(
        self, reservation: Reservation, expected_status: ReservationStatus
    ) -> None:
        """予約を更新する

        保存済みのステータスが expected_status と異なる場合は
        OptimisticLockException を送出する。
        """
        raise NotImplementedError

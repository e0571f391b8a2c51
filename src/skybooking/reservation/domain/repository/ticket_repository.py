from abc import ABC, abstractmethod

from skybooking.reservation.domain.entity import Ticket
from skybooking.reservation.domain.value_object import ReservationId, TicketId


class TicketRepository(ABC):
    """航空券リポジトリのインターフェース"""

    @abstractmethod
    def replace_for_reservation(
        self, reservation_id: ReservationId, tickets: list[Ticket]
    ) -> None:
        """予約の航空券を置き換える（既存の航空券は破棄）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_reservation(self, reservation_id: ReservationId) -> list[Ticket]:
        """予約に紐づく航空券"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, ticket_id: TicketId) -> Ticket | None:
        """航空券IDで検索する"""
        raise NotImplementedError

from skybooking.reservation.domain.entity import Reservation, Ticket
from skybooking.reservation.domain.repository import (
    ReservationRepository,
    TicketRepository,
)
from skybooking.reservation.domain.value_object import ReservationId, TicketId
from skybooking.shared.domain import CustomerId


class ReservationQueryService:
    """予約参照ユースケース

    存在しない場合は None / 空リストを返す。例外はバックエンド障害のみ。
    """

    def __init__(
        self,
        reservation_repository: ReservationRepository,
        ticket_repository: TicketRepository,
    ) -> None:
        self._reservation_repository = reservation_repository
        self._ticket_repository = ticket_repository

    def get_reservation(self, reservation_id: str) -> Reservation | None:
        try:
            key = ReservationId(value=reservation_id)
        except ValueError:
            return None
        return self._reservation_repository.find_by_id(key)

    def get_tickets(self, reservation_id: str) -> list[Ticket]:
        try:
            key = ReservationId(value=reservation_id)
        except ValueError:
            return []
        tickets = self._ticket_repository.find_by_reservation(key)
        return sorted(tickets, key=lambda t: t.id.sequence)

    def get_ticket_by_id(self, ticket_id: str) -> Ticket | None:
        try:
            key = TicketId(value=ticket_id)
        except ValueError:
            return None
        return self._ticket_repository.find_by_id(key)

    def get_reservation_by_ticket_id(self, ticket_id: str) -> Reservation | None:
        """航空券IDに埋め込まれた予約IDから予約を引く"""
        try:
            key = TicketId(value=ticket_id)
        except ValueError:
            return None
        if self._ticket_repository.find_by_id(key) is None:
            return None
        return self._reservation_repository.find_by_id(key.reservation_id)

    def get_customer_reservations(self, customer_id: str) -> list[Reservation]:
        """顧客の予約一覧（新しい順）"""
        try:
            key = CustomerId(value=customer_id)
        except ValueError:
            return []
        reservations = self._reservation_repository.find_by_customer(key)
        return sorted(
            reservations, key=lambda r: r.reservation_date.value, reverse=True
        )

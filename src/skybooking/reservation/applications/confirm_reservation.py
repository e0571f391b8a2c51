from datetime import datetime
from typing import Callable

from skybooking.flight.domain.repository import FlightRepository, SeatRepository
from skybooking.reservation.domain.entity import Reservation, Ticket
from skybooking.reservation.domain.enum import ReservationStatus
from skybooking.reservation.domain.factory import TicketFactory
from skybooking.reservation.domain.repository import (
    ReservationRepository,
    TicketRepository,
)
from skybooking.reservation.domain.value_object import ReservationId
from skybooking.shared.domain import utc_now
from skybooking.shared.domain.exception import (
    OptimisticLockException,
    ReservationAlreadyCancelledException,
    ResourceNotFoundException,
)


class TicketIssuanceService:
    """航空券発行ユースケース"""

    def __init__(
        self,
        ticket_repository: TicketRepository,
        flight_repository: FlightRepository,
        seat_repository: SeatRepository,
        factory: TicketFactory,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._ticket_repository = ticket_repository
        self._flight_repository = flight_repository
        self._seat_repository = seat_repository
        self._factory = factory
        self._clock = clock

    def issue(self, reservation: Reservation) -> list[Ticket]:
        """予約の現在の座席で航空券を発行する（既存の航空券は置き換える）"""
        flight = self._flight_repository.find_by_id(reservation.flight_id)
        if flight is None:
            raise ResourceNotFoundException(f"Flight not found: {reservation.flight_id}")
        seats = self._seat_repository.find_by_flight(reservation.flight_id)
        tickets = self._factory.issue(reservation, flight, seats, self._clock())
        self._ticket_repository.replace_for_reservation(reservation.id, tickets)
        return tickets


class ConfirmReservationService:
    """予約確定ユースケース（決済完了時に呼ばれる）"""

    def __init__(
        self,
        reservation_repository: ReservationRepository,
        ticket_issuance: TicketIssuanceService,
    ) -> None:
        self._reservation_repository = reservation_repository
        self._ticket_issuance = ticket_issuance

    def confirm(
        self, reservation_id: ReservationId, payment_id: str
    ) -> tuple[Reservation, list[Ticket]]:
        """PENDING → CONFIRMED に遷移し航空券を発行する

        並行してキャンセルされた場合は ReservationAlreadyCancelledException。
        """
        reservation = self._reservation_repository.find_by_id(reservation_id)
        if reservation is None:
            raise ResourceNotFoundException(f"Reservation not found: {reservation_id}")

        reservation.confirm(payment_id)
        try:
            self._reservation_repository.update(
                reservation, expected_status=ReservationStatus.PENDING
            )
        except OptimisticLockException:
            latest = self._reservation_repository.find_by_id(reservation_id)
            if latest is not None and latest.is_cancelled:
                raise ReservationAlreadyCancelledException(
                    f"Reservation {reservation_id} was cancelled during payment"
                )
            raise

        tickets = self._ticket_issuance.issue(reservation)
        return reservation, tickets

from datetime import datetime
from typing import Callable

from aws_lambda_powertools import Logger

from skybooking.cancellation.applications.cancel_reservation import (
    load_flight,
    load_reservation,
)
from skybooking.cancellation.domain import CancellationPolicy
from skybooking.flight.applications.seat_inventory import (
    SeatInventoryService,
    parse_seat_numbers,
)
from skybooking.flight.domain.entity import Flight
from skybooking.flight.domain.repository import FlightRepository
from skybooking.flight.domain.value_object import FlightId, SeatNumber
from skybooking.reservation.applications.confirm_reservation import (
    TicketIssuanceService,
)
from skybooking.reservation.domain.entity import Reservation
from skybooking.reservation.domain.enum import ReservationStatus
from skybooking.reservation.domain.factory import total_price_of
from skybooking.reservation.domain.repository import ReservationRepository
from skybooking.reservation.domain.value_object import ReservationId
from skybooking.shared.domain import utc_now
from skybooking.shared.domain.exception import (
    ModificationNotAllowedException,
    ReservationAlreadyCancelledException,
    ResourceNotFoundException,
    SeatUnavailableException,
    ValidationException,
)

logger = Logger()


class ModificationService:
    """予約変更ユースケース

    変更は出発 24 時間前まで（キャンセルの一部払い戻し区分と異なり猶予はない）。
    """

    def __init__(
        self,
        reservation_repository: ReservationRepository,
        flight_repository: FlightRepository,
        seat_inventory: SeatInventoryService,
        ticket_issuance: TicketIssuanceService,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._reservation_repository = reservation_repository
        self._flight_repository = flight_repository
        self._seat_inventory = seat_inventory
        self._ticket_issuance = ticket_issuance
        self._clock = clock

    def can_modify_reservation(self, reservation_id: str) -> bool:
        """変更可能か（存在しない予約は False）"""
        try:
            key = ReservationId(value=reservation_id)
        except ValueError:
            return False
        reservation = self._reservation_repository.find_by_id(key)
        if reservation is None or reservation.is_cancelled:
            return False
        flight = self._flight_repository.find_by_id(reservation.flight_id)
        if flight is None:
            return False
        return self._within_window(flight, self._clock())

    def modify_seats(
        self, reservation_id: str, new_seat_numbers: list[str]
    ) -> Reservation:
        """座席を変更する

        旧座席の解放と新座席の確保は1回の書き込みで行う。確保できない場合は
        何も変更せず SeatUnavailableException（予約は元の座席を保持したまま）。
        """
        reservation = load_reservation(self._reservation_repository, reservation_id)
        if reservation.is_cancelled:
            raise ReservationAlreadyCancelledException(
                f"Reservation {reservation_id} is cancelled and cannot be modified"
            )
        requested = parse_seat_numbers(new_seat_numbers)
        if len(requested) != len(reservation.seat_numbers):
            raise ModificationNotAllowedException(
                f"Seat count must stay at {len(reservation.seat_numbers)}"
            )
        flight = load_flight(self._flight_repository, reservation)
        if not self._within_window(flight, self._clock()):
            raise ModificationNotAllowedException(
                "Reservations can only be modified at least "
                f"{CancellationPolicy.MODIFICATION_MIN_HOURS} hours before departure"
            )

        original = reservation.seat_numbers
        seats = self._seat_inventory.reassign_seats(flight.id, original, requested)

        previous_status = reservation.status
        reservation.change_seats(requested, total_price_of(seats))
        try:
            self._reservation_repository.update(
                reservation, expected_status=previous_status
            )
        except Exception:
            self._seat_inventory.reassign_seats(flight.id, requested, original)
            logger.warning(
                "Seat change rolled back",
                extra={
                    "reservation_id": reservation_id,
                    "original": [str(n) for n in original],
                    "requested": [str(n) for n in requested],
                },
            )
            raise

        if reservation.status == ReservationStatus.CONFIRMED:
            self._ticket_issuance.issue(reservation)
        return reservation

    def get_alternative_flights(self, reservation_id: str) -> list[Flight]:
        """同じ路線・同じ出発日の他の便（必要な空席があるもの）"""
        reservation = load_reservation(self._reservation_repository, reservation_id)
        flight = load_flight(self._flight_repository, reservation)
        now = self._clock()
        candidates = self._flight_repository.find_by_route(
            flight.departure_city,
            flight.arrival_city,
            flight.departure_time.date_string(),
        )
        needed = len(reservation.seat_numbers)
        alternatives = [
            f
            for f in candidates
            if f.id != flight.id and f.is_bookable(now) and f.available_seats >= needed
        ]
        return sorted(alternatives, key=lambda f: f.departure_time.value)

    def change_flight(self, reservation_id: str, new_flight_id: str) -> Reservation:
        """別の便に振り替える

        新しい便の座席を先に確保し、予約の更新に失敗した場合はそれを解放する。
        同じ座席番号が空いていればそのまま使い、なければ座席番号順に空席を割り当てる。
        料金は新しい座席で再計算する。
        """
        reservation = load_reservation(self._reservation_repository, reservation_id)
        if reservation.is_cancelled:
            raise ReservationAlreadyCancelledException(
                f"Reservation {reservation_id} is cancelled and cannot be modified"
            )
        try:
            target_id = FlightId(value=new_flight_id)
        except ValueError as e:
            raise ValidationException(str(e)) from e
        if target_id == reservation.flight_id:
            raise ModificationNotAllowedException(
                "New flight must differ from the current flight"
            )

        flight = load_flight(self._flight_repository, reservation)
        now = self._clock()
        if not self._within_window(flight, now):
            raise ModificationNotAllowedException(
                "Reservations can only be modified at least "
                f"{CancellationPolicy.MODIFICATION_MIN_HOURS} hours before departure"
            )
        target = self._flight_repository.find_by_id(target_id)
        if target is None:
            raise ResourceNotFoundException(f"Flight not found: {new_flight_id}")
        if not target.is_bookable(now):
            raise ModificationNotAllowedException(
                f"Flight {target.flight_number} is not open for booking"
            )

        original_flight_id = reservation.flight_id
        original = reservation.seat_numbers
        requested = self._pick_seats(target.id, original)
        seats = self._seat_inventory.assign_seats(target.id, requested)

        previous_status = reservation.status
        reservation.move_to_flight(target.id, requested, total_price_of(seats))
        try:
            self._reservation_repository.update(
                reservation, expected_status=previous_status
            )
        except Exception:
            self._seat_inventory.release_seats(target.id, requested)
            logger.warning(
                "Flight change rolled back",
                extra={
                    "reservation_id": reservation_id,
                    "new_flight_id": new_flight_id,
                    "requested": [str(n) for n in requested],
                },
            )
            raise

        self._seat_inventory.release_seats(original_flight_id, original)
        if reservation.status == ReservationStatus.CONFIRMED:
            self._ticket_issuance.issue(reservation)
        logger.info(
            "Reservation moved to another flight",
            extra={
                "reservation_id": reservation_id,
                "old_flight_id": str(original_flight_id),
                "new_flight_id": new_flight_id,
                "seat_numbers": [str(n) for n in requested],
                "total_price": str(reservation.total_price.amount),
            },
        )
        return reservation

    def _pick_seats(
        self, flight_id: FlightId, current: list[SeatNumber]
    ) -> list[SeatNumber]:
        available = self._seat_inventory.list_available(flight_id)
        if len(available) < len(current):
            raise SeatUnavailableException(
                f"Flight {flight_id} has only {len(available)} seats left, "
                f"{len(current)} needed"
            )
        free = {s.seat_number for s in available}
        if all(n in free for n in current):
            return list(current)
        return [s.seat_number for s in available[: len(current)]]

    @staticmethod
    def _within_window(flight: Flight, now: datetime) -> bool:
        if flight.has_departed(now):
            return False
        return CancellationPolicy.evaluate(flight.departure_time, now).allows_modification

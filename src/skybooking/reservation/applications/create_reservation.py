from datetime import datetime
from typing import Callable

from aws_lambda_powertools import Logger

from skybooking.flight.applications.seat_inventory import (
    SeatInventoryService,
    parse_seat_numbers,
)
from skybooking.flight.domain.repository import FlightRepository
from skybooking.flight.domain.value_object import FlightId
from skybooking.reservation.domain.entity import Reservation
from skybooking.reservation.domain.factory import PassengerDetails, ReservationFactory
from skybooking.reservation.domain.repository import ReservationRepository
from skybooking.shared.domain import CustomerId, utc_now
from skybooking.shared.domain.exception import (
    FatalException,
    ReservationException,
    ResourceNotFoundException,
    ValidationException,
)
from skybooking.shared.execution import current_token

logger = Logger()


class CreateReservationService:
    """予約作成ユースケース

    NEW -(搭乗者検証)-> SEAT_ASSIGNED -(料金計算)-> PENDING
    座席確保より前の検証エラーでは座席に一切触れない。
    座席確保後に失敗した場合は確保した座席を解放する（補償処理）。
    """

    def __init__(
        self,
        reservation_repository: ReservationRepository,
        flight_repository: FlightRepository,
        seat_inventory: SeatInventoryService,
        factory: ReservationFactory,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._reservation_repository = reservation_repository
        self._flight_repository = flight_repository
        self._seat_inventory = seat_inventory
        self._factory = factory
        self._clock = clock

    def create(
        self,
        customer_id: str,
        flight_id: str,
        seat_numbers: list[str],
        passengers: list[PassengerDetails],
    ) -> Reservation:
        """予約を作成する（PENDING）"""
        try:
            customer = CustomerId(value=customer_id)
            flight_key = FlightId(value=flight_id)
        except ValueError as e:
            raise ValidationException(str(e)) from e

        requested = parse_seat_numbers(seat_numbers)
        if len(requested) != len(passengers):
            raise ValidationException(
                f"Seat count ({len(requested)}) does not match "
                f"passenger count ({len(passengers)})"
            )
        travellers = self._factory.build_passengers(passengers)

        flight = self._flight_repository.find_by_id(flight_key)
        if flight is None:
            raise ResourceNotFoundException(f"Flight not found: {flight_id}")
        now = self._clock()
        if not flight.is_bookable(now):
            raise ReservationException(f"Flight {flight_id} is not open for booking")

        seats = self._seat_inventory.assign_seats(flight.id, requested)

        try:
            reservation = self._factory.create(customer, flight, seats, travellers, now)
            current_token().raise_if_cancelled("reservation save")
            self._reservation_repository.save(reservation)
        except Exception as e:
            self._seat_inventory.release_seats(flight.id, requested)
            logger.warning(
                "Reservation failed after seat assignment, seats released",
                extra={
                    "flight_id": flight_id,
                    "seat_numbers": [str(n) for n in requested],
                },
            )
            if isinstance(e, FatalException):
                raise
            raise ReservationException(f"Failed to create reservation: {e}") from e

        return reservation

from skybooking.flight.domain.value_object import FlightId, SeatNumber
from skybooking.reservation.domain.enum import ReservationStatus
from skybooking.reservation.domain.value_object import Passenger, ReservationId
from skybooking.shared.domain import AggregateRoot, CustomerId, IsoDateTime, Money
from skybooking.shared.domain.exception import (
    BusinessRuleViolationException,
    ReservationAlreadyCancelledException,
    ValidationException,
)


class Reservation(AggregateRoot[ReservationId]):
    """予約

    状態遷移: PENDING → CONFIRMED（決済完了時）、PENDING/CONFIRMED → CANCELLED。
    CANCELLED になった予約は変更できない。
    """

    def __init__(
        self,
        id: ReservationId,
        customer_id: CustomerId,
        flight_id: FlightId,
        seat_numbers: list[SeatNumber],
        passengers: list[Passenger],
        total_price: Money,
        reservation_date: IsoDateTime,
        status: ReservationStatus = ReservationStatus.PENDING,
        payment_id: str | None = None,
        cancellation_reason: str | None = None,
        cancelled_at: IsoDateTime | None = None,
    ) -> None:
        super().__init__(id)

        self._customer_id = customer_id
        self._flight_id = flight_id
        self._seat_numbers = list(seat_numbers)
        self._passengers = list(passengers)
        self._total_price = total_price
        self._reservation_date = reservation_date
        self._status = status
        self._payment_id = payment_id
        self._cancellation_reason = cancellation_reason
        self._cancelled_at = cancelled_at

        self._validate_seating()

    def _validate_seating(self) -> None:
        """座席数 == 搭乗者数 > 0"""
        if not self._seat_numbers:
            raise ValidationException("A reservation needs at least one seat")
        if len(self._seat_numbers) != len(self._passengers):
            raise ValidationException(
                f"Seat count ({len(self._seat_numbers)}) does not match "
                f"passenger count ({len(self._passengers)})"
            )

    @property
    def customer_id(self) -> CustomerId:
        return self._customer_id

    @property
    def flight_id(self) -> FlightId:
        return self._flight_id

    @property
    def seat_numbers(self) -> list[SeatNumber]:
        return list(self._seat_numbers)

    @property
    def passengers(self) -> list[Passenger]:
        return list(self._passengers)

    @property
    def total_price(self) -> Money:
        return self._total_price

    @property
    def reservation_date(self) -> IsoDateTime:
        return self._reservation_date

    @property
    def status(self) -> ReservationStatus:
        return self._status

    @property
    def payment_id(self) -> str | None:
        return self._payment_id

    @property
    def cancellation_reason(self) -> str | None:
        return self._cancellation_reason

    @property
    def cancelled_at(self) -> IsoDateTime | None:
        return self._cancelled_at

    @property
    def is_cancelled(self) -> bool:
        return self._status == ReservationStatus.CANCELLED

    def confirm(self, payment_id: str) -> None:
        """決済完了により予約を確定する"""
        if self._status == ReservationStatus.CANCELLED:
            raise ReservationAlreadyCancelledException(
                f"Reservation {self.id} has been cancelled"
            )
        if self._status != ReservationStatus.PENDING:
            raise BusinessRuleViolationException(
                f"Cannot confirm reservation in {self._status.value} status"
            )
        self._status = ReservationStatus.CONFIRMED
        self._payment_id = payment_id

    def cancel(self, reason: str, cancelled_at: IsoDateTime) -> None:
        """予約をキャンセルする"""
        if self._status == ReservationStatus.CANCELLED:
            raise ReservationAlreadyCancelledException(
                f"Reservation {self.id} is already cancelled"
            )
        self._status = ReservationStatus.CANCELLED
        self._cancellation_reason = reason
        self._cancelled_at = cancelled_at

    def change_seats(self, seat_numbers: list[SeatNumber], total_price: Money) -> None:
        """座席を変更する（座席数は変えられない）"""
        if self._status == ReservationStatus.CANCELLED:
            raise ReservationAlreadyCancelledException(
                f"Reservation {self.id} is cancelled and cannot be modified"
            )
        if len(seat_numbers) != len(self._seat_numbers):
            raise BusinessRuleViolationException(
                "Seat count cannot change when modifying a reservation"
            )
        self._seat_numbers = list(seat_numbers)
        self._total_price = total_price

    def move_to_flight(
        self,
        flight_id: FlightId,
        seat_numbers: list[SeatNumber],
        total_price: Money,
    ) -> None:
        """別の便に振り替える（座席数は変えられない）"""
        if self._status == ReservationStatus.CANCELLED:
            raise ReservationAlreadyCancelledException(
                f"Reservation {self.id} is cancelled and cannot be modified"
            )
        if flight_id == self._flight_id:
            raise BusinessRuleViolationException(
                "Reservation is already on this flight"
            )
        if len(seat_numbers) != len(self._seat_numbers):
            raise BusinessRuleViolationException(
                "Seat count cannot change when modifying a reservation"
            )
        self._flight_id = flight_id
        self._seat_numbers = list(seat_numbers)
        self._total_price = total_price

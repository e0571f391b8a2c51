from datetime import datetime
from typing import Callable

from aws_lambda_powertools import Logger

from skybooking.cancellation.domain import CancellationPolicy
from skybooking.flight.applications.seat_inventory import SeatInventoryService
from skybooking.flight.domain.entity import Flight
from skybooking.flight.domain.repository import FlightRepository
from skybooking.payment.applications.refund_payment import RefundPaymentService
from skybooking.reservation.domain.entity import Reservation
from skybooking.reservation.domain.repository import ReservationRepository
from skybooking.reservation.domain.value_object import ReservationId
from skybooking.shared.domain import IsoDateTime, Money, utc_now
from skybooking.shared.domain.exception import (
    CancellationNotAllowedException,
    OptimisticLockException,
    ReservationAlreadyCancelledException,
    ResourceNotFoundException,
    ValidationException,
)
from skybooking.shared.execution import current_token

logger = Logger()


def load_reservation(
    repository: ReservationRepository, reservation_id: str
) -> Reservation:
    try:
        key = ReservationId(value=reservation_id)
    except ValueError as e:
        raise ValidationException(str(e)) from e
    reservation = repository.find_by_id(key)
    if reservation is None:
        raise ResourceNotFoundException(f"Reservation not found: {reservation_id}")
    return reservation


def load_flight(repository: FlightRepository, reservation: Reservation) -> Flight:
    flight = repository.find_by_id(reservation.flight_id)
    if flight is None:
        raise ResourceNotFoundException(f"Flight not found: {reservation.flight_id}")
    return flight


class CancellationService:
    """キャンセルユースケース

    キャンセルは自動で再試行しない（二重払い戻しを防ぐため、
    タイムアウト後は予約の状態を再取得して判断する）。
    """

    def __init__(
        self,
        reservation_repository: ReservationRepository,
        flight_repository: FlightRepository,
        seat_inventory: SeatInventoryService,
        refund_payment: RefundPaymentService,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._reservation_repository = reservation_repository
        self._flight_repository = flight_repository
        self._seat_inventory = seat_inventory
        self._refund_payment = refund_payment
        self._clock = clock

    def get_cancellation_policy(self, reservation_id: str) -> CancellationPolicy:
        """現時点のキャンセルポリシー

        キャンセル済み、または出発済みの場合は CancellationNotAllowedException。
        """
        reservation = load_reservation(self._reservation_repository, reservation_id)
        flight = load_flight(self._flight_repository, reservation)
        return self._evaluate(reservation, flight, self._clock())

    def calculate_refund_amount(self, reservation_id: str) -> Money:
        reservation = load_reservation(self._reservation_repository, reservation_id)
        flight = load_flight(self._flight_repository, reservation)
        policy = self._evaluate(reservation, flight, self._clock())
        return policy.refund_for(reservation.total_price)

    def cancel_reservation(self, reservation_id: str, reason: str) -> bool:
        """予約をキャンセルし、座席の解放と払い戻しの記録を行う"""
        reservation = load_reservation(self._reservation_repository, reservation_id)
        if reservation.is_cancelled:
            raise ReservationAlreadyCancelledException(
                f"Reservation {reservation_id} is already cancelled"
            )
        flight = load_flight(self._flight_repository, reservation)
        now = self._clock()
        policy = self._evaluate(reservation, flight, now)
        refund_amount = policy.refund_for(reservation.total_price)

        current_token().raise_if_cancelled("reservation cancellation")
        previous_status = reservation.status
        reservation.cancel(reason or "Cancelled by customer", IsoDateTime(now))
        try:
            self._reservation_repository.update(
                reservation, expected_status=previous_status
            )
        except OptimisticLockException:
            latest = self._reservation_repository.find_by_id(reservation.id)
            if latest is not None and latest.is_cancelled:
                raise ReservationAlreadyCancelledException(
                    f"Reservation {reservation_id} is already cancelled"
                )
            raise

        self._seat_inventory.release_seats(reservation.flight_id, reservation.seat_numbers)
        try:
            refund = self._refund_payment.settle_cancellation(
                reservation_id=str(reservation.id),
                amount=refund_amount,
                reason=reservation.cancellation_reason or "",
                hours_before_departure=policy.hours_remaining,
            )
        except Exception:
            # 予約は CANCELLED のまま。払い戻しは手動で照合する
            logger.exception(
                "Refund settlement failed after cancellation",
                extra={
                    "reservation_id": reservation_id,
                    "refund_amount": str(refund_amount.amount),
                },
            )
            raise
        logger.info(
            "Reservation cancelled",
            extra={
                "reservation_id": reservation_id,
                "hours_remaining": policy.hours_remaining,
                "refund_amount": str(refund.amount.amount),
                "refund_status": refund.status.value,
            },
        )
        return True

    def _evaluate(
        self, reservation: Reservation, flight: Flight, now: datetime
    ) -> CancellationPolicy:
        policy = CancellationPolicy.evaluate(flight.departure_time, now)
        if reservation.is_cancelled:
            raise CancellationNotAllowedException(
                f"Reservation {reservation.id} is already cancelled",
                hours_remaining=policy.hours_remaining,
            )
        if flight.has_departed(now):
            raise CancellationNotAllowedException(
                f"Flight {flight.flight_number} has already departed",
                hours_remaining=policy.hours_remaining,
            )
        return policy

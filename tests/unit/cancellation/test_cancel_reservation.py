from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from skybooking.cancellation.applications import cancel_reservation as cancel_module
from skybooking.cancellation.applications.cancel_reservation import (
    CancellationService,
)
from skybooking.flight.applications.seat_inventory import SeatInventoryService
from skybooking.flight.domain.enum import SeatStatus
from skybooking.payment.domain.enum import PaymentStatus, RefundStatus
from skybooking.reservation.domain.enum import ReservationStatus
from skybooking.shared.domain import Money
from skybooking.shared.domain.exception import (
    CancellationNotAllowedException,
    RefundException,
    ReservationAlreadyCancelledException,
    ResourceNotFoundException,
    ValidationException,
)


def _seat_status(repositories, flight_id, seat_number):
    seats = {str(s.seat_number): s for s in repositories.seats.find_by_flight(flight_id)}
    return seats[seat_number].status


class TestCancellationPolicyQueries:
    @pytest.mark.parametrize(
        "hours, percentage, refund",
        [
            (60, 100, Decimal("20000.00")),
            (30, 50, Decimal("10000.00")),
            (10, 0, Decimal("0")),
        ],
    )
    def test_policy_and_refund_amount(
        self, container, create_reservation, hours, percentage, refund
    ):
        reservation = create_reservation(seat_numbers=["2A"], hours_until_departure=hours)

        policy = container.cancellation.get_cancellation_policy(str(reservation.id))
        amount = container.cancellation.calculate_refund_amount(str(reservation.id))

        assert policy.refund_percentage == percentage
        assert amount.amount == refund

    def test_departed_flight(self, container, create_reservation, clock):
        reservation = create_reservation(hours_until_departure=2)
        clock.advance(3)

        with pytest.raises(CancellationNotAllowedException) as exc_info:
            container.cancellation.get_cancellation_policy(str(reservation.id))

        assert exc_info.value.hours_remaining < 0

    def test_unknown_reservation(self, container):
        with pytest.raises(ResourceNotFoundException):
            container.cancellation.get_cancellation_policy("RES-00000000")

    def test_blank_reservation_id(self, container):
        with pytest.raises(ValidationException):
            container.cancellation.calculate_refund_amount(" ")


class TestCancelReservation:
    def test_cancel_paid_reservation(
        self,
        container,
        repositories,
        bank_gateway,
        create_reservation,
        pay_reservation,
    ):
        """キャンセルで座席を解放し、ポリシーに従って払い戻す"""

        # Arrange
        reservation = create_reservation(seat_numbers=["2A"], hours_until_departure=30)
        payment = pay_reservation(reservation)

        # Act
        result = container.cancellation.cancel_reservation(
            str(reservation.id), "Change of plans"
        )

        # Assert
        assert result is True
        stored = repositories.reservations.find_by_id(reservation.id)
        assert stored.status == ReservationStatus.CANCELLED
        assert stored.cancellation_reason == "Change of plans"
        assert _seat_status(repositories, reservation.flight_id, "2A") == SeatStatus.AVAILABLE
        assert repositories.flights.find_by_id(reservation.flight_id).available_seats == 20

        refunds = container.payment_query.get_refunds(str(reservation.id))
        assert [(r.status, r.amount.amount) for r in refunds] == [
            (RefundStatus.COMPLETED, Decimal("10000.00"))
        ]
        assert refunds[0].hours_before_departure == 30
        assert repositories.payments.find_by_id(payment.id).status == PaymentStatus.REFUNDED
        assert bank_gateway.refunded == [payment.id]

    def test_late_cancellation_refunds_nothing(
        self, container, bank_gateway, create_reservation, pay_reservation
    ):
        reservation = create_reservation(seat_numbers=["2A"], hours_until_departure=5)
        pay_reservation(reservation)

        container.cancellation.cancel_reservation(str(reservation.id), "Late")

        refunds = container.payment_query.get_refunds(str(reservation.id))
        assert [(r.status, r.amount.amount) for r in refunds] == [
            (RefundStatus.SKIPPED, Decimal("0"))
        ]
        assert bank_gateway.refunded == []

    def test_cancel_twice(self, container, create_reservation):
        reservation = create_reservation()
        container.cancellation.cancel_reservation(str(reservation.id), "first")

        with pytest.raises(ReservationAlreadyCancelledException):
            container.cancellation.cancel_reservation(str(reservation.id), "second")

    def test_policy_after_cancel_is_not_allowed(self, container, create_reservation):
        reservation = create_reservation()
        container.cancellation.cancel_reservation(str(reservation.id), "done")

        with pytest.raises(CancellationNotAllowedException):
            container.cancellation.get_cancellation_policy(str(reservation.id))

    def test_departed_flight_cannot_be_cancelled(
        self, container, repositories, create_reservation, clock
    ):
        reservation = create_reservation(hours_until_departure=1)
        clock.advance(2)

        with pytest.raises(CancellationNotAllowedException):
            container.cancellation.cancel_reservation(str(reservation.id), "too late")

        stored = repositories.reservations.find_by_id(reservation.id)
        assert stored.status == ReservationStatus.PENDING

    def test_concurrent_cancel_is_reported_as_already_cancelled(
        self, container, repositories, create_reservation, clock
    ):
        """更新時の競合で相手がキャンセル済みなら ReservationAlreadyCancelledException"""

        # Arrange
        reservation = create_reservation()
        snapshot = repositories.reservations.find_by_id(reservation.id)
        container.cancellation.cancel_reservation(str(reservation.id), "winner")

        stale = MagicMock(wraps=repositories.reservations)
        stale.find_by_id.side_effect = [
            snapshot,
            repositories.reservations.find_by_id(reservation.id),
        ]
        service = CancellationService(
            reservation_repository=stale,
            flight_repository=repositories.flights,
            seat_inventory=SeatInventoryService(
                seat_repository=repositories.seats,
                flight_repository=repositories.flights,
            ),
            refund_payment=container.refund_payment,
            clock=clock,
        )

        # Act
        with pytest.raises(ReservationAlreadyCancelledException):
            service.cancel_reservation(str(reservation.id), "loser")

        # Assert
        stored = repositories.reservations.find_by_id(reservation.id)
        assert stored.cancellation_reason == "winner"
        assert len(container.payment_query.get_refunds(str(reservation.id))) == 1

    def test_partial_refund_sends_only_the_refunded_share_to_bank(
        self, container, bank_gateway, create_reservation, pay_reservation
    ):
        """50% 区分のキャンセルでは銀行にも半額だけを払い戻す"""

        # Arrange
        reservation = create_reservation(seat_numbers=["2A"], hours_until_departure=30)
        payment = pay_reservation(reservation)

        # Act
        container.cancellation.cancel_reservation(str(reservation.id), "Half")

        # Assert
        assert bank_gateway.refunded == [payment.id]
        assert bank_gateway.refunded_amounts == [Money.dzd("10000.00")]

    def test_refund_never_exceeds_amount_paid_after_upgrade(
        self,
        container,
        repositories,
        bank_gateway,
        create_reservation,
        pay_reservation,
    ):
        """座席変更で総額が上がっても払い戻しは支払済み額まで"""

        # Arrange
        reservation = create_reservation(seat_numbers=["3A"], hours_until_departure=72)
        payment = pay_reservation(reservation)
        upgraded = container.modification.modify_seats(str(reservation.id), ["1A"])
        assert upgraded.total_price.amount == Decimal("40000")

        # Act
        container.cancellation.cancel_reservation(str(reservation.id), "Upgrade regret")

        # Assert
        refunds = container.payment_query.get_refunds(str(reservation.id))
        assert [(r.status, r.amount.amount) for r in refunds] == [
            (RefundStatus.COMPLETED, Decimal("10000"))
        ]
        assert refunds[0].amount.amount <= payment.amount.amount
        assert bank_gateway.refunded_amounts == [payment.amount]
        assert repositories.payments.find_by_id(payment.id).status == PaymentStatus.REFUNDED

    def test_refund_failure_is_logged_and_raised(
        self, monkeypatch, container, repositories, create_reservation, clock
    ):
        """払い戻しの記録に失敗した場合は予約IDを添えて記録し、例外を伝播する"""

        # Arrange
        reservation = create_reservation(seat_numbers=["3B"])
        refund_payment = MagicMock()
        refund_payment.settle_cancellation.side_effect = RefundException("bank down")
        logger = MagicMock()
        monkeypatch.setattr(cancel_module, "logger", logger)
        service = CancellationService(
            reservation_repository=repositories.reservations,
            flight_repository=repositories.flights,
            seat_inventory=SeatInventoryService(
                seat_repository=repositories.seats,
                flight_repository=repositories.flights,
            ),
            refund_payment=refund_payment,
            clock=clock,
        )

        # Act
        with pytest.raises(RefundException):
            service.cancel_reservation(str(reservation.id), "Refund outage")

        # Assert
        logger.exception.assert_called_once()
        assert logger.exception.call_args.kwargs["extra"]["reservation_id"] == str(
            reservation.id
        )
        stored = repositories.reservations.find_by_id(reservation.id)
        assert stored.status == ReservationStatus.CANCELLED

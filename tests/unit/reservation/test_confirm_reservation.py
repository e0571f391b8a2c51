import pytest

from skybooking.reservation.applications.confirm_reservation import (
    ConfirmReservationService,
    TicketIssuanceService,
)
from skybooking.reservation.domain.enum import ReservationStatus
from skybooking.reservation.domain.factory import TicketFactory
from skybooking.reservation.domain.value_object import ReservationId
from skybooking.shared.domain.exception import (
    ReservationAlreadyCancelledException,
    ResourceNotFoundException,
)


@pytest.fixture
def confirm_service(repositories, clock):
    return ConfirmReservationService(
        reservation_repository=repositories.reservations,
        ticket_issuance=TicketIssuanceService(
            ticket_repository=repositories.tickets,
            flight_repository=repositories.flights,
            seat_repository=repositories.seats,
            factory=TicketFactory(),
            clock=clock,
        ),
    )


class TestConfirmReservationService:
    def test_payment_confirms_and_issues_tickets(
        self, container, repositories, create_reservation, pay_reservation
    ):
        # Arrange
        reservation = create_reservation(seat_numbers=["1A", "3B"])

        # Act
        payment = pay_reservation(reservation)

        # Assert
        stored = repositories.reservations.find_by_id(reservation.id)
        assert stored.status == ReservationStatus.CONFIRMED
        assert stored.payment_id == str(payment.id)

        tickets = container.reservation_query.get_tickets(str(reservation.id))
        assert [str(t.seat_number) for t in tickets] == ["1A", "3B"]
        assert [t.seat_class.value for t in tickets] == ["FIRST", "ECONOMY"]
        assert [t.passenger.first_name for t in tickets] == ["P0", "P1"]
        assert str(tickets[0].id) == f"TKT-{reservation.id}-1"

    def test_confirm_returns_reservation_and_tickets(
        self, confirm_service, create_reservation
    ):
        reservation = create_reservation()

        confirmed, tickets = confirm_service.confirm(
            reservation.id, f"PAY-{reservation.id}-1a2b3c4d"
        )

        assert confirmed.status == ReservationStatus.CONFIRMED
        assert len(tickets) == 1

    def test_cancelled_reservation_cannot_be_confirmed(
        self, container, confirm_service, create_reservation
    ):
        reservation = create_reservation()
        container.cancellation.cancel_reservation(str(reservation.id), "Plans changed")

        with pytest.raises(ReservationAlreadyCancelledException):
            confirm_service.confirm(reservation.id, f"PAY-{reservation.id}-1a2b3c4d")

    def test_unknown_reservation(self, confirm_service):
        with pytest.raises(ResourceNotFoundException):
            confirm_service.confirm(
                ReservationId(value="RES-00000000"), "PAY-RES-00000000-1a2b3c4d"
            )

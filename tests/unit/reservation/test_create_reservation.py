import threading
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from skybooking.flight.applications.seat_inventory import SeatInventoryService
from skybooking.flight.domain.enum import SeatStatus
from skybooking.reservation.applications.create_reservation import (
    CreateReservationService,
)
from skybooking.reservation.domain.enum import ReservationStatus
from skybooking.reservation.domain.factory import ReservationFactory
from skybooking.shared.domain import CustomerId
from skybooking.shared.domain.exception import (
    PersistenceUnavailableException,
    ReservationException,
    ResourceNotFoundException,
    SeatUnavailableException,
    ValidationException,
)


def _seat_status(repositories, flight_id, seat_number):
    seats = {str(s.seat_number): s for s in repositories.seats.find_by_flight(flight_id)}
    return seats[seat_number].status


class TestCreateReservationService:
    def test_create_pending_reservation(
        self, container, repositories, create_flight, passenger_details
    ):
        """座席を確保し、座席料金の合計で PENDING の予約を作る"""

        # Arrange
        flight = create_flight()

        # Act
        reservation = container.create_reservation.create(
            customer_id="customer-1",
            flight_id=str(flight.id),
            seat_numbers=["2A", "3A"],
            passengers=[passenger_details("Amina"), passenger_details("Yacine")],
        )

        # Assert
        assert reservation.status == ReservationStatus.PENDING
        assert reservation.total_price.amount == Decimal("30000")
        assert repositories.reservations.find_by_id(reservation.id) is not None
        assert _seat_status(repositories, flight.id, "2A") == SeatStatus.OCCUPIED
        assert _seat_status(repositories, flight.id, "3A") == SeatStatus.OCCUPIED

    def test_invalid_passenger_touches_no_seat(
        self, container, repositories, create_flight, passenger_details
    ):
        flight = create_flight()

        with pytest.raises(ValidationException):
            container.create_reservation.create(
                customer_id="customer-1",
                flight_id=str(flight.id),
                seat_numbers=["3A"],
                passengers=[passenger_details(email="not-an-email")],
            )

        assert _seat_status(repositories, flight.id, "3A") == SeatStatus.AVAILABLE
        assert repositories.flights.find_by_id(flight.id).available_seats == 20

    def test_seat_passenger_mismatch(self, container, create_flight, passenger_details):
        flight = create_flight()

        with pytest.raises(ValidationException):
            container.create_reservation.create(
                customer_id="customer-1",
                flight_id=str(flight.id),
                seat_numbers=["3A", "3B"],
                passengers=[passenger_details()],
            )

    def test_unknown_flight(self, container, passenger_details):
        with pytest.raises(ResourceNotFoundException):
            container.create_reservation.create(
                customer_id="customer-1",
                flight_id="FL-missing",
                seat_numbers=["3A"],
                passengers=[passenger_details()],
            )

    def test_departed_flight_is_not_bookable(
        self, container, create_flight, passenger_details, clock
    ):
        flight = create_flight(hours_until_departure=1)
        clock.advance(2)

        with pytest.raises(ReservationException):
            container.create_reservation.create(
                customer_id="customer-1",
                flight_id=str(flight.id),
                seat_numbers=["3A"],
                passengers=[passenger_details()],
            )

    def test_taken_seat(self, create_reservation, create_flight):
        flight = create_flight()
        create_reservation(seat_numbers=["3A"], flight=flight)

        with pytest.raises(SeatUnavailableException) as exc_info:
            create_reservation(seat_numbers=["3A"], flight=flight, customer_id="customer-2")

        assert exc_info.value.seat_numbers == ["3A"]

    @pytest.mark.parametrize(
        "failure, expected",
        [
            (RuntimeError("disk full"), ReservationException),
            (PersistenceUnavailableException("table gone"), PersistenceUnavailableException),
        ],
    )
    def test_save_failure_releases_seats(
        self, repositories, create_flight, passenger_details, clock, failure, expected
    ):
        """座席確保後に保存が失敗した場合は座席を解放する"""

        # Arrange
        flight = create_flight()
        reservation_repository = MagicMock()
        reservation_repository.save.side_effect = failure
        service = CreateReservationService(
            reservation_repository=reservation_repository,
            flight_repository=repositories.flights,
            seat_inventory=SeatInventoryService(
                seat_repository=repositories.seats,
                flight_repository=repositories.flights,
            ),
            factory=ReservationFactory(),
            clock=clock,
        )

        # Act
        with pytest.raises(expected):
            service.create(
                customer_id="customer-1",
                flight_id=str(flight.id),
                seat_numbers=["3A"],
                passengers=[passenger_details()],
            )

        # Assert
        assert _seat_status(repositories, flight.id, "3A") == SeatStatus.AVAILABLE
        assert repositories.flights.find_by_id(flight.id).available_seats == 20


class TestConcurrentCreate:
    def test_partially_overlapping_requests_have_one_winner(
        self, container, repositories, create_flight, passenger_details
    ):
        """一部の座席が重なる2件の同時予約は1件だけ成功し、敗者の座席は残らない"""

        # Arrange
        flight = create_flight()
        requests = {"left": ["5A", "5B"], "right": ["5B", "5C"]}
        barrier = threading.Barrier(len(requests))
        outcomes: dict[str, object] = {}
        lock = threading.Lock()

        def _attempt(name: str, seat_numbers: list[str]):
            barrier.wait()
            try:
                outcome = container.create_reservation.create(
                    customer_id=f"customer-{name}",
                    flight_id=str(flight.id),
                    seat_numbers=seat_numbers,
                    passengers=[passenger_details(f"P{i}") for i in range(2)],
                )
            except SeatUnavailableException as e:
                outcome = e
            with lock:
                outcomes[name] = outcome

        threads = [
            threading.Thread(target=_attempt, args=(name, seats))
            for name, seats in requests.items()
        ]

        # Act
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # Assert
        losers = [n for n, o in outcomes.items() if isinstance(o, SeatUnavailableException)]
        winners = [n for n, o in outcomes.items() if n not in losers]
        assert len(winners) == 1
        assert len(losers) == 1
        winning_seats = requests[winners[0]]
        losing_only = (set(requests[losers[0]]) - set(winning_seats)).pop()
        for seat in winning_seats:
            assert _seat_status(repositories, flight.id, seat) == SeatStatus.OCCUPIED
        assert _seat_status(repositories, flight.id, losing_only) == SeatStatus.AVAILABLE
        assert repositories.flights.find_by_id(flight.id).available_seats == 18
        stored = repositories.reservations.find_by_id(outcomes[winners[0]].id)
        assert [str(n) for n in stored.seat_numbers] == winning_seats
        assert (
            repositories.reservations.find_by_customer(
                CustomerId(value=f"customer-{losers[0]}")
            )
            == []
        )

from datetime import datetime, timedelta, timezone

import pytest

from skybooking.flight.domain.entity import Flight
from skybooking.flight.domain.enum import FlightStatus, SeatClass
from skybooking.flight.domain.value_object import FlightId, FlightNumber
from skybooking.shared.domain import IsoDateTime, Money
from skybooking.shared.domain.exception import BusinessRuleViolationException

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestFlight:
    @pytest.fixture
    def create_flight(self):
        def _factory(
            departure: datetime = NOW + timedelta(hours=10),
            duration: timedelta = timedelta(hours=1, minutes=5),
            status: FlightStatus = FlightStatus.SCHEDULED,
        ) -> Flight:
            return Flight(
                id=FlightId(value="FL-0a1b2c3d"),
                flight_number=FlightNumber(value="AH1020"),
                airline="Air Algerie",
                departure_city="Algiers",
                arrival_city="Oran",
                departure_time=IsoDateTime(departure),
                arrival_time=IsoDateTime(departure + duration),
                prices={SeatClass.ECONOMY: Money.dzd("10000")},
                total_seats=150,
                status=status,
            )

        return _factory

    def test_arrival_must_follow_departure(self, create_flight):
        with pytest.raises(BusinessRuleViolationException):
            create_flight(duration=timedelta(0))

    def test_available_seats_defaults_to_total(self, create_flight):
        assert create_flight().available_seats == 150

    def test_duration_minutes(self, create_flight):
        assert create_flight().duration_minutes == 65

    def test_has_departed_after_departure_time(self, create_flight):
        flight = create_flight(departure=NOW - timedelta(minutes=1))
        assert flight.has_departed(NOW)
        assert not flight.is_bookable(NOW)

    def test_departed_status_counts_as_departed(self, create_flight):
        flight = create_flight(status=FlightStatus.DEPARTED)
        assert flight.has_departed(NOW)

    def test_cancelled_flight_is_not_bookable(self, create_flight):
        assert not create_flight(status=FlightStatus.CANCELLED).is_bookable(NOW)

    def test_price_for_unknown_class(self, create_flight):
        with pytest.raises(BusinessRuleViolationException):
            create_flight().price_for(SeatClass.FIRST)

    def test_serves_route_ignores_case(self, create_flight):
        assert create_flight().serves_route("algiers", "ORAN")

from decimal import Decimal

from skybooking.flight.domain.enum import SeatClass, SeatStatus
from skybooking.flight.domain.factory import FlightDetails, FlightFactory, SeatMapFactory


class TestSeatMapFactory:
    def test_default_layout(self):
        """25 列 x A-F、1-2 列目ファースト、3-6 列目ビジネス"""
        factory = SeatMapFactory()

        assert factory.capacity == 150
        assert factory.seat_class_for(2) == SeatClass.FIRST
        assert factory.seat_class_for(3) == SeatClass.BUSINESS
        assert factory.seat_class_for(6) == SeatClass.BUSINESS
        assert factory.seat_class_for(7) == SeatClass.ECONOMY

    def test_build_prices_seats_by_class(self):
        details: FlightDetails = {
            "flight_number": "AH1020",
            "airline": "Air Algerie",
            "departure_city": "Algiers",
            "arrival_city": "Oran",
            "departure_time": "2025-06-04T08:00:00Z",
            "arrival_time": "2025-06-04T09:05:00Z",
            "economy_price": Decimal("10000"),
            "business_price": Decimal("20000"),
            "first_price": Decimal("40000"),
        }
        flight = FlightFactory().create(details)

        seats = SeatMapFactory().build(flight)

        assert len(seats) == flight.total_seats == 150
        assert all(s.status == SeatStatus.AVAILABLE for s in seats)
        by_number = {str(s.seat_number): s for s in seats}
        assert by_number["1A"].price.amount == Decimal("40000")
        assert by_number["4C"].price.amount == Decimal("20000")
        assert by_number["25F"].price.amount == Decimal("10000")

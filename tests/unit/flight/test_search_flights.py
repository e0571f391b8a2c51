from skybooking.flight.domain.value_object import FlightId


class TestFlightQueryService:
    def test_search_returns_bookable_flights_in_departure_order(
        self, container, create_flight, clock
    ):
        later = create_flight(hours_until_departure=30, flight_id="FL-00000002")
        earlier = create_flight(hours_until_departure=26, flight_id="FL-00000001")
        departure_date = earlier.departure_time.date_string()

        flights = container.flight_query.search_flights(
            "Algiers", "Oran", departure_date
        )

        assert [f.id for f in flights] == [earlier.id, later.id]

    def test_search_excludes_flights_without_enough_seats(
        self, container, create_flight
    ):
        flight = create_flight()

        flights = container.flight_query.search_flights(
            "Algiers", "Oran", flight.departure_time.date_string(), passengers=21
        )

        assert flights == []

    def test_search_excludes_departed_flights(self, container, create_flight, clock):
        flight = create_flight(hours_until_departure=2)
        clock.advance(3)

        flights = container.flight_query.search_flights(
            "Algiers", "Oran", flight.departure_time.date_string()
        )

        assert flights == []

    def test_get_flight(self, container, create_flight):
        flight = create_flight()
        assert container.flight_query.get_flight(flight.id).id == flight.id
        assert container.flight_query.get_flight(FlightId(value="FL-missing")) is None

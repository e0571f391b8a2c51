from datetime import datetime
from typing import Callable

from skybooking.flight.domain.entity import Flight
from skybooking.flight.domain.repository import FlightRepository
from skybooking.flight.domain.value_object import FlightId
from skybooking.shared.domain import utc_now


class FlightQueryService:
    """フライト検索ユースケース"""

    def __init__(
        self,
        repository: FlightRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repository = repository
        self._clock = clock

    def get_flight(self, flight_id: FlightId) -> Flight | None:
        return self._repository.find_by_id(flight_id)

    def search_flights(
        self,
        departure_city: str,
        arrival_city: str,
        departure_date: str,
        passengers: int = 1,
    ) -> list[Flight]:
        """路線・出発日で予約可能なフライトを検索する（出発時刻順）"""
        now = self._clock()
        flights = self._repository.find_by_route(
            departure_city, arrival_city, departure_date
        )
        bookable = [
            f
            for f in flights
            if f.is_bookable(now) and f.available_seats >= passengers
        ]
        return sorted(bookable, key=lambda f: f.departure_time.value)

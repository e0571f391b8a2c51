from decimal import Decimal
from typing import TypedDict

from skybooking.flight.domain.entity import Flight
from skybooking.flight.domain.enum import FlightStatus, SeatClass
from skybooking.flight.domain.factory.seat_map_factory import SeatMapFactory
from skybooking.flight.domain.value_object import FlightId, FlightNumber
from skybooking.shared.domain import IsoDateTime, Money


class FlightDetails(TypedDict):
    """フライト登録の入力データ構造（TypedDict）"""

    flight_number: str
    airline: str
    departure_city: str
    arrival_city: str
    departure_time: str
    arrival_time: str
    economy_price: Decimal
    business_price: Decimal
    first_price: Decimal


class FlightFactory:
    """フライトファクトリ"""

    def __init__(self, seat_map_factory: SeatMapFactory | None = None) -> None:
        self._seat_map_factory = seat_map_factory or SeatMapFactory()

    def create(
        self, details: FlightDetails, flight_id: FlightId | None = None
    ) -> Flight:
        """新規フライトを生成する（総座席数は座席表から決まる）"""
        total_seats = self._seat_map_factory.capacity
        return Flight(
            id=flight_id or FlightId.generate(),
            flight_number=FlightNumber(value=details["flight_number"]),
            airline=details["airline"],
            departure_city=details["departure_city"],
            arrival_city=details["arrival_city"],
            departure_time=IsoDateTime.from_string(details["departure_time"]),
            arrival_time=IsoDateTime.from_string(details["arrival_time"]),
            prices={
                SeatClass.ECONOMY: Money.dzd(details["economy_price"]),
                SeatClass.BUSINESS: Money.dzd(details["business_price"]),
                SeatClass.FIRST: Money.dzd(details["first_price"]),
            },
            total_seats=total_seats,
            available_seats=total_seats,
            status=FlightStatus.SCHEDULED,
        )

from skybooking.flight.domain.enum import SeatClass
from skybooking.flight.domain.value_object import FlightId, FlightNumber, SeatNumber
from skybooking.reservation.domain.value_object import (
    Passenger,
    ReservationId,
    TicketId,
)
from skybooking.shared.domain import Entity, IsoDateTime, Money


class Ticket(Entity[TicketId]):
    """航空券（予約の座席ごとに1枚、発行後は変更しない）"""

    def __init__(
        self,
        id: TicketId,
        passenger: Passenger,
        seat_number: SeatNumber,
        seat_class: SeatClass,
        flight_id: FlightId,
        flight_number: FlightNumber,
        departure_city: str,
        arrival_city: str,
        departure_time: IsoDateTime,
        arrival_time: IsoDateTime,
        price: Money,
        issued_at: IsoDateTime,
    ) -> None:
        super().__init__(id)
        self._passenger = passenger
        self._seat_number = seat_number
        self._seat_class = seat_class
        self._flight_id = flight_id
        self._flight_number = flight_number
        self._departure_city = departure_city
        self._arrival_city = arrival_city
        self._departure_time = departure_time
        self._arrival_time = arrival_time
        self._price = price
        self._issued_at = issued_at

    @property
    def reservation_id(self) -> ReservationId:
        return self._id.reservation_id

    @property
    def passenger(self) -> Passenger:
        return self._passenger

    @property
    def passenger_name(self) -> str:
        return self._passenger.full_name

    @property
    def seat_number(self) -> SeatNumber:
        return self._seat_number

    @property
    def seat_class(self) -> SeatClass:
        return self._seat_class

    @property
    def flight_id(self) -> FlightId:
        return self._flight_id

    @property
    def flight_number(self) -> FlightNumber:
        return self._flight_number

    @property
    def departure_city(self) -> str:
        return self._departure_city

    @property
    def arrival_city(self) -> str:
        return self._arrival_city

    @property
    def departure_time(self) -> IsoDateTime:
        return self._departure_time

    @property
    def arrival_time(self) -> IsoDateTime:
        return self._arrival_time

    @property
    def price(self) -> Money:
        return self._price

    @property
    def issued_at(self) -> IsoDateTime:
        return self._issued_at

from __future__ import annotations

from pydantic import BaseModel

from skybooking.flight.domain.entity import Flight, Seat


class FlightData(BaseModel):
    """フライトデータのレスポンスモデル"""

    flight_id: str
    flight_number: str
    airline: str
    departure_city: str
    arrival_city: str
    departure_time: str
    arrival_time: str
    duration_minutes: int
    prices: dict[str, str]
    currency: str
    total_seats: int
    available_seats: int
    status: str


class SeatData(BaseModel):
    """座席データのレスポンスモデル"""

    seat_number: str
    seat_class: str
    price: str
    status: str


def to_flight_data(flight: Flight) -> FlightData:
    prices = flight.prices
    currency = next(iter(prices.values())).currency if prices else "DZD"
    return FlightData(
        flight_id=str(flight.id),
        flight_number=str(flight.flight_number),
        airline=flight.airline,
        departure_city=flight.departure_city,
        arrival_city=flight.arrival_city,
        departure_time=str(flight.departure_time),
        arrival_time=str(flight.arrival_time),
        duration_minutes=flight.duration_minutes,
        prices={c.value: str(m.amount) for c, m in prices.items()},
        currency=str(currency),
        total_seats=flight.total_seats,
        available_seats=flight.available_seats,
        status=flight.status.value,
    )


def to_seat_data(seat: Seat) -> SeatData:
    return SeatData(
        seat_number=str(seat.seat_number),
        seat_class=seat.seat_class.value,
        price=str(seat.price.amount),
        status=seat.status.value,
    )


def flights_body(flights: list[Flight]) -> dict:
    data = [to_flight_data(f).model_dump() for f in flights]
    return {"status": "success", "data": data, "count": len(data)}


def seats_body(seats: list[Seat]) -> dict:
    data = [to_seat_data(s).model_dump() for s in seats]
    return {"status": "success", "data": data, "count": len(data)}


def flight_body(flight: Flight) -> dict:
    return {"status": "success", "data": to_flight_data(flight).model_dump()}

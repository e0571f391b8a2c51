from __future__ import annotations

from pydantic import BaseModel

from skybooking.reservation.domain.entity import Reservation, Ticket
from skybooking.reservation.domain.value_object import Passenger


class PassengerData(BaseModel):
    """搭乗者データ（パスポート番号はマスク済み）"""

    first_name: str
    last_name: str
    passport_number: str
    date_of_birth: str
    email: str
    phone: str


class ReservationData(BaseModel):
    """予約データのレスポンスモデル"""

    reservation_id: str
    customer_id: str
    flight_id: str
    seat_numbers: list[str]
    passengers: list[PassengerData]
    total_price: str
    currency: str
    status: str
    reservation_date: str
    payment_id: str | None = None


class TicketData(BaseModel):
    """航空券データのレスポンスモデル"""

    ticket_id: str
    reservation_id: str
    passenger_name: str
    passenger: PassengerData
    seat_number: str
    seat_class: str
    flight_number: str
    departure_city: str
    arrival_city: str
    departure_time: str
    arrival_time: str
    price: str
    currency: str


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: ReservationData
    tickets: list[TicketData] | None = None


def to_passenger_data(passenger: Passenger) -> PassengerData:
    return PassengerData(
        first_name=passenger.first_name,
        last_name=passenger.last_name,
        passport_number=passenger.masked_passport,
        date_of_birth=passenger.date_of_birth,
        email=passenger.email,
        phone=passenger.phone,
    )


def to_reservation_data(reservation: Reservation) -> ReservationData:
    return ReservationData(
        reservation_id=str(reservation.id),
        customer_id=str(reservation.customer_id),
        flight_id=str(reservation.flight_id),
        seat_numbers=[str(n) for n in reservation.seat_numbers],
        passengers=[to_passenger_data(p) for p in reservation.passengers],
        total_price=str(reservation.total_price.amount),
        currency=str(reservation.total_price.currency),
        status=reservation.status.value,
        reservation_date=str(reservation.reservation_date),
        payment_id=reservation.payment_id,
    )


def to_ticket_data(ticket: Ticket) -> TicketData:
    return TicketData(
        ticket_id=str(ticket.id),
        reservation_id=str(ticket.reservation_id),
        passenger_name=ticket.passenger_name,
        passenger=to_passenger_data(ticket.passenger),
        seat_number=str(ticket.seat_number),
        seat_class=ticket.seat_class.value,
        flight_number=str(ticket.flight_number),
        departure_city=ticket.departure_city,
        arrival_city=ticket.arrival_city,
        departure_time=str(ticket.departure_time),
        arrival_time=str(ticket.arrival_time),
        price=str(ticket.price.amount),
        currency=str(ticket.price.currency),
    )


def to_response(reservation: Reservation, tickets: list[Ticket] | None = None) -> dict:
    """Reservation エンティティをレスポンス辞書に変換する"""
    return SuccessResponse(
        data=to_reservation_data(reservation),
        tickets=[to_ticket_data(t) for t in tickets] if tickets is not None else None,
    ).model_dump(exclude_none=True)


def reservations_body(reservations: list[Reservation]) -> dict:
    data = [to_reservation_data(r).model_dump() for r in reservations]
    return {"status": "success", "data": data, "count": len(data)}

from datetime import datetime
from typing import TypedDict

from skybooking.flight.domain.entity import Flight, Seat
from skybooking.reservation.domain.entity import Reservation, Ticket
from skybooking.reservation.domain.enum import ReservationStatus
from skybooking.reservation.domain.value_object import (
    Passenger,
    ReservationId,
    TicketId,
)
from skybooking.shared.domain import CustomerId, IsoDateTime, Money
from skybooking.shared.domain.exception import BusinessRuleViolationException


class PassengerDetails(TypedDict):
    """搭乗者の入力データ構造（TypedDict）"""

    first_name: str
    last_name: str
    passport_number: str
    date_of_birth: str
    email: str
    phone: str


def total_price_of(seats: list[Seat]) -> Money:
    """座席料金の合計"""
    total = Money.zero(seats[0].price.currency)
    for seat in seats:
        total = total.add(seat.price)
    return total


class ReservationFactory:
    """予約ファクトリ"""

    def build_passengers(self, details: list[PassengerDetails]) -> list[Passenger]:
        """入力から搭乗者を生成する（不正な場合は ValidationException）"""
        return [Passenger.from_dict(dict(d)) for d in details]

    def create(
        self,
        customer_id: CustomerId,
        flight: Flight,
        seats: list[Seat],
        passengers: list[Passenger],
        now: datetime,
    ) -> Reservation:
        """確保済みの座席から PENDING の予約を生成する"""
        return Reservation(
            id=ReservationId.generate(),
            customer_id=customer_id,
            flight_id=flight.id,
            seat_numbers=[s.seat_number for s in seats],
            passengers=passengers,
            total_price=total_price_of(seats),
            reservation_date=IsoDateTime(now),
            status=ReservationStatus.PENDING,
        )


class TicketFactory:
    """航空券ファクトリ"""

    def issue(
        self,
        reservation: Reservation,
        flight: Flight,
        seats: list[Seat],
        now: datetime,
    ) -> list[Ticket]:
        """予約の座席ごとに航空券を発行する（座席と搭乗者は同じ順序で対応）"""
        by_number = {s.seat_number: s for s in seats}
        tickets: list[Ticket] = []
        for index, (seat_number, passenger) in enumerate(
            zip(reservation.seat_numbers, reservation.passengers), start=1
        ):
            seat = by_number.get(seat_number)
            if seat is None:
                raise BusinessRuleViolationException(
                    f"Seat {seat_number} is not part of flight {flight.id}"
                )
            tickets.append(
                Ticket(
                    id=TicketId.of(reservation.id, index),
                    passenger=passenger,
                    seat_number=seat_number,
                    seat_class=seat.seat_class,
                    flight_id=flight.id,
                    flight_number=flight.flight_number,
                    departure_city=flight.departure_city,
                    arrival_city=flight.arrival_city,
                    departure_time=flight.departure_time,
                    arrival_time=flight.arrival_time,
                    price=seat.price,
                    issued_at=IsoDateTime(now),
                )
            )
        return tickets

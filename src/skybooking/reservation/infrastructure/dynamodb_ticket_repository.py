from decimal import Decimal

from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from skybooking.flight.domain.enum import SeatClass
from skybooking.flight.domain.value_object import FlightId, FlightNumber, SeatNumber
from skybooking.reservation.domain.entity import Ticket
from skybooking.reservation.domain.repository import TicketRepository
from skybooking.reservation.domain.value_object import (
    Passenger,
    ReservationId,
    TicketId,
)
from skybooking.shared.domain import Currency, IsoDateTime, Money
from skybooking.shared.infrastructure import DynamoDBStore, raise_if_unavailable


def ticket_key(ticket_id: TicketId) -> dict:
    return {
        "PK": f"RESERVATION#{ticket_id.reservation_id}",
        "SK": f"TICKET#{ticket_id}",
    }


class DynamoDBTicketRepository(TicketRepository):
    """DynamoDBを使用したTicketRepository の具象実装

    航空券は予約と同じパーティション（PK=RESERVATION#<id>）に
    SK=TICKET#<航空券ID> として保存する。
    """

    def __init__(self, store: DynamoDBStore) -> None:
        self._store = store

    def replace_for_reservation(
        self, reservation_id: ReservationId, tickets: list[Ticket]
    ) -> None:
        """既存の航空券を削除して新しい航空券を保存する"""
        new_keys = {ticket_key(t.id)["SK"] for t in tickets}
        stale = [item for item in self._query(reservation_id) if item["SK"] not in new_keys]
        try:
            with self._store.table.batch_writer() as batch:
                for item in stale:
                    batch.delete_item(Key={"PK": item["PK"], "SK": item["SK"]})
                for ticket in tickets:
                    batch.put_item(Item=self._to_item(ticket))
        except (ClientError, BotoCoreError) as e:
            raise_if_unavailable(e)
            raise

    def find_by_reservation(self, reservation_id: ReservationId) -> list[Ticket]:
        return [self._to_entity(item) for item in self._query(reservation_id)]

    def find_by_id(self, ticket_id: TicketId) -> Ticket | None:
        try:
            response = self._store.table.get_item(
                Key=ticket_key(ticket_id), ConsistentRead=True
            )
        except (ClientError, BotoCoreError) as e:
            raise_if_unavailable(e)
            raise
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def _query(self, reservation_id: ReservationId) -> list[dict]:
        try:
            response = self._store.table.query(
                KeyConditionExpression=Key("PK").eq(f"RESERVATION#{reservation_id}")
                & Key("SK").begins_with("TICKET#"),
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as e:
            raise_if_unavailable(e)
            raise
        return response.get("Items", [])

    def _to_item(self, ticket: Ticket) -> dict:
        return {
            **ticket_key(ticket.id),
            "entity_type": "TICKET",
            "ticket_id": str(ticket.id),
            "reservation_id": str(ticket.reservation_id),
            "passenger": ticket.passenger.to_dict(),
            "seat_number": str(ticket.seat_number),
            "seat_class": ticket.seat_class.value,
            "flight_id": str(ticket.flight_id),
            "flight_number": str(ticket.flight_number),
            "departure_city": ticket.departure_city,
            "arrival_city": ticket.arrival_city,
            "departure_time": str(ticket.departure_time),
            "arrival_time": str(ticket.arrival_time),
            "price": str(ticket.price.amount),
            "currency": str(ticket.price.currency),
            "issued_at": str(ticket.issued_at),
        }

    def _to_entity(self, item: dict) -> Ticket:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Ticket(
            id=TicketId(value=item["ticket_id"]),
            passenger=Passenger.from_dict(item["passenger"]),
            seat_number=SeatNumber(value=item["seat_number"]),
            seat_class=SeatClass(item["seat_class"]),
            flight_id=FlightId(value=item["flight_id"]),
            flight_number=FlightNumber(value=item["flight_number"]),
            departure_city=item["departure_city"],
            arrival_city=item["arrival_city"],
            departure_time=IsoDateTime.from_string(item["departure_time"]),
            arrival_time=IsoDateTime.from_string(item["arrival_time"]),
            price=Money(
                amount=Decimal(item["price"]),
                currency=Currency(item.get("currency", "DZD")),
            ),
            issued_at=IsoDateTime.from_string(item["issued_at"]),
        )

from decimal import Decimal

from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from skybooking.flight.domain.entity import Flight, Seat
from skybooking.flight.domain.enum import FlightStatus, SeatClass
from skybooking.flight.domain.repository import FlightRepository
from skybooking.flight.domain.value_object import FlightId, FlightNumber
from skybooking.flight.infrastructure.dynamodb_seat_repository import seat_to_item
from skybooking.shared.domain import Currency, IsoDateTime, Money
from skybooking.shared.domain.exception import DuplicateResourceException
from skybooking.shared.infrastructure import (
    DynamoDBStore,
    error_code,
    raise_if_unavailable,
)

FLIGHT_SK = "METADATA"
ROUTE_INDEX = "GSI1"


def flight_key(flight_id: FlightId | str) -> dict:
    return {"PK": f"FLIGHT#{flight_id}", "SK": FLIGHT_SK}


def route_partition(departure_city: str, arrival_city: str) -> str:
    return f"ROUTE#{departure_city.upper()}#{arrival_city.upper()}"


class DynamoDBFlightRepository(FlightRepository):
    """DynamoDBを使用したFlightRepository の具象実装

    フライトは PK=FLIGHT#<id>, SK=METADATA に保存し、
    GSI1（路線 + 出発日時）で路線検索できるようにする。
    """

    def __init__(self, store: DynamoDBStore) -> None:
        self._store = store

    def save(self, flight: Flight, seats: list[Seat] | None = None) -> None:
        """フライトを新規保存する（座席表があれば同時に保存）"""
        item = {
            **flight_key(flight.id),
            "entity_type": "FLIGHT",
            "flight_id": str(flight.id),
            "flight_number": str(flight.flight_number),
            "airline": flight.airline,
            "departure_city": flight.departure_city,
            "arrival_city": flight.arrival_city,
            "departure_time": str(flight.departure_time),
            "arrival_time": str(flight.arrival_time),
            "currency": str(flight.price_for(SeatClass.ECONOMY).currency),
            "total_seats": flight.total_seats,
            "available_seats": flight.available_seats,
            "status": flight.status.value,
            "GSI1PK": route_partition(flight.departure_city, flight.arrival_city),
            "GSI1SK": str(flight.departure_time),
        }
        for seat_class, price in flight.prices.items():
            item[f"price_{seat_class.value.lower()}"] = str(price.amount)

        table = self._store.table
        try:
            table.put_item(Item=item, ConditionExpression=Attr("PK").not_exists())
            if seats:
                with table.batch_writer() as batch:
                    for seat in seats:
                        batch.put_item(Item=seat_to_item(seat))
        except ClientError as e:
            if error_code(e) == "ConditionalCheckFailedException":
                raise DuplicateResourceException(f"Flight already exists: {flight.id}")
            raise_if_unavailable(e)
            raise
        except BotoCoreError as e:
            raise_if_unavailable(e)

    def find_by_id(self, flight_id: FlightId) -> Flight | None:
        """フライトIDで検索"""
        try:
            response = self._store.table.get_item(
                Key=flight_key(flight_id), ConsistentRead=True
            )
        except (ClientError, BotoCoreError) as e:
            raise_if_unavailable(e)
            raise
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_by_route(
        self, departure_city: str, arrival_city: str, departure_date: str
    ) -> list[Flight]:
        """路線と出発日で検索（出発時刻順）"""
        try:
            response = self._store.table.query(
                IndexName=ROUTE_INDEX,
                KeyConditionExpression=Key("GSI1PK").eq(
                    route_partition(departure_city, arrival_city)
                )
                & Key("GSI1SK").begins_with(departure_date),
            )
        except (ClientError, BotoCoreError) as e:
            raise_if_unavailable(e)
            raise
        items = response.get("Items", [])
        return [self._to_entity(item) for item in items]

    def _to_entity(self, item: dict) -> Flight:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        currency = Currency(item.get("currency", "DZD"))
        prices = {
            seat_class: Money(
                amount=Decimal(item[f"price_{seat_class.value.lower()}"]),
                currency=currency,
            )
            for seat_class in SeatClass
            if f"price_{seat_class.value.lower()}" in item
        }
        return Flight(
            id=FlightId(value=item["flight_id"]),
            flight_number=FlightNumber(value=item["flight_number"]),
            airline=item["airline"],
            departure_city=item["departure_city"],
            arrival_city=item["arrival_city"],
            departure_time=IsoDateTime.from_string(item["departure_time"]),
            arrival_time=IsoDateTime.from_string(item["arrival_time"]),
            prices=prices,
            total_seats=int(item["total_seats"]),
            available_seats=int(item["available_seats"]),
            status=FlightStatus(item["status"]),
        )

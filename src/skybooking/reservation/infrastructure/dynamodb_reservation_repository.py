from decimal import Decimal

from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from skybooking.flight.domain.value_object import FlightId, SeatNumber
from skybooking.reservation.domain.entity import Reservation
from skybooking.reservation.domain.enum import ReservationStatus
from skybooking.reservation.domain.repository import ReservationRepository
from skybooking.reservation.domain.value_object import Passenger, ReservationId
from skybooking.shared.domain import Currency, CustomerId, IsoDateTime, Money
from skybooking.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
)
from skybooking.shared.infrastructure import (
    DynamoDBStore,
    error_code,
    raise_if_unavailable,
)

CUSTOMER_INDEX = "GSI1"


def reservation_key(reservation_id: ReservationId | str) -> dict:
    return {"PK": f"RESERVATION#{reservation_id}", "SK": "METADATA"}


class DynamoDBReservationRepository(ReservationRepository):
    """DynamoDBを使用したReservationRepository の具象実装

    予約は PK=RESERVATION#<id>, SK=METADATA に保存し、
    GSI1（CUSTOMER#<id>）で顧客ごとに検索できるようにする。
    """

    def __init__(self, store: DynamoDBStore) -> None:
        self._store = store

    def save(self, reservation: Reservation) -> None:
        """予約をDBに保存する"""
        item = {
            **reservation_key(reservation.id),
            "entity_type": "RESERVATION",
            "reservation_id": str(reservation.id),
            "customer_id": str(reservation.customer_id),
            "flight_id": str(reservation.flight_id),
            "seat_numbers": [str(n) for n in reservation.seat_numbers],
            "passengers": [p.to_dict() for p in reservation.passengers],
            "total_price": str(reservation.total_price.amount),
            "currency": str(reservation.total_price.currency),
            "reservation_date": str(reservation.reservation_date),
            "status": reservation.status.value,
            "GSI1PK": f"CUSTOMER#{reservation.customer_id}",
            "GSI1SK": f"RESERVATION#{reservation.reservation_date}",
        }
        if reservation.payment_id:
            item["payment_id"] = reservation.payment_id
        try:
            self._store.table.put_item(
                Item=item, ConditionExpression=Attr("PK").not_exists()
            )
        except ClientError as e:
            if error_code(e) == "ConditionalCheckFailedException":
                raise DuplicateResourceException(
                    f"Reservation already exists: {reservation.id}"
                )
            raise_if_unavailable(e)
            raise
        except BotoCoreError as e:
            raise_if_unavailable(e)

    def find_by_id(self, reservation_id: ReservationId) -> Reservation | None:
        """予約IDで検索"""
        try:
            response = self._store.table.get_item(
                Key=reservation_key(reservation_id), ConsistentRead=True
            )
        except (ClientError, BotoCoreError) as e:
            raise_if_unavailable(e)
            raise
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_by_customer(self, customer_id: CustomerId) -> list[Reservation]:
        """顧客IDで検索"""
        try:
            response = self._store.table.query(
                IndexName=CUSTOMER_INDEX,
                KeyConditionExpression=Key("GSI1PK").eq(f"CUSTOMER#{customer_id}")
                & Key("GSI1SK").begins_with("RESERVATION#"),
            )
        except (ClientError, BotoCoreError) as e:
            raise_if_unavailable(e)
            raise
        return [self._to_entity(item) for item in response.get("Items", [])]

    def update(
        self, reservation: Reservation, expected_status: ReservationStatus
    ) -> None:
        """予約を更新する（ステータスを条件とした楽観ロック）"""
        names = {"#status": "status"}
        values: dict = {
            ":status": reservation.status.value,
            ":flight_id": str(reservation.flight_id),
            ":seat_numbers": [str(n) for n in reservation.seat_numbers],
            ":total_price": str(reservation.total_price.amount),
        }
        assignments = [
            "#status = :status",
            "flight_id = :flight_id",
            "seat_numbers = :seat_numbers",
            "total_price = :total_price",
        ]
        optional = {
            "payment_id": reservation.payment_id,
            "cancellation_reason": reservation.cancellation_reason,
            "cancelled_at": (
                str(reservation.cancelled_at) if reservation.cancelled_at else None
            ),
        }
        for attribute, value in optional.items():
            if value is not None:
                assignments.append(f"{attribute} = :{attribute}")
                values[f":{attribute}"] = value

        try:
            self._store.table.update_item(
                Key=reservation_key(reservation.id),
                UpdateExpression="SET " + ", ".join(assignments),
                ConditionExpression=Attr("status").eq(expected_status.value),
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
            )
        except ClientError as e:
            if error_code(e) == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Reservation status conflict: "
                    f"expected {expected_status.value}, "
                    f"reservation_id={reservation.id}"
                )
            raise_if_unavailable(e)
            raise
        except BotoCoreError as e:
            raise_if_unavailable(e)

    def _to_entity(self, item: dict) -> Reservation:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Reservation(
            id=ReservationId(value=item["reservation_id"]),
            customer_id=CustomerId(value=item["customer_id"]),
            flight_id=FlightId(value=item["flight_id"]),
            seat_numbers=[SeatNumber(value=n) for n in item["seat_numbers"]],
            passengers=[Passenger.from_dict(p) for p in item["passengers"]],
            total_price=Money(
                amount=Decimal(item["total_price"]),
                currency=Currency(item.get("currency", "DZD")),
            ),
            reservation_date=IsoDateTime.from_string(item["reservation_date"]),
            status=ReservationStatus(item["status"]),
            payment_id=item.get("payment_id"),
            cancellation_reason=item.get("cancellation_reason"),
            cancelled_at=(
                IsoDateTime.from_string(item["cancelled_at"])
                if item.get("cancelled_at")
                else None
            ),
        )

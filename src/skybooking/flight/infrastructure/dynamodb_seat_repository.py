from decimal import Decimal

from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from skybooking.flight.domain.entity import Seat
from skybooking.flight.domain.enum import SeatClass, SeatStatus
from skybooking.flight.domain.repository import SeatRepository
from skybooking.flight.domain.value_object import FlightId, SeatNumber
from skybooking.shared.domain import Currency, Money
from skybooking.shared.domain.exception import (
    OptimisticLockException,
    ResourceNotFoundException,
    SeatUnavailableException,
)
from skybooking.shared.infrastructure import (
    DynamoDBStore,
    error_code,
    raise_if_unavailable,
)

TRANSACTION_CANCELED = "TransactionCanceledException"
CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailed"


def seat_key(flight_id: FlightId | str, seat_number: SeatNumber | str) -> dict:
    return {"PK": f"FLIGHT#{flight_id}", "SK": f"SEAT#{seat_number}"}


def seat_to_item(seat: Seat) -> dict:
    return {
        **seat_key(seat.flight_id, seat.seat_number),
        "entity_type": "SEAT",
        "flight_id": str(seat.flight_id),
        "seat_number": str(seat.seat_number),
        "seat_class": seat.seat_class.value,
        "price": str(seat.price.amount),
        "currency": str(seat.price.currency),
        "status": seat.status.value,
    }


class DynamoDBSeatRepository(SeatRepository):
    """DynamoDBを使用したSeatRepository の具象実装

    座席は PK=FLIGHT#<id>, SK=SEAT#<番号> に保存する。
    状態遷移は TransactWriteItems で行い、各座席の現在ステータスを条件とし、
    同じトランザクションでフライトの available_seats を加減算する。
    """

    def __init__(self, store: DynamoDBStore) -> None:
        self._store = store

    def find_by_flight(self, flight_id: FlightId) -> list[Seat]:
        """フライトの全座席を取得する"""
        items: list[dict] = []
        kwargs: dict = {
            "KeyConditionExpression": Key("PK").eq(f"FLIGHT#{flight_id}")
            & Key("SK").begins_with("SEAT#"),
            "ConsistentRead": True,
        }
        try:
            while True:
                response = self._store.table.query(**kwargs)
                items.extend(response.get("Items", []))
                if "LastEvaluatedKey" not in response:
                    break
                kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]
        except (ClientError, BotoCoreError) as e:
            raise_if_unavailable(e)
            raise
        return [self._to_entity(item) for item in items]

    def assign(self, flight_id: FlightId, seat_numbers: list[SeatNumber]) -> list[Seat]:
        """AVAILABLE → OCCUPIED（全席まとめて、またはまったく行わない）"""
        seats = self._lookup(flight_id, seat_numbers)
        transact_items = [
            self._transition(flight_id, n, SeatStatus.AVAILABLE, SeatStatus.OCCUPIED)
            for n in seat_numbers
        ]
        transact_items.append(self._adjust_available(flight_id, -len(seat_numbers)))

        reasons = self._transact(transact_items)
        if reasons is not None:
            failed = self._failed_seats(reasons, seat_numbers)
            raise SeatUnavailableException(
                f"Seats not available: {', '.join(failed)}", failed
            )

        for seat in seats:
            seat.occupy()
        return seats

    def release(self, flight_id: FlightId, seat_numbers: list[SeatNumber]) -> int:
        """OCCUPIED → AVAILABLE（座席ごと）。OCCUPIED でない座席は無視する"""
        released = 0
        for seat_number in seat_numbers:
            reasons = self._transact(
                [
                    self._transition(
                        flight_id,
                        seat_number,
                        SeatStatus.OCCUPIED,
                        SeatStatus.AVAILABLE,
                    ),
                    self._adjust_available(flight_id, 1),
                ]
            )
            if reasons is None:
                released += 1
        return released

    def reassign(
        self,
        flight_id: FlightId,
        release: list[SeatNumber],
        acquire: list[SeatNumber],
    ) -> list[Seat]:
        """解放と確保を1つのトランザクションで行う"""
        seats = self._lookup(flight_id, acquire)
        transact_items = [
            self._transition(flight_id, n, SeatStatus.OCCUPIED, SeatStatus.AVAILABLE)
            for n in release
        ]
        transact_items.extend(
            self._transition(flight_id, n, SeatStatus.AVAILABLE, SeatStatus.OCCUPIED)
            for n in acquire
        )
        delta = len(release) - len(acquire)
        if delta != 0:
            transact_items.append(self._adjust_available(flight_id, delta))

        reasons = self._transact(transact_items)
        if reasons is not None:
            failed_acquire = self._failed_seats(reasons[len(release) :], acquire)
            if failed_acquire:
                raise SeatUnavailableException(
                    f"Seats not available: {', '.join(failed_acquire)}",
                    failed_acquire,
                )
            raise OptimisticLockException(
                f"Seats to release are no longer occupied on flight {flight_id}"
            )

        for seat in seats:
            seat.occupy()
        return seats

    def _lookup(self, flight_id: FlightId, seat_numbers: list[SeatNumber]) -> list[Seat]:
        """要求された座席を取得する（存在しない座席は確保不可として扱う）"""
        by_number = {s.seat_number: s for s in self.find_by_flight(flight_id)}
        missing = [str(n) for n in seat_numbers if n not in by_number]
        if missing:
            raise SeatUnavailableException(
                f"Seats do not exist on flight {flight_id}: {', '.join(missing)}",
                missing,
            )
        return [by_number[n] for n in seat_numbers]

    def _transition(
        self,
        flight_id: FlightId,
        seat_number: SeatNumber,
        expected: SeatStatus,
        new: SeatStatus,
    ) -> dict:
        return {
            "Update": {
                "TableName": self._store.table_name,
                "Key": seat_key(flight_id, seat_number),
                "UpdateExpression": "SET #status = :new",
                "ConditionExpression": "#status = :expected",
                "ExpressionAttributeNames": {"#status": "status"},
                "ExpressionAttributeValues": {
                    ":new": new.value,
                    ":expected": expected.value,
                },
            }
        }

    def _adjust_available(self, flight_id: FlightId, delta: int) -> dict:
        return {
            "Update": {
                "TableName": self._store.table_name,
                "Key": {"PK": f"FLIGHT#{flight_id}", "SK": "METADATA"},
                "UpdateExpression": "ADD available_seats :delta",
                "ConditionExpression": "attribute_exists(PK)",
                "ExpressionAttributeValues": {":delta": delta},
            }
        }

    def _transact(self, transact_items: list[dict]) -> list[dict] | None:
        """トランザクション書き込みを行う

        条件チェックで取り消された場合は CancellationReasons を返し、
        成功した場合は None を返す。
        """
        try:
            self._store.client.transact_write_items(TransactItems=transact_items)
        except ClientError as e:
            if error_code(e) == TRANSACTION_CANCELED:
                reasons = e.response.get("CancellationReasons", [])
                if reasons and reasons[-1].get("Code") == CONDITIONAL_CHECK_FAILED:
                    last = transact_items[-1]["Update"]
                    if last["Key"]["SK"] == "METADATA":
                        raise ResourceNotFoundException(
                            f"Flight not found: {last['Key']['PK']}"
                        )
                return reasons
            raise_if_unavailable(e)
            raise
        except BotoCoreError as e:
            raise_if_unavailable(e)
            raise
        return None

    @staticmethod
    def _failed_seats(reasons: list[dict], seat_numbers: list[SeatNumber]) -> list[str]:
        return [
            str(seat_number)
            for seat_number, reason in zip(seat_numbers, reasons)
            if reason.get("Code") == CONDITIONAL_CHECK_FAILED
        ]

    def _to_entity(self, item: dict) -> Seat:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Seat(
            flight_id=FlightId(value=item["flight_id"]),
            seat_number=SeatNumber(value=item["seat_number"]),
            seat_class=SeatClass(item["seat_class"]),
            price=Money(
                amount=Decimal(item["price"]),
                currency=Currency(item.get("currency", "DZD")),
            ),
            status=SeatStatus(item["status"]),
        )

from decimal import Decimal

from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from skybooking.payment.domain.entity import Refund
from skybooking.payment.domain.enum import RefundStatus
from skybooking.payment.domain.repository import RefundRepository
from skybooking.payment.domain.value_object import PaymentId, RefundId
from skybooking.shared.domain import Currency, IsoDateTime, Money
from skybooking.shared.domain.exception import DuplicateResourceException
from skybooking.shared.infrastructure import (
    DynamoDBStore,
    error_code,
    raise_if_unavailable,
)


def refund_key(refund_id: RefundId) -> dict:
    return {
        "PK": f"RESERVATION#{refund_id.reservation_id}",
        "SK": f"REFUND#{refund_id}",
    }


class DynamoDBRefundRepository(RefundRepository):
    """DynamoDBを使用したRefundRepository の具象実装"""

    def __init__(self, store: DynamoDBStore) -> None:
        self._store = store

    def save(self, refund: Refund) -> None:
        item = {
            **refund_key(refund.id),
            "entity_type": "REFUND",
            "refund_id": str(refund.id),
            "reservation_id": refund.reservation_id,
            "amount": str(refund.amount.amount),
            "currency": str(refund.amount.currency),
            "status": refund.status.value,
            "reason": refund.reason,
            "refund_date": str(refund.refund_date),
        }
        if refund.payment_id is not None:
            item["payment_id"] = str(refund.payment_id)
        if refund.hours_before_departure is not None:
            item["hours_before_departure"] = refund.hours_before_departure
        try:
            self._store.table.put_item(
                Item=item, ConditionExpression=Attr("PK").not_exists()
            )
        except ClientError as e:
            if error_code(e) == "ConditionalCheckFailedException":
                raise DuplicateResourceException(f"Refund already exists: {refund.id}")
            raise_if_unavailable(e)
            raise
        except BotoCoreError as e:
            raise_if_unavailable(e)

    def find_by_id(self, refund_id: RefundId) -> Refund | None:
        try:
            response = self._store.table.get_item(
                Key=refund_key(refund_id), ConsistentRead=True
            )
        except (ClientError, BotoCoreError) as e:
            raise_if_unavailable(e)
            raise
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_by_reservation(self, reservation_id: str) -> list[Refund]:
        try:
            response = self._store.table.query(
                KeyConditionExpression=Key("PK").eq(f"RESERVATION#{reservation_id}")
                & Key("SK").begins_with("REFUND#"),
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as e:
            raise_if_unavailable(e)
            raise
        return [self._to_entity(item) for item in response.get("Items", [])]

    def _to_entity(self, item: dict) -> Refund:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        hours = item.get("hours_before_departure")
        return Refund(
            id=RefundId(value=item["refund_id"]),
            reservation_id=item["reservation_id"],
            amount=Money(
                amount=Decimal(item["amount"]),
                currency=Currency(item["currency"]),
            ),
            status=RefundStatus(item["status"]),
            reason=item["reason"],
            refund_date=IsoDateTime.from_string(item["refund_date"]),
            payment_id=(
                PaymentId(value=item["payment_id"]) if item.get("payment_id") else None
            ),
            hours_before_departure=int(hours) if hours is not None else None,
        )

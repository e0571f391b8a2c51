from decimal import Decimal

from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from skybooking.payment.domain.entity import Payment
from skybooking.payment.domain.enum import PaymentMethod, PaymentStatus
from skybooking.payment.domain.repository import PaymentRepository
from skybooking.payment.domain.value_object import PaymentId
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


def payment_key(payment_id: PaymentId) -> dict:
    return {
        "PK": f"RESERVATION#{payment_id.reservation_id}",
        "SK": f"PAYMENT#{payment_id}",
    }


class DynamoDBPaymentRepository(PaymentRepository):
    """DynamoDBを使用したPaymentRepository の具象実装

    決済は予約のパーティション（PK=RESERVATION#<id>）に SK=PAYMENT#<id> で保存する。
    決済IDに予約IDが含まれるため、IDから直接キーを組み立てられる。
    """

    def __init__(self, store: DynamoDBStore) -> None:
        self._store = store

    def save(self, payment: Payment) -> None:
        """決済をDBに保存する"""
        item = {
            **payment_key(payment.id),
            "entity_type": "PAYMENT",
            "payment_id": str(payment.id),
            "reservation_id": payment.reservation_id,
            "customer_id": str(payment.customer_id),
            "amount": str(payment.amount.amount),
            "currency": str(payment.amount.currency),
            "method": payment.method.value,
            "masked_card_number": payment.masked_card_number,
            "card_holder": payment.card_holder,
            "status": payment.status.value,
            "GSI1PK": f"CUSTOMER#{payment.customer_id}",
            "GSI1SK": f"PAYMENT#{payment.payment_date or ''}",
        }
        optional = {
            "transaction_id": payment.transaction_id,
            "bank_reference": payment.bank_reference,
            "payment_date": str(payment.payment_date) if payment.payment_date else None,
            "failure_reason": payment.failure_reason,
        }
        item.update({k: v for k, v in optional.items() if v is not None})
        try:
            self._store.table.put_item(
                Item=item, ConditionExpression=Attr("PK").not_exists()
            )
        except ClientError as e:
            if error_code(e) == "ConditionalCheckFailedException":
                raise DuplicateResourceException(f"Payment already exists: {payment.id}")
            raise_if_unavailable(e)
            raise
        except BotoCoreError as e:
            raise_if_unavailable(e)

    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        """決済IDで検索"""
        try:
            response = self._store.table.get_item(
                Key=payment_key(payment_id), ConsistentRead=True
            )
        except (ClientError, BotoCoreError) as e:
            raise_if_unavailable(e)
            raise
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_by_reservation(self, reservation_id: str) -> list[Payment]:
        """予約IDで決済を検索する"""
        try:
            response = self._store.table.query(
                KeyConditionExpression=Key("PK").eq(f"RESERVATION#{reservation_id}")
                & Key("SK").begins_with("PAYMENT#"),
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as e:
            raise_if_unavailable(e)
            raise
        return [self._to_entity(item) for item in response.get("Items", [])]

    def find_by_customer(self, customer_id: CustomerId) -> list[Payment]:
        try:
            response = self._store.table.query(
                IndexName=CUSTOMER_INDEX,
                KeyConditionExpression=Key("GSI1PK").eq(f"CUSTOMER#{customer_id}")
                & Key("GSI1SK").begins_with("PAYMENT#"),
            )
        except (ClientError, BotoCoreError) as e:
            raise_if_unavailable(e)
            raise
        return [self._to_entity(item) for item in response.get("Items", [])]

    def update(self, payment: Payment, expected_status: PaymentStatus) -> None:
        """決済のステータスを更新する"""
        values: dict = {":status": payment.status.value}
        assignments = ["#status = :status"]
        if payment.refunded_at is not None:
            assignments.append("refunded_at = :refunded_at")
            values[":refunded_at"] = str(payment.refunded_at)
        try:
            self._store.table.update_item(
                Key=payment_key(payment.id),
                UpdateExpression="SET " + ", ".join(assignments),
                ConditionExpression=Attr("status").eq(expected_status.value),
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues=values,
            )
        except ClientError as e:
            if error_code(e) == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Payment status conflict: "
                    f"expected {expected_status.value}, "
                    f"payment_id={payment.id}"
                )
            raise_if_unavailable(e)
            raise
        except BotoCoreError as e:
            raise_if_unavailable(e)

    def _to_entity(self, item: dict) -> Payment:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Payment(
            id=PaymentId(value=item["payment_id"]),
            reservation_id=item["reservation_id"],
            customer_id=CustomerId(value=item["customer_id"]),
            amount=Money(
                amount=Decimal(item["amount"]),
                currency=Currency(item["currency"]),
            ),
            method=PaymentMethod(item["method"]),
            masked_card_number=item["masked_card_number"],
            card_holder=item["card_holder"],
            status=PaymentStatus(item["status"]),
            transaction_id=item.get("transaction_id"),
            bank_reference=item.get("bank_reference"),
            payment_date=(
                IsoDateTime.from_string(item["payment_date"])
                if item.get("payment_date")
                else None
            ),
            failure_reason=item.get("failure_reason"),
            refunded_at=(
                IsoDateTime.from_string(item["refunded_at"])
                if item.get("refunded_at")
                else None
            ),
        )

from decimal import Decimal

from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from skybooking.payment.domain.entity import Invoice
from skybooking.payment.domain.repository import InvoiceRepository
from skybooking.payment.domain.value_object import InvoiceId, PaymentId
from skybooking.shared.domain import Currency, CustomerId, IsoDateTime, Money
from skybooking.shared.domain.exception import DuplicateResourceException
from skybooking.shared.infrastructure import (
    DynamoDBStore,
    error_code,
    raise_if_unavailable,
)

CUSTOMER_INDEX = "GSI1"


def invoice_key(invoice_id: InvoiceId) -> dict:
    return {
        "PK": f"RESERVATION#{invoice_id.reservation_id}",
        "SK": f"INVOICE#{invoice_id}",
    }


class DynamoDBInvoiceRepository(InvoiceRepository):
    """DynamoDBを使用したInvoiceRepository の具象実装"""

    def __init__(self, store: DynamoDBStore) -> None:
        self._store = store

    def save(self, invoice: Invoice) -> None:
        currency = str(invoice.amount.currency)
        item = {
            **invoice_key(invoice.id),
            "entity_type": "INVOICE",
            "invoice_id": str(invoice.id),
            "payment_id": str(invoice.payment_id),
            "reservation_id": invoice.reservation_id,
            "customer_id": str(invoice.customer_id),
            "billed_to": invoice.billed_to,
            "email": invoice.email,
            "amount": str(invoice.amount.amount),
            "tax_amount": str(invoice.tax_amount.amount),
            "total_amount": str(invoice.total_amount.amount),
            "currency": currency,
            "issue_date": str(invoice.issue_date),
            "due_date": str(invoice.due_date),
            "GSI1PK": f"CUSTOMER#{invoice.customer_id}",
            "GSI1SK": f"INVOICE#{invoice.issue_date}",
        }
        try:
            self._store.table.put_item(
                Item=item, ConditionExpression=Attr("PK").not_exists()
            )
        except ClientError as e:
            if error_code(e) == "ConditionalCheckFailedException":
                raise DuplicateResourceException(
                    f"Invoice already exists: {invoice.id}"
                )
            raise_if_unavailable(e)
            raise
        except BotoCoreError as e:
            raise_if_unavailable(e)

    def find_by_id(self, invoice_id: InvoiceId) -> Invoice | None:
        try:
            response = self._store.table.get_item(
                Key=invoice_key(invoice_id), ConsistentRead=True
            )
        except (ClientError, BotoCoreError) as e:
            raise_if_unavailable(e)
            raise
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_by_payment(self, payment_id: PaymentId) -> Invoice | None:
        try:
            response = self._store.table.query(
                KeyConditionExpression=Key("PK").eq(
                    f"RESERVATION#{payment_id.reservation_id}"
                )
                & Key("SK").begins_with("INVOICE#"),
                FilterExpression=Attr("payment_id").eq(str(payment_id)),
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as e:
            raise_if_unavailable(e)
            raise
        items = response.get("Items", [])
        if not items:
            return None
        return self._to_entity(items[0])

    def find_by_customer(self, customer_id: CustomerId) -> list[Invoice]:
        try:
            response = self._store.table.query(
                IndexName=CUSTOMER_INDEX,
                KeyConditionExpression=Key("GSI1PK").eq(f"CUSTOMER#{customer_id}")
                & Key("GSI1SK").begins_with("INVOICE#"),
            )
        except (ClientError, BotoCoreError) as e:
            raise_if_unavailable(e)
            raise
        return [self._to_entity(item) for item in response.get("Items", [])]

    def _to_entity(self, item: dict) -> Invoice:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        currency = Currency(item["currency"])
        return Invoice(
            id=InvoiceId(value=item["invoice_id"]),
            payment_id=PaymentId(value=item["payment_id"]),
            reservation_id=item["reservation_id"],
            customer_id=CustomerId(value=item["customer_id"]),
            billed_to=item["billed_to"],
            email=item.get("email", ""),
            amount=Money(amount=Decimal(item["amount"]), currency=currency),
            tax_amount=Money(amount=Decimal(item["tax_amount"]), currency=currency),
            total_amount=Money(amount=Decimal(item["total_amount"]), currency=currency),
            issue_date=IsoDateTime.from_string(item["issue_date"]),
            due_date=IsoDateTime.from_string(item["due_date"]),
        )

from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, Field, field_validator

from skybooking.shared.utils import to_decimal


class ProcessPaymentRequest(BaseModel):
    """決済リクエストモデル

    カード番号・有効期限・CVV の書式はドメイン側（CardDetails）で検証する。
    """

    reservation_id: str = Field(..., min_length=1)
    customer_id: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    payment_method: str = Field(..., description="CIB / EDAHABIA")
    card_number: str = Field(..., min_length=1)
    card_holder: str = Field(..., min_length=1)
    expiry_date: str = Field(..., description="MM/YY")
    cvv: str = Field(..., min_length=1)

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, value: object) -> Decimal:
        try:
            return to_decimal(value)
        except InvalidOperation as e:
            raise ValueError(f"Invalid amount: {value}") from e

    @field_validator("payment_method")
    @classmethod
    def normalize_method(cls, value: str) -> str:
        return value.strip().upper()


class RefundRequest(BaseModel):
    """払い戻しリクエストモデル"""

    reason: str = Field(default="Refund requested", min_length=1)


class GenerateInvoiceRequest(BaseModel):
    """請求書発行リクエストモデル"""

    payment_id: str = Field(..., min_length=1)

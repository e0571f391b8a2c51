from __future__ import annotations

from pydantic import BaseModel

from skybooking.payment.domain.entity import Invoice, Payment, Refund


class PaymentData(BaseModel):
    """決済データのレスポンスモデル（カード番号はマスク済み）"""

    payment_id: str
    reservation_id: str
    customer_id: str
    amount: str
    currency: str
    payment_method: str
    card_number: str
    card_holder: str
    status: str
    transaction_id: str | None = None
    bank_reference: str | None = None
    payment_date: str | None = None
    failure_reason: str | None = None
    refunded_at: str | None = None


class RefundData(BaseModel):
    """払い戻しデータのレスポンスモデル"""

    refund_id: str
    reservation_id: str
    payment_id: str | None = None
    amount: str
    currency: str
    status: str
    reason: str
    refund_date: str
    hours_before_departure: int | None = None


class InvoiceData(BaseModel):
    """請求書データのレスポンスモデル"""

    invoice_id: str
    payment_id: str
    reservation_id: str
    customer_id: str
    billed_to: str
    email: str
    amount: str
    tax_amount: str
    total_amount: str
    currency: str
    issue_date: str
    due_date: str


def _optional(value: object | None) -> str | None:
    return str(value) if value is not None else None


def to_payment_data(payment: Payment) -> PaymentData:
    return PaymentData(
        payment_id=str(payment.id),
        reservation_id=payment.reservation_id,
        customer_id=str(payment.customer_id),
        amount=str(payment.amount.amount),
        currency=str(payment.amount.currency),
        payment_method=payment.method.value,
        card_number=payment.masked_card_number,
        card_holder=payment.card_holder,
        status=payment.status.value,
        transaction_id=payment.transaction_id,
        bank_reference=payment.bank_reference,
        payment_date=_optional(payment.payment_date),
        failure_reason=payment.failure_reason,
        refunded_at=_optional(payment.refunded_at),
    )


def to_refund_data(refund: Refund) -> RefundData:
    return RefundData(
        refund_id=str(refund.id),
        reservation_id=refund.reservation_id,
        payment_id=_optional(refund.payment_id),
        amount=str(refund.amount.amount),
        currency=str(refund.amount.currency),
        status=refund.status.value,
        reason=refund.reason,
        refund_date=str(refund.refund_date),
        hours_before_departure=refund.hours_before_departure,
    )


def to_invoice_data(invoice: Invoice) -> InvoiceData:
    return InvoiceData(
        invoice_id=str(invoice.id),
        payment_id=str(invoice.payment_id),
        reservation_id=invoice.reservation_id,
        customer_id=str(invoice.customer_id),
        billed_to=invoice.billed_to,
        email=invoice.email,
        amount=str(invoice.amount.amount),
        tax_amount=str(invoice.tax_amount.amount),
        total_amount=str(invoice.total_amount.amount),
        currency=str(invoice.total_amount.currency),
        issue_date=str(invoice.issue_date),
        due_date=str(invoice.due_date),
    )


def payment_body(payment: Payment) -> dict:
    return {"status": "success", "data": to_payment_data(payment).model_dump()}


def payments_body(payments: list[Payment]) -> dict:
    data = [to_payment_data(p).model_dump() for p in payments]
    return {"status": "success", "data": data, "count": len(data)}


def invoice_body(invoice: Invoice) -> dict:
    return {"status": "success", "data": to_invoice_data(invoice).model_dump()}


def invoices_body(invoices: list[Invoice]) -> dict:
    data = [to_invoice_data(i).model_dump() for i in invoices]
    return {"status": "success", "data": data, "count": len(data)}


def refunds_body(refunds: list[Refund]) -> dict:
    data = [to_refund_data(r).model_dump() for r in refunds]
    return {"status": "success", "data": data, "count": len(data)}

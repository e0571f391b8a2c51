from .card_details import CardDetails as CardDetails
from .ids import InvoiceId as InvoiceId
from .ids import PaymentId as PaymentId
from .ids import RefundId as RefundId

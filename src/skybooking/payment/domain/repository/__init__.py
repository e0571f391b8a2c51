from .invoice_repository import InvoiceRepository as InvoiceRepository
from .payment_repository import PaymentRepository as PaymentRepository
from .refund_repository import RefundRepository as RefundRepository

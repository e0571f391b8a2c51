from .payment_factory import INVOICE_DUE_DAYS as INVOICE_DUE_DAYS
from .payment_factory import TAX_RATE as TAX_RATE
from .payment_factory import InvoiceFactory as InvoiceFactory
from .payment_factory import PaymentFactory as PaymentFactory
from .payment_factory import RefundFactory as RefundFactory

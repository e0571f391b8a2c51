from .invoice import Invoice as Invoice
from .payment import Payment as Payment
from .refund import Refund as Refund

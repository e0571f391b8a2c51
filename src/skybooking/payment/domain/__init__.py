from .entity import Invoice as Invoice
from .entity import Payment as Payment
from .entity import Refund as Refund
from .enum import PaymentMethod as PaymentMethod
from .enum import PaymentStatus as PaymentStatus
from .enum import RefundStatus as RefundStatus
from .factory import InvoiceFactory as InvoiceFactory
from .factory import PaymentFactory as PaymentFactory
from .factory import RefundFactory as RefundFactory
from .gateway import BankAuthorization as BankAuthorization
from .gateway import BankGateway as BankGateway
from .repository import InvoiceRepository as InvoiceRepository
from .repository import PaymentRepository as PaymentRepository
from .repository import RefundRepository as RefundRepository
from .value_object import CardDetails as CardDetails
from .value_object import InvoiceId as InvoiceId
from .value_object import PaymentId as PaymentId
from .value_object import RefundId as RefundId

from .dynamodb_invoice_repository import (
    DynamoDBInvoiceRepository as DynamoDBInvoiceRepository,
)
from .dynamodb_payment_repository import (
    DynamoDBPaymentRepository as DynamoDBPaymentRepository,
)
from .dynamodb_refund_repository import (
    DynamoDBRefundRepository as DynamoDBRefundRepository,
)
from .simulated_bank_gateway import SimulatedBankGateway as SimulatedBankGateway

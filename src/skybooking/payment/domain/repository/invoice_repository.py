from abc import abstractmethod

from skybooking.payment.domain.entity import Invoice
from skybooking.payment.domain.value_object import InvoiceId, PaymentId
from skybooking.shared.domain import CustomerId, Repository


class InvoiceRepository(Repository[Invoice, InvoiceId]):
    """請求書リポジトリのインターフェース"""

    @abstractmethod
    def save(self, invoice: Invoice) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, invoice_id: InvoiceId) -> Invoice | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_payment(self, payment_id: PaymentId) -> Invoice | None:
        """決済に対して発行済みの請求書"""
        raise NotImplementedError

    @abstractmethod
    def find_by_customer(self, customer_id: CustomerId) -> list[Invoice]:
        raise NotImplementedError

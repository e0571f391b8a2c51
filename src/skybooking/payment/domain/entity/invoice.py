from skybooking.payment.domain.value_object import InvoiceId, PaymentId
from skybooking.shared.domain import AggregateRoot, CustomerId, IsoDateTime, Money


class Invoice(AggregateRoot[InvoiceId]):
    """請求書"""

    def __init__(
        self,
        id: InvoiceId,
        payment_id: PaymentId,
        reservation_id: str,
        customer_id: CustomerId,
        billed_to: str,
        email: str,
        amount: Money,
        tax_amount: Money,
        total_amount: Money,
        issue_date: IsoDateTime,
        due_date: IsoDateTime,
    ) -> None:
        super().__init__(id)
        self._payment_id = payment_id
        self._reservation_id = reservation_id
        self._customer_id = customer_id
        self._billed_to = billed_to
        self._email = email
        self._amount = amount
        self._tax_amount = tax_amount
        self._total_amount = total_amount
        self._issue_date = issue_date
        self._due_date = due_date

    @property
    def payment_id(self) -> PaymentId:
        return self._payment_id

    @property
    def reservation_id(self) -> str:
        return self._reservation_id

    @property
    def customer_id(self) -> CustomerId:
        return self._customer_id

    @property
    def billed_to(self) -> str:
        return self._billed_to

    @property
    def email(self) -> str:
        return self._email

    @property
    def amount(self) -> Money:
        return self._amount

    @property
    def tax_amount(self) -> Money:
        return self._tax_amount

    @property
    def total_amount(self) -> Money:
        return self._total_amount

    @property
    def issue_date(self) -> IsoDateTime:
        return self._issue_date

    @property
    def due_date(self) -> IsoDateTime:
        return self._due_date

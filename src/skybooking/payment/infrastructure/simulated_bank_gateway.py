import os
import random
import time

from skybooking.payment.domain.entity import Payment
from skybooking.payment.domain.enum import PaymentMethod
from skybooking.payment.domain.gateway import BankAuthorization, BankGateway
from skybooking.payment.domain.value_object import CardDetails
from skybooking.shared.domain import Money

DEFAULT_APPROVAL_RATE = 0.95


class SimulatedBankGateway(BankGateway):
    """銀行のシミュレーター

    BANK_APPROVAL_RATE（既定 0.95）の割合で取引を承認する。
    取引IDは "CIB" / "EDH" + 数字、参照番号は "SATIM-" / "POSTE-" で始まる。
    """

    def __init__(
        self,
        approval_rate: float | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if approval_rate is None:
            approval_rate = float(
                os.getenv("BANK_APPROVAL_RATE", str(DEFAULT_APPROVAL_RATE))
            )
        if not 0.0 <= approval_rate <= 1.0:
            raise ValueError(f"Approval rate must be within [0, 1]: {approval_rate}")
        self._approval_rate = approval_rate
        self._rng = rng or random.Random()

    def authorize(self, payment: Payment, card: CardDetails) -> BankAuthorization:
        if self._rng.random() >= self._approval_rate:
            return BankAuthorization(
                approved=False,
                decline_reason="Transaction declined by bank: insufficient funds",
            )
        return BankAuthorization(
            approved=True,
            transaction_id=self._transaction_id(payment.method),
            bank_reference=self._bank_reference(payment.method),
        )

    def refund(self, payment: Payment, amount: Money) -> str:
        return f"{self._bank_reference(payment.method)}-RF"

    def _transaction_id(self, method: PaymentMethod) -> str:
        millis = int(time.time() * 1000)
        return f"{method.transaction_prefix}{millis}{self._rng.randint(1000, 9999)}"

    def _bank_reference(self, method: PaymentMethod) -> str:
        return f"{method.network}-{int(time.time())}-{self._rng.randint(100000, 999999)}"

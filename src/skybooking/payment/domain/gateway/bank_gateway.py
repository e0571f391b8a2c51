from abc import ABC, abstractmethod
from dataclasses import dataclass

from skybooking.payment.domain.entity import Payment
from skybooking.payment.domain.value_object import CardDetails
from skybooking.shared.domain import Money


@dataclass(frozen=True)
class BankAuthorization:
    """銀行の承認結果"""

    approved: bool
    transaction_id: str | None = None
    bank_reference: str | None = None
    decline_reason: str | None = None


class BankGateway(ABC):
    """決済代行（銀行）のインターフェース

    処理側の障害は PaymentException で通知する。
    拒否は例外ではなく approved=False の BankAuthorization で返す。
    """

    @abstractmethod
    def authorize(self, payment: Payment, card: CardDetails) -> BankAuthorization:
        """決済を承認依頼する"""
        raise NotImplementedError

    @abstractmethod
    def refund(self, payment: Payment, amount: Money) -> str:
        """決済のうち amount を払い戻し、銀行の参照番号を返す

        amount は決済額以下で、キャンセル規定による一部返金もある。
        """
        raise NotImplementedError

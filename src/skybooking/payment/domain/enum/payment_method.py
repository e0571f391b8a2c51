from enum import Enum


class PaymentMethod(str, Enum):
    """決済手段

    CIB: 銀行間カード（SATIM 経由）
    EDAHABIA: 郵便カード（Algérie Poste 経由）
    """

    CIB = "CIB"
    EDAHABIA = "EDAHABIA"

    @property
    def transaction_prefix(self) -> str:
        return "CIB" if self is PaymentMethod.CIB else "EDH"

    @property
    def network(self) -> str:
        return "SATIM" if self is PaymentMethod.CIB else "POSTE"

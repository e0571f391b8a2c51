from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from .currency import Currency

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """金額（通貨情報含む）"""

    amount: Decimal
    currency: Currency = field(default_factory=Currency.dzd)

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def add(self, other: Money) -> Money:
        """金額を加算する"""
        self._ensure_same_currency(other)
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def subtract_floored(self, other: Money) -> Money:
        """金額を減算する（0 未満は 0 に丸める）"""
        self._ensure_same_currency(other)
        return Money(
            amount=max(Decimal("0"), self.amount - other.amount),
            currency=self.currency,
        )

    def percentage(self, ratio: Decimal) -> Money:
        """割合を掛けた金額（小数第2位で四捨五入）"""
        amount = (self.amount * ratio).quantize(_CENT, rounding=ROUND_HALF_UP)
        return Money(amount=amount, currency=self.currency)

    def is_zero(self) -> bool:
        return self.amount == 0

    def differs_from(self, amount: Decimal, tolerance: Decimal = _CENT) -> bool:
        """指定金額との差が許容範囲を超えるか"""
        return abs(self.amount - amount) > tolerance

    def _ensure_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValueError("Cannot combine money with different currencies")

    @classmethod
    def zero(cls, currency: Currency | None = None) -> Money:
        return cls(Decimal("0"), currency or Currency.dzd())

    @classmethod
    def dzd(cls, amount: Decimal | int | str) -> Money:
        """ディナールで Money を生成"""
        return cls(Decimal(str(amount)), Currency.dzd())

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import ClassVar

from skybooking.shared.domain import IsoDateTime, Money


@dataclass(frozen=True)
class CancellationPolicy:
    """キャンセルポリシー（評価時点で計算し、永続化しない）

    | 出発までの時間 | 払い戻し率 | 手数料 |
    | 48 時間以上    | 100%       | 0      |
    | 24〜48 時間    | 50%        | 0      |
    | 24 時間未満    | 0%         | 5000   |
    """

    FULL_REFUND_HOURS: ClassVar[int] = 48
    PARTIAL_REFUND_HOURS: ClassVar[int] = 24
    LATE_CANCELLATION_FEE: ClassVar[Decimal] = Decimal("5000")
    MODIFICATION_MIN_HOURS: ClassVar[int] = 24

    refund_percentage: int
    hours_remaining: int
    flat_fee: Money

    @classmethod
    def for_hours(cls, hours_remaining: int) -> CancellationPolicy:
        """出発までの時間（時間単位）から払い戻し区分を決める"""
        if hours_remaining >= cls.FULL_REFUND_HOURS:
            return cls(100, hours_remaining, Money.zero())
        if hours_remaining >= cls.PARTIAL_REFUND_HOURS:
            return cls(50, hours_remaining, Money.zero())
        return cls(0, hours_remaining, Money.dzd(cls.LATE_CANCELLATION_FEE))

    @classmethod
    def evaluate(cls, departure_time: IsoDateTime, now: datetime) -> CancellationPolicy:
        """出発時刻と現在時刻から評価する（端数の時間は切り捨て）"""
        return cls.for_hours(departure_time.whole_hours_until(now))

    @property
    def allows_modification(self) -> bool:
        return self.hours_remaining >= self.MODIFICATION_MIN_HOURS

    def refund_for(self, total: Money) -> Money:
        """払い戻し額 = max(0, 合計 x 払い戻し率 - 手数料)"""
        refundable = total.percentage(Decimal(self.refund_percentage) / Decimal(100))
        fee = Money(amount=self.flat_fee.amount, currency=total.currency)
        return refundable.subtract_floored(fee)

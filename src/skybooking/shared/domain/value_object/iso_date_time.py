from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


@dataclass(frozen=True)
class IsoDateTime:
    """日時(ISO 8601形式)

    タイムゾーン指定がない場合は UTC とみなす。
    """

    value: datetime

    def __post_init__(self) -> None:
        if self.value.tzinfo is None:
            object.__setattr__(self, "value", self.value.replace(tzinfo=timezone.utc))

    @classmethod
    def from_string(cls, s: str) -> IsoDateTime:
        """ISO 8601 形式の文字列から生成"""
        try:
            dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError(f"Invalid ISO 8601 datetime: {s}") from e
        return cls(value=dt)

    def __str__(self) -> str:
        return self.value.isoformat()

    def is_before(self, other: IsoDateTime) -> bool:
        """他の日時より前かどうか"""
        return self.value < other.value

    def is_after(self, other: IsoDateTime) -> bool:
        """他の日時より後かどうか"""
        return self.value > other.value

    def whole_hours_until(self, now: datetime) -> int:
        """now からこの日時までの経過時間（時間単位、切り捨て）

        過去の日時に対しては負の値を返す。
        """
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        delta: timedelta = self.value - now
        return int(delta.total_seconds() // 3600)

    def date_string(self) -> str:
        return self.value.date().isoformat()


def utc_now() -> datetime:
    """現在時刻（UTC）"""
    return datetime.now(timezone.utc)

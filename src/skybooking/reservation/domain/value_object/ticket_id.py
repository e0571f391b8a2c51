from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .reservation_id import ReservationId


@dataclass(frozen=True)
class TicketId:
    """航空券ID

    予約IDを埋め込み、航空券から予約を逆引きできるようにする。
    例: "TKT-RES-9F2C41AB-1"
    """

    PREFIX: ClassVar[str] = "TKT-"

    value: str

    def __post_init__(self) -> None:
        body = self.value.removeprefix(self.PREFIX)
        if body == self.value or "-" not in body:
            raise ValueError(f"Invalid ticket id: {self.value}")
        reservation_part, _, sequence = body.rpartition("-")
        if not reservation_part or not sequence.isdigit():
            raise ValueError(f"Invalid ticket id: {self.value}")

    def __str__(self) -> str:
        return self.value

    @property
    def reservation_id(self) -> ReservationId:
        """埋め込まれた予約ID"""
        body = self.value.removeprefix(self.PREFIX)
        return ReservationId(value=body.rpartition("-")[0])

    @property
    def sequence(self) -> int:
        return int(self.value.rpartition("-")[2])

    @classmethod
    def of(cls, reservation_id: ReservationId, sequence: int) -> TicketId:
        """予約IDと座席の通し番号（1始まり）から生成"""
        return cls(value=f"{cls.PREFIX}{reservation_id}-{sequence}")

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import ClassVar, TypeVar

S = TypeVar("S", bound="ReservationScopedId")


@dataclass(frozen=True)
class ReservationScopedId:
    """予約IDを埋め込んだ識別子の基底クラス

    "<PREFIX>-<予約ID>-<8桁の16進数>" の形式。ID だけで予約の
    パーティションを特定できる。
    """

    PREFIX: ClassVar[str] = ""

    value: str

    def __post_init__(self) -> None:
        head = f"{self.PREFIX}-"
        body = self.value.removeprefix(head)
        reservation_part, _, suffix = body.rpartition("-")
        if body == self.value or not reservation_part or not suffix:
            raise ValueError(f"Invalid {type(self).__name__}: {self.value}")

    def __str__(self) -> str:
        return self.value

    @property
    def reservation_id(self) -> str:
        """埋め込まれた予約ID"""
        return self.value.removeprefix(f"{self.PREFIX}-").rpartition("-")[0]

    @classmethod
    def for_reservation(cls: type[S], reservation_id: object) -> S:
        return cls(value=f"{cls.PREFIX}-{reservation_id}-{uuid.uuid4().hex[:8]}")

from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class ReservationId:
    """予約ID

    例: "RES-9F2C41AB"
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("ReservationId cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> ReservationId:
        return cls(value=f"RES-{uuid.uuid4().hex[:8].upper()}")

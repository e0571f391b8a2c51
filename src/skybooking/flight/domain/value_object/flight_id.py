from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class FlightId:
    """フライトID

    例: "FL-1a2b3c4d"
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("FlightId cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> FlightId:
        return cls(value=f"FL-{uuid.uuid4().hex[:8]}")

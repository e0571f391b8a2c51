from dataclasses import dataclass


@dataclass(frozen=True)
class CustomerId:
    """顧客ID（認証基盤で払い出された識別子）"""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("CustomerId cannot be empty")
        object.__setattr__(self, "value", self.value.strip())

    def __str__(self) -> str:
        return self.value

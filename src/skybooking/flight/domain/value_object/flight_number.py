import re
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class FlightNumber:
    """便名（IATA 航空会社コード + 便番号）

    "AH 1020" のような空白入りの表記も受け付け、"AH1020" に正規化する。
    """

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^([A-Z0-9]{2})(\d{1,4})$")

    def __post_init__(self) -> None:
        compact = re.sub(r"\s+", "", self.value).upper()
        match = self.PATTERN.match(compact)
        if match is None or match.group(1).isdigit():
            raise ValueError(f"Invalid flight number: {self.value!r}")
        object.__setattr__(self, "value", compact)

    def __str__(self) -> str:
        return self.value

    @property
    def carrier(self) -> str:
        return self.value[:2]

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from skybooking.shared.domain.exception import (
    CancellationNotAllowedException,
    DomainException,
    SeatUnavailableException,
)

T = TypeVar("T")


class OutcomeKind(str, Enum):
    """呼び出し結果の種別"""

    OK = "OK"
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    POLICY = "POLICY"
    BACKEND = "BACKEND"
    FATAL = "FATAL"


@dataclass(frozen=True)
class CallOutcome(Generic[T]):
    """タグ付きの呼び出し結果

    呼び出し側は例外を捕捉する代わりに kind で分岐する。
    失敗時は error に元の例外、details に付随情報（残り時間・座席番号）を持つ。
    """

    kind: OutcomeKind
    value: T | None = None
    error: DomainException | None = None

    @property
    def ok(self) -> bool:
        return self.kind == OutcomeKind.OK

    @property
    def details(self) -> dict:
        if isinstance(self.error, CancellationNotAllowedException):
            return {"hours_remaining": self.error.hours_remaining}
        if isinstance(self.error, SeatUnavailableException):
            return {"seat_numbers": self.error.seat_numbers}
        return {}

    @classmethod
    def success(cls, value: T) -> CallOutcome[T]:
        return cls(kind=OutcomeKind.OK, value=value)

    @classmethod
    def failure(cls, error: DomainException) -> CallOutcome[T]:
        return cls(kind=OutcomeKind(error.kind.value), error=error)

from enum import Enum
from typing import Final


class OperationBudget(str, Enum):
    """操作種別ごとのタイムアウト予算"""

    SEARCH = "SEARCH"
    RESERVATION = "RESERVATION"
    PAYMENT = "PAYMENT"
    CANCELLATION = "CANCELLATION"
    MODIFICATION = "MODIFICATION"
    DEFAULT = "DEFAULT"

    @property
    def seconds(self) -> float:
        return BUDGET_SECONDS[self]


BUDGET_SECONDS: Final[dict[OperationBudget, float]] = {
    OperationBudget.SEARCH: 15.0,
    OperationBudget.RESERVATION: 20.0,
    OperationBudget.PAYMENT: 15.0,
    OperationBudget.CANCELLATION: 20.0,
    OperationBudget.MODIFICATION: 15.0,
    OperationBudget.DEFAULT: 10.0,
}

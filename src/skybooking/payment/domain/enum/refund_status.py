from enum import Enum


class RefundStatus(str, Enum):
    """払い戻しステータス

    SKIPPED は払い戻し額が 0 の場合（判断の記録のみ）。
    """

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    SKIPPED = "SKIPPED"

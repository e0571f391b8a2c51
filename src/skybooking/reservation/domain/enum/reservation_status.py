from enum import Enum


class ReservationStatus(str, Enum):
    """予約ステータス"""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"

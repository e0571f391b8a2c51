from enum import Enum


class SeatStatus(str, Enum):
    """座席ステータス"""

    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    BLOCKED = "BLOCKED"

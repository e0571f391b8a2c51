from enum import Enum


class FlightStatus(str, Enum):
    """フライトステータス"""

    SCHEDULED = "SCHEDULED"
    DEPARTED = "DEPARTED"
    CANCELLED = "CANCELLED"

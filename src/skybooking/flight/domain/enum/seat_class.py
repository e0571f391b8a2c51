from enum import Enum


class SeatClass(str, Enum):
    """座席クラス"""

    ECONOMY = "ECONOMY"
    BUSINESS = "BUSINESS"
    FIRST = "FIRST"

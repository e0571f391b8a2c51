from abc import ABC, abstractmethod

from skybooking.flight.domain.entity import Seat
from skybooking.flight.domain.value_object import FlightId, SeatNumber


class SeatRepository(ABC):
    """座席在庫リポジトリのインターフェース

    状態遷移はすべて条件付き書き込みで行い、フライトの空席数も同じ
    書き込みの中で更新する。
    """

    @abstractmethod
    def find_by_flight(self, flight_id: FlightId) -> list[Seat]:
        """フライトの全座席を取得する"""
        raise NotImplementedError

    @abstractmethod
    def assign(self, flight_id: FlightId, seat_numbers: list[SeatNumber]) -> list[Seat]:
        """AVAILABLE → OCCUPIED を一括で行う

        1席でも確保できなければ何も変更せず SeatUnavailableException を送出する。
        """
        raise NotImplementedError

    @abstractmethod
    def release(self, flight_id: FlightId, seat_numbers: list[SeatNumber]) -> int:
        """OCCUPIED → AVAILABLE（冪等）。解放した座席数を返す"""
        raise NotImplementedError

    @abstractmethod
    def reassign(
        self,
        flight_id: FlightId,
        release: list[SeatNumber],
        acquire: list[SeatNumber],
    ) -> list[Seat]:
        """release の解放と acquire の確保を1つのトランザクションで行う"""
        raise NotImplementedError

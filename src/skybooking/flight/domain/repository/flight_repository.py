from abc import abstractmethod

from skybooking.flight.domain.entity import Flight, Seat
from skybooking.flight.domain.value_object import FlightId
from skybooking.shared.domain import Repository


class FlightRepository(Repository[Flight, FlightId]):
    """フライトリポジトリのインターフェース"""

    @abstractmethod
    def save(self, flight: Flight, seats: list[Seat] | None = None) -> None:
        """フライトを保存する（座席表があれば同時に保存する）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, flight_id: FlightId) -> Flight | None:
        """フライトIDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_route(
        self, departure_city: str, arrival_city: str, departure_date: str
    ) -> list[Flight]:
        """路線と出発日（YYYY-MM-DD）で検索する"""
        raise NotImplementedError

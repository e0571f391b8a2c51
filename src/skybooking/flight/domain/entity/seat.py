from skybooking.flight.domain.enum import SeatClass, SeatStatus
from skybooking.flight.domain.value_object import FlightId, SeatNumber
from skybooking.shared.domain import Entity, Money
from skybooking.shared.domain.exception import SeatUnavailableException


class Seat(Entity[SeatNumber]):
    """座席

    フライト内で座席番号が一意。状態の変更は座席在庫サービス経由でのみ行う。
    """

    def __init__(
        self,
        flight_id: FlightId,
        seat_number: SeatNumber,
        seat_class: SeatClass,
        price: Money,
        status: SeatStatus = SeatStatus.AVAILABLE,
    ) -> None:
        super().__init__(seat_number)
        self._flight_id = flight_id
        self._seat_class = seat_class
        self._price = price
        self._status = status

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Seat):
            return False
        return self._flight_id == other._flight_id and self._id == other._id

    def __hash__(self) -> int:
        return hash((self._flight_id, self._id))

    @property
    def flight_id(self) -> FlightId:
        return self._flight_id

    @property
    def seat_number(self) -> SeatNumber:
        return self._id

    @property
    def seat_class(self) -> SeatClass:
        return self._seat_class

    @property
    def price(self) -> Money:
        return self._price

    @property
    def status(self) -> SeatStatus:
        return self._status

    @property
    def is_available(self) -> bool:
        return self._status == SeatStatus.AVAILABLE

    def occupy(self) -> None:
        """AVAILABLE → OCCUPIED"""
        if self._status != SeatStatus.AVAILABLE:
            raise SeatUnavailableException(
                f"Seat {self._id} is {self._status.value}", [str(self._id)]
            )
        self._status = SeatStatus.OCCUPIED

    def release(self) -> bool:
        """OCCUPIED → AVAILABLE（それ以外は何もしない）

        状態が変化した場合は True を返す。
        """
        if self._status != SeatStatus.OCCUPIED:
            return False
        self._status = SeatStatus.AVAILABLE
        return True

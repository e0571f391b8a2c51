from skybooking.flight.domain.entity import Flight, Seat
from skybooking.flight.domain.enum import SeatClass, SeatStatus
from skybooking.flight.domain.value_object import SeatNumber


class SeatMapFactory:
    """座席表ファクトリ

    デフォルトは 25 列 x 6 席（A-F）。
    1-2 列目がファースト、3-6 列目がビジネス、それ以降がエコノミー。
    """

    def __init__(
        self,
        rows: int = 25,
        letters: str = "ABCDEF",
        first_rows: int = 2,
        business_rows: int = 4,
    ) -> None:
        self._rows = rows
        self._letters = letters
        self._first_rows = first_rows
        self._business_rows = business_rows

    @property
    def capacity(self) -> int:
        return self._rows * len(self._letters)

    def seat_class_for(self, row: int) -> SeatClass:
        if row <= self._first_rows:
            return SeatClass.FIRST
        if row <= self._first_rows + self._business_rows:
            return SeatClass.BUSINESS
        return SeatClass.ECONOMY

    def build(self, flight: Flight) -> list[Seat]:
        """フライトの全座席を AVAILABLE で生成する"""
        seats: list[Seat] = []
        for row in range(1, self._rows + 1):
            seat_class = self.seat_class_for(row)
            for letter in self._letters:
                seats.append(
                    Seat(
                        flight_id=flight.id,
                        seat_number=SeatNumber.of(row, letter),
                        seat_class=seat_class,
                        price=flight.price_for(seat_class),
                        status=SeatStatus.AVAILABLE,
                    )
                )
        return seats

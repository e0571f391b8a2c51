from datetime import datetime

from skybooking.flight.domain.enum import FlightStatus, SeatClass
from skybooking.flight.domain.value_object import FlightId, FlightNumber
from skybooking.shared.domain import AggregateRoot, IsoDateTime, Money
from skybooking.shared.domain.exception import BusinessRuleViolationException


class Flight(AggregateRoot[FlightId]):
    """フライト

    available_seats は座席在庫（AVAILABLE の座席数）のキャッシュで、
    座席状態の変更と同じ書き込みで更新される。
    """

    def __init__(
        self,
        id: FlightId,
        flight_number: FlightNumber,
        airline: str,
        departure_city: str,
        arrival_city: str,
        departure_time: IsoDateTime,
        arrival_time: IsoDateTime,
        prices: dict[SeatClass, Money],
        total_seats: int,
        available_seats: int | None = None,
        status: FlightStatus = FlightStatus.SCHEDULED,
    ) -> None:
        super().__init__(id)

        self._flight_number = flight_number
        self._airline = airline
        self._departure_city = departure_city
        self._arrival_city = arrival_city
        self._departure_time = departure_time
        self._arrival_time = arrival_time
        self._prices = dict(prices)
        self._total_seats = total_seats
        self._available_seats = (
            total_seats if available_seats is None else available_seats
        )
        self._status = status

        self._validate_schedule()

    def _validate_schedule(self) -> None:
        """出発時刻 < 到着時刻"""
        if not self._departure_time.is_before(self._arrival_time):
            raise BusinessRuleViolationException(
                "Departure time must be before arrival time"
            )

    @property
    def flight_number(self) -> FlightNumber:
        return self._flight_number

    @property
    def airline(self) -> str:
        return self._airline

    @property
    def departure_city(self) -> str:
        return self._departure_city

    @property
    def arrival_city(self) -> str:
        return self._arrival_city

    @property
    def departure_time(self) -> IsoDateTime:
        return self._departure_time

    @property
    def arrival_time(self) -> IsoDateTime:
        return self._arrival_time

    @property
    def duration_minutes(self) -> int:
        delta = self._arrival_time.value - self._departure_time.value
        return int(delta.total_seconds() // 60)

    @property
    def prices(self) -> dict[SeatClass, Money]:
        return dict(self._prices)

    @property
    def total_seats(self) -> int:
        return self._total_seats

    @property
    def available_seats(self) -> int:
        return self._available_seats

    @property
    def status(self) -> FlightStatus:
        return self._status

    def price_for(self, seat_class: SeatClass) -> Money:
        """座席クラスの基本料金"""
        if seat_class not in self._prices:
            raise BusinessRuleViolationException(
                f"No fare defined for {seat_class.value} on flight {self.id}"
            )
        return self._prices[seat_class]

    def has_departed(self, now: datetime) -> bool:
        """出発時刻を過ぎているか（ステータスが DEPARTED の場合も含む）"""
        if self._status == FlightStatus.DEPARTED:
            return True
        return not self._departure_time.is_after(IsoDateTime(now))

    def is_bookable(self, now: datetime) -> bool:
        """予約受付中か"""
        return self._status == FlightStatus.SCHEDULED and not self.has_departed(now)

    def departs_on(self, departure_date: str) -> bool:
        return self._departure_time.date_string() == departure_date

    def serves_route(self, departure_city: str, arrival_city: str) -> bool:
        return (
            self._departure_city.casefold() == departure_city.casefold()
            and self._arrival_city.casefold() == arrival_city.casefold()
        )

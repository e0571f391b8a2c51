from skybooking.flight.domain.entity import Seat
from skybooking.flight.domain.repository import FlightRepository, SeatRepository
from skybooking.flight.domain.value_object import FlightId, SeatNumber
from skybooking.shared.domain.exception import (
    ResourceNotFoundException,
    ValidationException,
)
from skybooking.shared.execution import current_token


def parse_seat_numbers(seat_numbers: list[str] | list[SeatNumber]) -> list[SeatNumber]:
    """座席番号のリストを検証して SeatNumber に変換する（順序は保持）"""
    if not seat_numbers:
        raise ValidationException("At least one seat must be requested")
    try:
        parsed = [
            n if isinstance(n, SeatNumber) else SeatNumber(value=n)
            for n in seat_numbers
        ]
    except ValueError as e:
        raise ValidationException(str(e)) from e
    if len(set(parsed)) != len(parsed):
        raise ValidationException("Duplicate seat numbers in request")
    return parsed


class SeatInventoryService:
    """座席在庫ユースケース

    座席状態を変更できるのはこのサービスのみ。排他は座席単位の
    条件付き書き込みで行うため、異なるフライト同士は互いに待たない。
    """

    def __init__(
        self,
        seat_repository: SeatRepository,
        flight_repository: FlightRepository,
    ) -> None:
        self._seat_repository = seat_repository
        self._flight_repository = flight_repository

    def assign_seats(
        self, flight_id: FlightId, seat_numbers: list[str] | list[SeatNumber]
    ) -> list[Seat]:
        """座席をまとめて確保する（全席成功か、何も変更しないか）"""
        requested = parse_seat_numbers(seat_numbers)
        self._ensure_flight_exists(flight_id)
        current_token().raise_if_cancelled("seat assignment")
        return self._seat_repository.assign(flight_id, requested)

    def release_seats(
        self, flight_id: FlightId, seat_numbers: list[str] | list[SeatNumber]
    ) -> int:
        """座席を解放する（すでに空いている座席は無視）"""
        if not seat_numbers:
            return 0
        requested = parse_seat_numbers(seat_numbers)
        return self._seat_repository.release(flight_id, requested)

    def reassign_seats(
        self,
        flight_id: FlightId,
        release: list[str] | list[SeatNumber],
        acquire: list[str] | list[SeatNumber],
    ) -> list[Seat]:
        """現在の座席を解放し新しい座席を確保する（1回の書き込みで実施）

        確保できない座席があれば何も変更せず SeatUnavailableException を送出する。
        両方に含まれる座席はそのまま保持する。戻り値は acquire の順序に従う。
        """
        to_release = parse_seat_numbers(release)
        to_acquire = parse_seat_numbers(acquire)
        self._ensure_flight_exists(flight_id)

        kept = set(to_release) & set(to_acquire)
        release_only = [n for n in to_release if n not in kept]
        acquire_only = [n for n in to_acquire if n not in kept]

        current_token().raise_if_cancelled("seat reassignment")
        if release_only or acquire_only:
            self._seat_repository.reassign(flight_id, release_only, acquire_only)

        by_number = {
            s.seat_number: s for s in self._seat_repository.find_by_flight(flight_id)
        }
        return [by_number[n] for n in to_acquire]

    def list_available(self, flight_id: FlightId) -> list[Seat]:
        """空席一覧（座席番号順）"""
        self._ensure_flight_exists(flight_id)
        seats = self._seat_repository.find_by_flight(flight_id)
        available = [s for s in seats if s.is_available]
        return sorted(available, key=lambda s: s.seat_number.sort_key())

    def _ensure_flight_exists(self, flight_id: FlightId) -> None:
        if self._flight_repository.find_by_id(flight_id) is None:
            raise ResourceNotFoundException(f"Flight not found: {flight_id}")

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from skybooking.bootstrap import Repositories, build_container
from skybooking.flight.domain.entity import Flight
from skybooking.flight.domain.factory import FlightDetails, FlightFactory, SeatMapFactory
from skybooking.flight.domain.value_object import FlightId
from skybooking.reservation.domain.factory import PassengerDetails
from skybooking.shared.execution import BoundedCallExecutor
from support.in_memory import (
    InMemoryFlightRepository,
    InMemoryFlightStore,
    InMemoryInvoiceRepository,
    InMemoryPaymentRepository,
    InMemoryRefundRepository,
    InMemoryReservationRepository,
    InMemorySeatRepository,
    InMemoryTicketRepository,
    StubBankGateway,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class FixedClock:
    """テスト用の時計（advance で時刻を進める）"""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, hours: float) -> None:
        self.now = self.now + timedelta(hours=hours)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def mock_repository():
    """リポジトリのモックフィクスチャ"""
    return MagicMock()


@pytest.fixture
def seat_map_factory():
    """5 列 x 4 席の小さな座席表（1 列目ファースト、2 列目ビジネス）"""
    return SeatMapFactory(rows=5, letters="ABCD", first_rows=1, business_rows=1)


@pytest.fixture
def repositories():
    store = InMemoryFlightStore()
    return Repositories(
        flights=InMemoryFlightRepository(store),
        seats=InMemorySeatRepository(store),
        reservations=InMemoryReservationRepository(),
        tickets=InMemoryTicketRepository(),
        payments=InMemoryPaymentRepository(),
        refunds=InMemoryRefundRepository(),
        invoices=InMemoryInvoiceRepository(),
    )


@pytest.fixture
def bank_gateway():
    return StubBankGateway()


@pytest.fixture
def container(repositories, bank_gateway, clock):
    """インメモリのリポジトリで組み立てたコンテナ"""
    built = build_container(
        repositories=repositories,
        bank_gateway=bank_gateway,
        clock=clock,
        executor=BoundedCallExecutor(max_workers=4),
    )
    yield built
    built.close()


@pytest.fixture
def create_flight(repositories, seat_map_factory, clock):
    """座席表付きのフライトを登録する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        hours_until_departure: float = 72,
        flight_id: str = "FL-0a1b2c3d",
        departure_city: str = "Algiers",
        arrival_city: str = "Oran",
        economy_price: Decimal = Decimal("10000"),
    ) -> Flight:
        departure = clock() + timedelta(hours=hours_until_departure)
        details: FlightDetails = {
            "flight_number": "AH1020",
            "airline": "Air Algerie",
            "departure_city": departure_city,
            "arrival_city": arrival_city,
            "departure_time": departure.isoformat(),
            "arrival_time": (departure + timedelta(hours=1)).isoformat(),
            "economy_price": economy_price,
            "business_price": Decimal("20000"),
            "first_price": Decimal("40000"),
        }
        flight = FlightFactory(seat_map_factory).create(
            details, flight_id=FlightId(value=flight_id)
        )
        repositories.flights.save(flight, seat_map_factory.build(flight))
        return flight

    return _factory


@pytest.fixture
def passenger_details():
    """搭乗者入力を生成する Factory fixture"""

    def _factory(first_name: str = "Amina", **overrides: str) -> PassengerDetails:
        details: PassengerDetails = {
            "first_name": first_name,
            "last_name": "Benali",
            "passport_number": "P12345678",
            "date_of_birth": "1990-04-12",
            "email": "amina.benali@example.com",
            "phone": "+213 555 12 34 56",
        }
        details.update(overrides)  # type: ignore[typeddict-item]
        return details

    return _factory


@pytest.fixture
def create_reservation(container, create_flight, passenger_details):
    """フライトを登録して PENDING の予約を作る Factory fixture"""

    def _factory(
        seat_numbers: list[str] | None = None,
        hours_until_departure: float = 72,
        customer_id: str = "customer-1",
        flight: Flight | None = None,
    ):
        seats = seat_numbers or ["3A"]
        if flight is None:
            flight = create_flight(hours_until_departure=hours_until_departure)
        return container.create_reservation.create(
            customer_id=customer_id,
            flight_id=str(flight.id),
            seat_numbers=seats,
            passengers=[passenger_details(f"P{i}") for i in range(len(seats))],
        )

    return _factory


@pytest.fixture
def pay_reservation(container):
    """予約の合計額で決済する（CIB カード）"""

    def _pay(reservation):
        return container.process_payment.process(
            reservation_id=str(reservation.id),
            customer_id=str(reservation.customer_id),
            amount=reservation.total_price.amount,
            method="CIB",
            card_number="4111 1111 1111 1111",
            card_holder="Amina Benali",
            expiry_date="12/27",
            cvv="123",
        )

    return _pay

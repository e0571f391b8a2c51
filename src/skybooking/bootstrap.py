import atexit
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Callable

from skybooking.cancellation.applications.cancel_reservation import CancellationService
from skybooking.cancellation.applications.modify_reservation import (
    ModificationService,
)
from skybooking.flight.applications.search_flights import FlightQueryService
from skybooking.flight.applications.seat_inventory import SeatInventoryService
from skybooking.flight.domain.repository import FlightRepository, SeatRepository
from skybooking.flight.infrastructure import (
    DynamoDBFlightRepository,
    DynamoDBSeatRepository,
)
from skybooking.payment.applications.generate_invoice import GenerateInvoiceService
from skybooking.payment.applications.process_payment import ProcessPaymentService
from skybooking.payment.applications.query_payment import PaymentQueryService
from skybooking.payment.applications.refund_payment import RefundPaymentService
from skybooking.payment.domain.factory import (
    InvoiceFactory,
    PaymentFactory,
    RefundFactory,
)
from skybooking.payment.domain.gateway import BankGateway
from skybooking.payment.domain.repository import (
    InvoiceRepository,
    PaymentRepository,
    RefundRepository,
)
from skybooking.payment.infrastructure import (
    DynamoDBInvoiceRepository,
    DynamoDBPaymentRepository,
    DynamoDBRefundRepository,
    SimulatedBankGateway,
)
from skybooking.reservation.applications.confirm_reservation import (
    ConfirmReservationService,
    TicketIssuanceService,
)
from skybooking.reservation.applications.create_reservation import (
    CreateReservationService,
)
from skybooking.reservation.applications.query_reservation import (
    ReservationQueryService,
)
from skybooking.reservation.domain.factory import ReservationFactory, TicketFactory
from skybooking.reservation.domain.repository import (
    ReservationRepository,
    TicketRepository,
)
from skybooking.reservation.infrastructure import (
    DynamoDBReservationRepository,
    DynamoDBTicketRepository,
)
from skybooking.shared.domain import utc_now
from skybooking.shared.execution import BoundedCallExecutor
from skybooking.shared.infrastructure import DynamoDBStore


@dataclass(frozen=True)
class Repositories:
    """永続化アダプタ一式"""

    flights: FlightRepository
    seats: SeatRepository
    reservations: ReservationRepository
    tickets: TicketRepository
    payments: PaymentRepository
    refunds: RefundRepository
    invoices: InvoiceRepository


@dataclass(frozen=True)
class Container:
    """ユースケースの組み立て結果

    コールドスタート時に1度だけ組み立て、ハンドラー間で共有する。
    """

    executor: BoundedCallExecutor
    seat_inventory: SeatInventoryService
    flight_query: FlightQueryService
    create_reservation: CreateReservationService
    reservation_query: ReservationQueryService
    process_payment: ProcessPaymentService
    refund_payment: RefundPaymentService
    generate_invoice: GenerateInvoiceService
    payment_query: PaymentQueryService
    cancellation: CancellationService
    modification: ModificationService
    store: DynamoDBStore | None = None

    def close(self) -> None:
        self.executor.shutdown()
        if self.store is not None:
            self.store.close()


def dynamodb_repositories(store: DynamoDBStore) -> Repositories:
    return Repositories(
        flights=DynamoDBFlightRepository(store),
        seats=DynamoDBSeatRepository(store),
        reservations=DynamoDBReservationRepository(store),
        tickets=DynamoDBTicketRepository(store),
        payments=DynamoDBPaymentRepository(store),
        refunds=DynamoDBRefundRepository(store),
        invoices=DynamoDBInvoiceRepository(store),
    )


def build_container(
    repositories: Repositories,
    bank_gateway: BankGateway,
    clock: Callable[[], datetime] = utc_now,
    executor: BoundedCallExecutor | None = None,
    store: DynamoDBStore | None = None,
) -> Container:
    """リポジトリと銀行ゲートウェイからユースケースを組み立てる"""
    seat_inventory = SeatInventoryService(
        seat_repository=repositories.seats,
        flight_repository=repositories.flights,
    )
    ticket_issuance = TicketIssuanceService(
        ticket_repository=repositories.tickets,
        flight_repository=repositories.flights,
        seat_repository=repositories.seats,
        factory=TicketFactory(),
        clock=clock,
    )
    refund_payment = RefundPaymentService(
        payment_repository=repositories.payments,
        refund_repository=repositories.refunds,
        bank_gateway=bank_gateway,
        factory=RefundFactory(),
        clock=clock,
    )
    return Container(
        executor=executor or BoundedCallExecutor(),
        seat_inventory=seat_inventory,
        flight_query=FlightQueryService(repository=repositories.flights, clock=clock),
        create_reservation=CreateReservationService(
            reservation_repository=repositories.reservations,
            flight_repository=repositories.flights,
            seat_inventory=seat_inventory,
            factory=ReservationFactory(),
            clock=clock,
        ),
        reservation_query=ReservationQueryService(
            reservation_repository=repositories.reservations,
            ticket_repository=repositories.tickets,
        ),
        process_payment=ProcessPaymentService(
            payment_repository=repositories.payments,
            refund_repository=repositories.refunds,
            reservation_repository=repositories.reservations,
            confirm_reservation=ConfirmReservationService(
                reservation_repository=repositories.reservations,
                ticket_issuance=ticket_issuance,
            ),
            bank_gateway=bank_gateway,
            factory=PaymentFactory(),
            refund_factory=RefundFactory(),
            clock=clock,
        ),
        refund_payment=refund_payment,
        generate_invoice=GenerateInvoiceService(
            payment_repository=repositories.payments,
            invoice_repository=repositories.invoices,
            reservation_repository=repositories.reservations,
            factory=InvoiceFactory(),
            clock=clock,
        ),
        payment_query=PaymentQueryService(
            payment_repository=repositories.payments,
            refund_repository=repositories.refunds,
        ),
        cancellation=CancellationService(
            reservation_repository=repositories.reservations,
            flight_repository=repositories.flights,
            seat_inventory=seat_inventory,
            refund_payment=refund_payment,
            clock=clock,
        ),
        modification=ModificationService(
            reservation_repository=repositories.reservations,
            flight_repository=repositories.flights,
            seat_inventory=seat_inventory,
            ticket_issuance=ticket_issuance,
            clock=clock,
        ),
        store=store,
    )


@lru_cache(maxsize=1)
def get_container() -> Container:
    """Lambda 実行環境ごとのコンテナ（環境変数 TABLE_NAME のテーブルを使用）"""
    store = DynamoDBStore.from_env().open()
    container = build_container(
        repositories=dynamodb_repositories(store),
        bank_gateway=SimulatedBankGateway(),
        store=store,
    )
    atexit.register(container.close)
    return container

from datetime import datetime
from decimal import Decimal
from typing import Callable

from aws_lambda_powertools import Logger

from skybooking.payment.domain.entity import Payment
from skybooking.payment.domain.enum import PaymentMethod, PaymentStatus
from skybooking.payment.domain.factory import PaymentFactory, RefundFactory
from skybooking.payment.domain.gateway import BankGateway
from skybooking.payment.domain.repository import PaymentRepository, RefundRepository
from skybooking.payment.domain.value_object import CardDetails
from skybooking.reservation.applications.confirm_reservation import (
    ConfirmReservationService,
)
from skybooking.reservation.domain.enum import ReservationStatus
from skybooking.reservation.domain.repository import ReservationRepository
from skybooking.reservation.domain.value_object import ReservationId
from skybooking.shared.domain import CustomerId, IsoDateTime, Money, utc_now
from skybooking.shared.domain.exception import (
    DuplicateResourceException,
    InsufficientFundsException,
    OptimisticLockException,
    ReservationAlreadyCancelledException,
    ResourceNotFoundException,
    ValidationException,
)
from skybooking.shared.execution import current_token

logger = Logger()


class ProcessPaymentService:
    """決済処理ユースケース

    成功時: 決済 COMPLETED → 予約 CONFIRMED → 航空券発行。
    予約金額との差額が 0.01 を超える場合は銀行に問い合わせる前に拒否する。
    """

    def __init__(
        self,
        payment_repository: PaymentRepository,
        refund_repository: RefundRepository,
        reservation_repository: ReservationRepository,
        confirm_reservation: ConfirmReservationService,
        bank_gateway: BankGateway,
        factory: PaymentFactory,
        refund_factory: RefundFactory,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._payment_repository = payment_repository
        self._refund_repository = refund_repository
        self._reservation_repository = reservation_repository
        self._confirm_reservation = confirm_reservation
        self._bank_gateway = bank_gateway
        self._factory = factory
        self._refund_factory = refund_factory
        self._clock = clock

    def process(
        self,
        reservation_id: str,
        customer_id: str,
        amount: Decimal,
        method: PaymentMethod | str,
        card_number: str,
        card_holder: str,
        expiry_date: str,
        cvv: str,
    ) -> Payment:
        """決済を処理する"""
        if amount <= 0:
            raise ValidationException("Payment amount must be greater than zero")
        try:
            payment_method = PaymentMethod(method)
            reservation_key = ReservationId(value=reservation_id)
            customer = CustomerId(value=customer_id)
        except ValueError as e:
            raise ValidationException(str(e)) from e

        card = CardDetails(
            card_number=card_number,
            card_holder=card_holder,
            expiry_date=expiry_date,
            cvv=cvv,
        )
        card.validate(self._clock().date())

        reservation = self._reservation_repository.find_by_id(reservation_key)
        if reservation is None:
            raise ResourceNotFoundException(f"Reservation not found: {reservation_id}")
        if reservation.customer_id != customer:
            raise ValidationException(
                f"Reservation {reservation_id} does not belong to customer {customer_id}"
            )
        if reservation.is_cancelled:
            raise ReservationAlreadyCancelledException(
                f"Reservation {reservation_id} has been cancelled"
            )
        if reservation.status == ReservationStatus.CONFIRMED or self._is_paid(
            reservation_id
        ):
            raise DuplicateResourceException(
                f"Reservation {reservation_id} is already paid"
            )
        if reservation.total_price.differs_from(amount):
            raise ValidationException(
                f"Amount mismatch: expected {reservation.total_price.amount}, "
                f"received {amount}"
            )

        payment = self._factory.create(
            reservation_id=reservation_id,
            customer_id=customer,
            amount=Money(amount=amount, currency=reservation.total_price.currency),
            method=payment_method,
            card=card,
        )

        current_token().raise_if_cancelled("bank authorization")
        authorization = self._bank_gateway.authorize(payment, card)
        now = IsoDateTime(self._clock())

        if not authorization.approved:
            reason = authorization.decline_reason or "Transaction declined by bank"
            payment.fail(reason, now)
            self._payment_repository.save(payment)
            logger.info(
                "Payment declined",
                extra={
                    "payment_id": str(payment.id),
                    "reservation_id": reservation_id,
                    "card": payment.masked_card_number,
                },
            )
            raise InsufficientFundsException(reason)

        payment.complete(
            transaction_id=authorization.transaction_id or "",
            bank_reference=authorization.bank_reference or "",
            completed_at=now,
        )
        self._payment_repository.save(payment)

        try:
            self._confirm_reservation.confirm(reservation_key, str(payment.id))
        except ReservationAlreadyCancelledException:
            self._compensate(payment, "Reservation cancelled during payment")
            raise
        except OptimisticLockException as e:
            self._compensate(payment, "Reservation already paid")
            raise DuplicateResourceException(
                f"Reservation {reservation_id} is already paid"
            ) from e

        return payment

    def _is_paid(self, reservation_id: str) -> bool:
        return any(
            p.status == PaymentStatus.COMPLETED
            for p in self._payment_repository.find_by_reservation(reservation_id)
        )

    def _compensate(self, payment: Payment, reason: str) -> None:
        """確定できなかった決済を払い戻す

        並行するキャンセルで既に払い戻し済みの場合は何もしない。
        """
        now = self._clock()
        payment.refund(IsoDateTime(now))
        try:
            self._payment_repository.update(
                payment, expected_status=PaymentStatus.COMPLETED
            )
        except OptimisticLockException:
            current = self._payment_repository.find_by_id(payment.id)
            if current is None or current.status != PaymentStatus.REFUNDED:
                raise
            logger.info(
                "Payment already refunded by a concurrent cancellation",
                extra={"payment_id": str(payment.id), "reason": reason},
            )
            return
        self._bank_gateway.refund(payment, payment.amount)
        self._refund_repository.save(
            self._refund_factory.create(
                reservation_id=payment.reservation_id,
                amount=payment.amount,
                reason=reason,
                now=now,
                payment_id=payment.id,
            )
        )
        logger.warning(
            "Payment refunded because the reservation could not be confirmed",
            extra={"payment_id": str(payment.id), "reason": reason},
        )

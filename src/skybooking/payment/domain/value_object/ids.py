from dataclasses import dataclass
from typing import ClassVar

from skybooking.shared.domain import ReservationScopedId


@dataclass(frozen=True)
class PaymentId(ReservationScopedId):
    """決済ID（例: "PAY-RES-9F2C41AB-1a2b3c4d"）"""

    PREFIX: ClassVar[str] = "PAY"


@dataclass(frozen=True)
class RefundId(ReservationScopedId):
    """払い戻しID（例: "RFD-RES-9F2C41AB-1a2b3c4d"）"""

    PREFIX: ClassVar[str] = "RFD"


@dataclass(frozen=True)
class InvoiceId(ReservationScopedId):
    """請求書ID（例: "INV-RES-9F2C41AB-1a2b3c4d"）"""

    PREFIX: ClassVar[str] = "INV"

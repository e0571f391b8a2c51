from enum import Enum


class ErrorKind(str, Enum):
    """失敗の分類（呼び出し側が分岐に使う）"""

    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    POLICY = "POLICY"
    BACKEND = "BACKEND"
    FATAL = "FATAL"


class DomainException(Exception):
    """ドメイン層で発生する基底例外"""

    kind: ErrorKind = ErrorKind.BACKEND


# --- VALIDATION: 入力不備。副作用なし、修正して再送する ---


class ValidationException(DomainException):
    """入力値が不正な場合"""

    kind = ErrorKind.VALIDATION


class InvalidCardException(ValidationException):
    """カード情報が不正な場合"""

    pass


# --- NOT_FOUND ---


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    kind = ErrorKind.NOT_FOUND


# --- CONFLICT: 状態が並行して変化した。最新データで再試行可能 ---


class ConflictException(DomainException):
    """状態の競合"""

    kind = ErrorKind.CONFLICT


class BusinessRuleViolationException(ConflictException):
    """ビジネスルールに違反した場合（不正な状態遷移）"""

    pass


class DuplicateResourceException(ConflictException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    pass


class OptimisticLockException(ConflictException):
    """楽観ロックの競合エラー（ステータスが期待値と異なる場合）"""

    pass


class SeatUnavailableException(ConflictException):
    """座席が確保できない場合"""

    def __init__(self, message: str, seat_numbers: list[str] | None = None) -> None:
        super().__init__(message)
        self.seat_numbers = list(seat_numbers or [])


# 旧名称
SeatNotAvailableException = SeatUnavailableException


class ReservationAlreadyCancelledException(ConflictException):
    """予約がすでにキャンセル済みの場合"""

    pass


class RefundException(ConflictException):
    """払い戻しできない状態の決済に対する払い戻し"""

    pass


# --- POLICY: ビジネスルールによる拒否。時間が経たないと結果は変わらない ---


class PolicyException(DomainException):
    """ポリシーによる拒否"""

    kind = ErrorKind.POLICY


class CancellationNotAllowedException(PolicyException):
    """キャンセル不可"""

    def __init__(self, message: str, hours_remaining: int = 0) -> None:
        super().__init__(message)
        self.hours_remaining = hours_remaining


class ModificationNotAllowedException(PolicyException):
    """予約変更不可"""

    pass


# --- BACKEND: 一時的な失敗。冪等性に注意して再試行可能 ---


class BackendException(DomainException):
    """バックエンド処理の失敗"""

    kind = ErrorKind.BACKEND


class ReservationException(BackendException):
    """予約処理の失敗"""

    pass


class PaymentException(BackendException):
    """決済処理の失敗（決済代行側の拒否を含む）"""

    pass


class InsufficientFundsException(PaymentException):
    """銀行が取引を拒否した場合"""

    pass


class CallTimeoutException(BackendException, TimeoutError):
    """呼び出しが制限時間内に完了しなかった場合"""

    def __init__(self, label: str, timeout: float) -> None:
        super().__init__(f"Operation {label} did not complete within {timeout}s")
        self.label = label
        self.timeout = timeout


# --- FATAL: 永続化層に到達できない。この層では回復しない ---


class FatalException(DomainException):
    """回復不能な失敗"""

    kind = ErrorKind.FATAL


class PersistenceUnavailableException(FatalException):
    """永続化ストアに到達できない場合"""

    pass

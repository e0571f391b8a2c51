from concurrent.futures import ThreadPoolExecutor, wait
from contextvars import copy_context
from typing import Callable, TypeVar

from aws_lambda_powertools import Logger

from skybooking.shared.domain.exception import CallTimeoutException, DomainException

from .budget import OperationBudget
from .cancellation_token import CancellationToken, bind_token
from .outcome import CallOutcome

logger = Logger()

T = TypeVar("T")


def _run_bound(token: CancellationToken, operation: Callable[[], T]) -> T:
    bind_token(token)
    return operation()


class BoundedCallExecutor:
    """時間制限付き呼び出し

    処理は別スレッドのプールで実行し、予算時間だけ待つ。
    時間切れの場合はトークンでキャンセルを通知し、それ以上待たずに
    CallTimeoutException を送出する。自動リトライは行わない。
    """

    def __init__(self, max_workers: int = 8) -> None:
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="bounded-call"
        )

    def execute(
        self,
        operation: Callable[[], T],
        timeout: OperationBudget | float,
        label: str,
    ) -> T:
        """operation を実行し結果を返す（例外はそのまま再送出）"""
        seconds = timeout.seconds if isinstance(timeout, OperationBudget) else timeout
        token = CancellationToken()
        context = copy_context()
        future = self._pool.submit(context.run, _run_bound, token, operation)

        done, _ = wait([future], timeout=seconds)
        if not done:
            token.cancel()
            future.cancel()
            logger.warning(
                "Bounded call timed out",
                extra={"label": label, "timeout_seconds": seconds},
            )
            raise CallTimeoutException(label, seconds)

        return future.result()

    def run(
        self,
        operation: Callable[[], T],
        timeout: OperationBudget | float,
        label: str,
    ) -> CallOutcome[T]:
        """execute の結果をタグ付きの CallOutcome で返す

        ドメイン例外以外（想定外の障害）は送出する。
        """
        try:
            value = self.execute(operation, timeout, label)
        except DomainException as e:
            logger.info(
                "Bounded call failed",
                extra={"label": label, "kind": e.kind.value, "reason": str(e)},
            )
            return CallOutcome.failure(e)
        return CallOutcome.success(value)

    def shutdown(self) -> None:
        """プールを停止する（実行中の処理は待たない）"""
        self._pool.shutdown(wait=False, cancel_futures=True)

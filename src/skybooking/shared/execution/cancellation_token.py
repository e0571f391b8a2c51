from __future__ import annotations

import threading
from contextvars import ContextVar

from skybooking.shared.domain.exception import BackendException


class CancellationToken:
    """協調的キャンセルのシグナル

    実行中の処理は区切りごとに raise_if_cancelled() を呼び、
    呼び出し元がすでに待機をやめていれば処理を打ち切る。
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, checkpoint: str = "") -> None:
        if self._event.is_set():
            raise BackendException(f"Operation cancelled before {checkpoint or 'next step'}")


_NEVER_CANCELLED = CancellationToken()

_current_token: ContextVar[CancellationToken | None] = ContextVar(
    "skybooking_cancellation_token", default=None
)


def current_token() -> CancellationToken:
    """実行中の呼び出しに紐づくトークン（executor 外では常に未キャンセル）"""
    return _current_token.get() or _NEVER_CANCELLED


def bind_token(token: CancellationToken) -> None:
    _current_token.set(token)

import json
from typing import Any, Callable

from pydantic import ValidationError

from skybooking.shared.domain.exception import (
    CallTimeoutException,
    DomainException,
    ErrorKind,
)
from skybooking.shared.execution.outcome import CallOutcome

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.POLICY: 422,
    ErrorKind.BACKEND: 502,
    ErrorKind.FATAL: 503,
}


def api_response(status_code: int, body: dict) -> dict:
    """API Gateway HTTP API のレスポンス形式を生成する"""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def status_code_for(error: DomainException) -> int:
    """例外の分類から HTTP ステータスコードを決定する"""
    if isinstance(error, CallTimeoutException):
        return 504
    return _STATUS_BY_KIND[error.kind]


def error_response(error: DomainException, **details: object) -> dict:
    """ドメイン例外をエラーレスポンスに変換する"""
    body: dict = {"message": str(error), "error": error.kind.value}
    body.update(details)
    return api_response(status_code_for(error), body)


def outcome_response(
    outcome: CallOutcome,
    to_body: Callable[[Any], dict],
    status_code: int = 200,
) -> dict:
    """CallOutcome を API レスポンスに変換する

    kind で分岐し、失敗時は例外の分類に応じたステータスコードを返す。
    """
    if outcome.ok:
        return api_response(status_code, to_body(outcome.value))
    return error_response(outcome.error, **outcome.details)


def validation_error_response(error: ValidationError) -> dict:
    """pydantic のバリデーションエラーを 400 レスポンスに変換する"""
    return api_response(
        400,
        {
            "message": "Invalid request",
            "error": ErrorKind.VALIDATION.value,
            "errors": error.errors(include_url=False),
        },
    )

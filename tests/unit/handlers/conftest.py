import importlib
import json
from dataclasses import dataclass

import pytest


@dataclass
class LambdaContextStub:
    """Lambda コンテキストのスタブ（Logger.inject_lambda_context が参照する属性のみ）"""

    function_name: str = "skybooking-test"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = (
        "arn:aws:lambda:eu-west-3:123456789012:function:skybooking-test"
    )
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"


@pytest.fixture
def lambda_context():
    return LambdaContextStub()


@pytest.fixture
def api_event():
    """API Gateway HTTP API (v2) のイベントを生成する Factory fixture"""

    def _factory(
        method: str = "GET",
        path: str = "/",
        path_parameters: dict | None = None,
        body: dict | str | None = None,
        query: dict | None = None,
    ) -> dict:
        event: dict = {
            "version": "2.0",
            "routeKey": f"{method} {path}",
            "rawPath": path,
            "rawQueryString": "&".join(f"{k}={v}" for k, v in (query or {}).items()),
            "headers": {"content-type": "application/json"},
            "requestContext": {
                "accountId": "123456789012",
                "apiId": "api-id",
                "domainName": "api.example.com",
                "http": {
                    "method": method,
                    "path": path,
                    "protocol": "HTTP/1.1",
                    "sourceIp": "192.0.2.1",
                    "userAgent": "pytest",
                },
                "requestId": "request-id",
                "routeKey": f"{method} {path}",
                "stage": "$default",
            },
            "isBase64Encoded": False,
        }
        if path_parameters is not None:
            event["pathParameters"] = path_parameters
        if query is not None:
            event["queryStringParameters"] = query
        if body is not None:
            event["body"] = body if isinstance(body, str) else json.dumps(body)
        return event

    return _factory


@pytest.fixture
def use_container(monkeypatch, container):
    """ハンドラーモジュールの get_container をテスト用コンテナに差し替える"""

    def _patch(*module_names: str):
        for name in module_names:
            module = importlib.import_module(name)
            monkeypatch.setattr(module, "get_container", lambda: container)
        return container

    return _patch

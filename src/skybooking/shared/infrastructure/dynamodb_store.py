from __future__ import annotations

import os

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from skybooking.shared.domain.exception import PersistenceUnavailableException

# 永続化層に到達できないことを示すエラーコード
UNAVAILABLE_ERROR_CODES = frozenset(
    {
        "ResourceNotFoundException",
        "ServiceUnavailable",
        "InternalServerError",
        "ProvisionedThroughputExceededException",
        "RequestLimitExceeded",
    }
)


class DynamoDBStore:
    """DynamoDB テーブルへの接続ハンドル

    コールドスタート時に open() し、終了時に close() する。
    各リポジトリはこのハンドルをコンストラクタで受け取る。
    """

    def __init__(self, table_name: str, resource=None) -> None:
        self.table_name = table_name
        self._resource = resource
        self._table = None

    @classmethod
    def from_env(cls) -> DynamoDBStore:
        """環境変数 TABLE_NAME から生成する"""
        table_name = os.getenv("TABLE_NAME")
        if not table_name:
            raise PersistenceUnavailableException("TABLE_NAME is not configured")
        return cls(table_name=table_name)

    def open(self) -> DynamoDBStore:
        if self._resource is None:
            self._resource = boto3.resource("dynamodb")
        self._table = self._resource.Table(self.table_name)
        return self

    def close(self) -> None:
        self._table = None
        self._resource = None

    def __enter__(self) -> DynamoDBStore:
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def table(self):
        if self._table is None:
            raise PersistenceUnavailableException(
                f"DynamoDB store is not open: {self.table_name}"
            )
        return self._table

    @property
    def client(self):
        """トランザクション書き込み用の低レベルクライアント"""
        return self.table.meta.client


def error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


def raise_if_unavailable(error: Exception) -> None:
    """到達不能系のエラーであれば PersistenceUnavailableException に変換する"""
    if isinstance(error, BotoCoreError):
        raise PersistenceUnavailableException(str(error)) from error
    if isinstance(error, ClientError) and error_code(error) in UNAVAILABLE_ERROR_CODES:
        raise PersistenceUnavailableException(str(error)) from error

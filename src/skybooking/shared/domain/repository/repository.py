from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")
ID = TypeVar("ID")
S = TypeVar("S")


class Repository(ABC, Generic[T, ID]):
    """Repository 基底クラス

    見つからない場合は None を返す（例外にしない）。
    新規保存で同じ ID がすでにある場合は DuplicateResourceException。
    """

    @abstractmethod
    def save(self, aggregate: T) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, id: ID) -> T | None:
        raise NotImplementedError


class StatusGuardedRepository(Repository[T, ID], Generic[T, ID, S]):
    """ステータス遷移を条件付き更新で行うリポジトリ

    保存済みのステータスが expected_status のときだけ書き込む。
    異なる場合は OptimisticLockException（同じ予約・決済への書き込みは
    常に1件だけが成功する）。
    """

    @abstractmethod
    def update(self, aggregate: T, expected_status: S) -> None:
        raise NotImplementedError

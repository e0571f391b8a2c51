from typing import TypeVar

from .entity import Entity

ID = TypeVar("ID")


class AggregateRoot(Entity[ID]):
    """集約ルート

    リポジトリはこの単位で読み書きする。予約・決済のステータスは
    ルートのメソッドでのみ遷移させ、保存時は遷移前のステータスを条件にする。
    """

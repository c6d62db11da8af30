"""
キーリポジトリ

ukeysテーブルへのクエリを組み立ててストアに送る。
テナントに属する操作はすべてprefixを必須引数に取り、WHERE句で絞り込む。
"""

from datetime import datetime
from typing import Optional

from ...core.logging import get_logger
from ...domain.exceptions import ErrorCode
from ...domain.models import KeyRecord, Row
from ..store.client import SqlStoreClient
from ..store.query import Query, flatten, values_placeholders

logger = get_logger(__name__)


class KeyRepository:
    """
    キーの一覧・発行・削除・リセット・有効化
    """

    def __init__(self, store: SqlStoreClient):
        """
        Args:
            store: ストアクライアント
        """
        self.store = store

    async def list_keys(self, prefix: str, limit: int, offset: int) -> list[Row]:
        """
        プレフィックスに属するキーを作成順に取得

        Args:
            prefix: 認可スコープ
            limit: 取得件数
            offset: 開始位置

        Returns:
            キーの行
        """
        query = Query(
            "SELECT * FROM `ukeys` WHERE `prefix` = ? ORDER BY `id_key` ASC LIMIT ? OFFSET ?",
            (prefix, limit, offset),
        )
        result = await self.store.execute(query)
        return result.rows

    async def insert_keys(self, prefix: str, keys: list[str], length: int) -> None:
        """
        キーを1回のINSERTでまとめて登録

        冪等ではないため呼び出し側でリトライしないこと

        Args:
            prefix: 認可スコープ
            keys: 登録するキー
            length: 有効日数
        """
        if not keys:
            return
        query = Query(
            "INSERT INTO `ukeys`(`key`, `length`, `prefix`) VALUES "
            + values_placeholders(len(keys), 3),
            flatten([(key, length, prefix) for key in keys]),
        )
        await self.store.execute(query, error_code=ErrorCode.INSERT_FAILED)
        logger.info(f"Inserted {len(keys)} keys (prefix={prefix}, length={length})")

    async def delete_key(self, prefix: str, key: str) -> int:
        """
        キーを削除

        Returns:
            削除行数
        """
        query = Query(
            "DELETE FROM `ukeys` WHERE `key` = ? AND `prefix` = ?",
            (key, prefix),
        )
        result = await self.store.execute(query, error_code=ErrorCode.DELETE_FAILED)
        return result.affected_rows or 0

    async def reset_device(self, prefix: str, key: str) -> int:
        """
        キーのデバイスバインドを解除

        Returns:
            更新行数
        """
        query = Query(
            "UPDATE `ukeys` SET `id_device` = NULL WHERE `key` = ? AND `prefix` = ?",
            (key, prefix),
        )
        result = await self.store.execute(query, error_code=ErrorCode.UPDATE_FAILED)
        return result.affected_rows or 0

    async def find_by_key(self, key: str) -> Optional[KeyRecord]:
        """
        キー文字列でレコードを取得

        Args:
            key: キー文字列

        Returns:
            KeyRecord、存在しない場合はNone
        """
        query = Query(
            "SELECT `key`, `length`, `prefix`, `id_device`, `time_start`, `time_end` "
            "FROM `ukeys` WHERE `key` = ? LIMIT 1",
            (key,),
        )
        result = await self.store.execute(query)
        if not result.rows:
            return None
        return KeyRecord.from_row(result.rows[0])

    async def activate_first(
        self, key: str, id_device: str, time_start: datetime, time_end: datetime
    ) -> Optional[int]:
        """
        初回有効化（未有効化の場合のみ更新）

        Returns:
            更新行数（ストアが返さない場合はNone）
        """
        query = Query(
            "UPDATE `ukeys` SET `time_start` = ?, `time_end` = ?, `id_device` = ? "
            "WHERE `key` = ? AND `time_start` IS NULL "
            "AND (`id_device` IS NULL OR `id_device` = ?)",
            (time_start, time_end, id_device, key, id_device),
        )
        result = await self.store.execute(query, error_code=ErrorCode.UPDATE_FAILED)
        return result.affected_rows

    async def bind_device(self, key: str, id_device: str) -> Optional[int]:
        """
        デバイス再登録（有効化済みかつ未バインドの場合のみ更新）

        Returns:
            更新行数（ストアが返さない場合はNone）
        """
        query = Query(
            "UPDATE `ukeys` SET `id_device` = ? "
            "WHERE `key` = ? AND `time_start` IS NOT NULL AND `id_device` IS NULL",
            (id_device, key),
        )
        result = await self.store.execute(query, error_code=ErrorCode.UPDATE_FAILED)
        return result.affected_rows

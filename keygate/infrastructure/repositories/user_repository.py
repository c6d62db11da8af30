"""
ユーザーリポジトリ

usersテーブルへのクエリを組み立ててストアに送る
"""

from datetime import datetime, timezone
from typing import Optional

from ...core.logging import get_logger
from ...domain.exceptions import ErrorCode
from ...domain.models import Row, UserRecord
from ..store.client import SqlStoreClient, StoreResult
from ..store.query import Query

logger = get_logger(__name__)


class UserRepository:
    """
    ユーザーの登録・認証・プロフィール参照
    """

    def __init__(self, store: SqlStoreClient):
        """
        Args:
            store: ストアクライアント
        """
        self.store = store

    async def create(self, username: str, password: str, prefix: str) -> StoreResult:
        """
        ユーザーを登録

        Args:
            username: ユーザー名
            password: パスワード
            prefix: テナントスコープ

        Returns:
            ストアの実行結果
        """
        query = Query(
            "INSERT INTO `users`(`username`, `password`, `prefix`) VALUES (?, ?, ?)",
            (username, password, prefix),
        )
        result = await self.store.execute(query, error_code=ErrorCode.INSERT_FAILED)
        logger.info(f"User registered: {username} (prefix={prefix})")
        return result

    async def find_by_credentials(
        self, username: str, password: str
    ) -> Optional[UserRecord]:
        """
        認証情報に一致するユーザーを取得

        Args:
            username: ユーザー名
            password: パスワード

        Returns:
            一致したユーザー、存在しない場合はNone
        """
        query = Query(
            "SELECT * FROM `users` WHERE `username` = ? AND `password` = ? LIMIT 1",
            (username, password),
        )
        result = await self.store.execute(query)
        if not result.rows:
            return None
        return UserRecord.from_row(result.rows[0])

    async def touch_last_login(
        self, username: str, now: Optional[datetime] = None
    ) -> StoreResult:
        """最終ログイン時刻を更新"""
        query = Query(
            "UPDATE `users` SET `last_login` = ? WHERE `username` = ?",
            (now or datetime.now(timezone.utc), username),
        )
        return await self.store.execute(query, error_code=ErrorCode.UPDATE_FAILED)

    async def list_profiles(self, prefix: str) -> list[Row]:
        """
        プレフィックスに属するユーザーのプロフィールを取得

        Args:
            prefix: 認可スコープ

        Returns:
            id, username, prefix, last_login の行
        """
        query = Query(
            "SELECT `id`, `username`, `prefix`, `last_login` FROM `users` WHERE `prefix` = ?",
            (prefix,),
        )
        result = await self.store.execute(query)
        return result.rows

"""システム関連のスキーマ定義"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel


class StoreStatus(BaseModel):
    """
    ストア接続状況

    Attributes:
        status: ストア接続の状態（healthy/unhealthy）
        connection: ストアに到達できたか
        error: エラーメッセージ（エラー時のみ）
    """

    status: Literal["healthy", "unhealthy"]
    connection: bool
    error: Optional[str] = None


class HealthCheckResponse(BaseModel):
    """
    ヘルスチェックレスポンス

    Attributes:
        status: 全体的なヘルス状態（ok/unhealthy）
        timestamp: レスポンス生成時刻
        uptime_seconds: アプリケーション起動からの経過秒数
        store: ストア接続状況
        environment: 実行環境
    """

    status: Literal["ok", "unhealthy"]
    timestamp: datetime
    uptime_seconds: float
    store: StoreStatus
    environment: str

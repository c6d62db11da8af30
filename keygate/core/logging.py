"""アプリケーション用のロギングユーティリティ。"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional


def is_fastapi_context() -> bool:
    """
    FastAPI/uvicornコンテキストで実行中かどうかを判定する。

    Returns:
        bool: uvicornがロードされている場合True、そうでない場合False。
    """
    return "uvicorn" in sys.modules


def get_logger(name: str) -> logging.Logger:
    """
    ロガーインスタンスを取得する。

    FastAPI/uvicornコンテキスト（Webサーバー）で実行中の場合は"uvicorn"ロガーを使用し、
    FastAPIのロギングと一貫したフォーマット・出力を保証する。
    それ以外の場合は、提供されたモジュール名のロガーを使用する。

    Args:
        name: ロガー名、通常は呼び出し元モジュールの__name__を指定。

    Returns:
        logging.Logger: 設定済みのロガーインスタンス。
    """
    if is_fastapi_context():
        return logging.getLogger("uvicorn")
    return logging.getLogger(name)


def log_error_record(
    logger: logging.Logger,
    message: str,
    category: str,
    code: str,
    details: Optional[Any] = None,
    exc: Optional[BaseException] = None,
) -> None:
    """
    エラー情報をサーバー側に記録する

    デバッグ設定に関係なく常に記録される

    Args:
        logger: 出力先ロガー
        message: エラーメッセージ
        category: エラーカテゴリ
        code: エラーコード
        details: コンテキスト情報
        exc: 元の例外（スタックトレース出力用）
    """
    timestamp = datetime.now(timezone.utc).isoformat()
    logger.error(
        f"[{timestamp}] {category} error {code}: {message} details={details or {}}",
        exc_info=exc,
    )

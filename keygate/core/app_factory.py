"""FastAPIアプリケーションファクトリー"""

import logging
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..presentation import (
    SecurityHeadersMiddleware,
    api_router,
    error_response_middleware,
    register_exception_handlers,
)
from .config import Settings, get_settings
from .lifespan import lifespan
from .logging import get_logger

logger = get_logger(__name__)


class HealthCheckFilter(logging.Filter):
    """ヘルスチェックログを除外するフィルター"""

    def filter(self, record: logging.LogRecord) -> bool:
        """
        ログレコードをフィルタリング

        Args:
            record: ログレコード

        Returns:
            ログを出力する場合True、除外する場合False
        """
        return "/system/healthcheck" not in record.getMessage()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    FastAPIアプリケーションを生成

    設定はここで一度だけ確定し、app.state.settings として各層に渡す

    Args:
        settings: アプリケーション設定（省略時は環境変数から読み込む）

    Returns:
        FastAPIアプリケーションインスタンス
    """
    settings = settings or get_settings()

    app_params: dict[str, Any] = {
        "title": "Keygate",
        "description": "ライセンスキーの発行・有効化サービス",
        "version": "0.1.0",
        "lifespan": lifespan,
    }

    # 本番環境ではドキュメントを無効化
    if settings.is_production:
        app_params["docs_url"] = None
        app_params["redoc_url"] = None
        app_params["openapi_url"] = None

    app = FastAPI(**app_params)
    app.state.settings = settings

    # ヘルスチェックログフィルター
    logging.getLogger("uvicorn.access").addFilter(HealthCheckFilter())

    # CORS
    if len(settings.BACKEND_CORS_ORIGINS) > 0:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # セキュリティヘッダー
    if settings.SECURITY_HEADERS:
        app.add_middleware(SecurityHeadersMiddleware, csp_policy=settings.CSP_POLICY)

    # 例外ハンドラー登録
    register_exception_handlers(app)

    # ミドルウェア登録
    app.middleware("http")(error_response_middleware)

    # ルーター登録
    app.include_router(api_router)

    logger.info(
        f"Application created (env: {settings.ENV_MODE}, debug: {settings.debug_enabled})"
    )
    return app

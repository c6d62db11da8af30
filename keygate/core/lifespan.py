"""アプリケーションライフサイクル管理"""

import contextlib
from datetime import datetime, timezone
from typing import AsyncIterator

from fastapi import FastAPI

from .logging import get_logger
from .monitoring import init_monitoring

logger = get_logger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    アプリケーションのライフサイクル管理

    起動時:
    - 起動時刻の記録
    - 監視ツールの初期化
    - ストア設定の確認

    Args:
        app: FastAPIアプリケーションインスタンス

    Yields:
        None
    """
    settings = app.state.settings

    # 起動時刻を記録（healthcheckのuptime計算用）
    app.state.start_time = datetime.now(timezone.utc)

    init_monitoring(settings)

    if settings.has_store:
        logger.info(
            f"Store endpoint configured ({settings.SQL_API_METHOD}, "
            f"param style: {settings.SQL_API_PARAM_STYLE})"
        )
    else:
        logger.warning("Store endpoint is not configured; store routes will fail")

    yield

    logger.info("Application shutdown")

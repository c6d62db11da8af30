"""エラーハンドリングミドルウェア"""

from collections.abc import Awaitable, Callable

import sentry_sdk
from fastapi import Request, Response

from ...core.logging import get_logger, log_error_record
from ...domain.exceptions import ErrorCode
from ..exceptions import APIError, render_error

logger = get_logger(__name__)


async def error_response_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """
    全ての未処理例外をキャッチしてJSON形式で返す

    Args:
        request: HTTPリクエスト
        call_next: 次のミドルウェア/エンドポイント

    Returns:
        HTTPレスポンス
    """
    try:
        return await call_next(request)
    except Exception as e:
        sentry_sdk.capture_exception(e)

        api_error = APIError(
            code=ErrorCode.UNKNOWN_ERROR,
            message=f"Unhandled exception: {e}",
            details={"path": request.url.path, "type": type(e).__name__},
        )
        log_error_record(
            logger,
            api_error.error_message,
            api_error.category.value,
            api_error.error_code.value,
            api_error.details,
            e,
        )
        settings = getattr(request.app.state, "settings", None)
        return render_error(api_error, bool(settings and settings.debug_enabled))

"""FastAPI例外ハンドラー"""

from typing import Any, Awaitable, Callable, cast

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...core.logging import get_logger, log_error_record
from ...domain.exceptions import DomainError, ErrorCode
from ..exceptions import APIError, domain_error_to_api_error, render_error

logger = get_logger(__name__)

# 範囲チェックのエラーコード（フィールド名 -> コード）
_RANGE_CODES = {
    "amount": ErrorCode.INVALID_AMOUNT_VALUE,
    "length": ErrorCode.INVALID_LENGTH_VALUE,
}
_RANGE_ERROR_TYPES = {
    "greater_than",
    "greater_than_equal",
    "less_than",
    "less_than_equal",
    "finite_number",
}


def _debug_enabled(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings and settings.debug_enabled)


def _log(api_error: APIError, exc: BaseException | None = None) -> None:
    log_error_record(
        logger,
        api_error.error_message,
        api_error.category.value,
        api_error.error_code.value,
        api_error.details,
        exc,
    )


def _field_name(loc: tuple[Any, ...]) -> str:
    # locは ("body", "field") の形式
    parts = loc[1:] if len(loc) > 1 else loc
    return ".".join(str(part) for part in parts)


def classify_validation_errors(errors: list[dict[str, Any]]) -> APIError:
    """
    Pydanticのバリデーションエラーをエラーコードに振り分ける

    優先順位: JSON不正 > 必須項目欠落 > 範囲外 > 型不一致

    Args:
        errors: RequestValidationError.errors()

    Returns:
        APIError
    """
    details = [
        {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
        for err in errors
    ]

    if any(err["type"] == "json_invalid" for err in errors):
        return APIError(
            code=ErrorCode.JSON_PARSE_ERROR,
            message="Invalid JSON in request body",
            details=details,
        )

    missing = [_field_name(err["loc"]) for err in errors if err["type"] == "missing"]
    if missing:
        return APIError(
            code=ErrorCode.MISSING_FIELDS,
            message=f"Missing required fields: {', '.join(missing)}",
            details=details,
        )

    for err in errors:
        field = _field_name(err["loc"])
        if err["type"] in _RANGE_ERROR_TYPES and field in _RANGE_CODES:
            return APIError(
                code=_RANGE_CODES[field],
                message=f"{field} must be a number between 1 and 30",
                details=details,
            )

    fields = [_field_name(err["loc"]) for err in errors]
    if fields == ["key"]:
        return APIError(
            code=ErrorCode.INVALID_KEY_TYPE,
            message="key must be a string",
            details=details,
        )

    return APIError(
        code=ErrorCode.INVALID_FIELD_TYPE,
        message=f"Invalid field type: {', '.join(fields)}",
        details=details,
    )


async def domain_error_handler(request: Request, exc: DomainError) -> Response:
    """DomainError例外ハンドラ"""
    api_error = domain_error_to_api_error(exc)
    _log(api_error, exc)
    return render_error(api_error, _debug_enabled(request))


async def api_error_handler(request: Request, exc: APIError) -> Response:
    """APIError例外ハンドラ"""
    _log(exc, exc)
    return render_error(exc, _debug_enabled(request))


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """
    HTTPException例外ハンドラ

    ルーティングの404/405などをエラーコード体系に載せる
    """
    if exc.status_code == 404:
        code = ErrorCode.NOT_FOUND
    elif exc.status_code == 401:
        code = ErrorCode.UNAUTHORIZED
    elif exc.status_code >= 500:
        code = ErrorCode.UNKNOWN_ERROR
    else:
        code = ErrorCode.INVALID_REQUEST_FORMAT

    api_error = APIError(
        code=code,
        message=str(exc.detail),
        details={"path": request.url.path, "method": request.method},
        status_code=exc.status_code,
    )
    _log(api_error)
    response = render_error(api_error, _debug_enabled(request))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    """バリデーションエラーハンドラ（Pydantic）"""
    api_error = classify_validation_errors(list(exc.errors()))
    _log(api_error)
    return render_error(api_error, _debug_enabled(request))


def register_exception_handlers(app: FastAPI) -> None:
    """
    FastAPIアプリケーションに例外ハンドラーを登録

    デバッグ表示の有無は app.state.settings から決まる

    Args:
        app: FastAPIアプリケーションインスタンス
    """
    # Starletteの型定義との互換性のためキャスト
    handler_type = Callable[[Request, Exception], Awaitable[Response]]

    app.add_exception_handler(DomainError, cast(handler_type, domain_error_handler))
    app.add_exception_handler(APIError, cast(handler_type, api_error_handler))
    app.add_exception_handler(
        StarletteHTTPException, cast(handler_type, http_exception_handler)
    )
    app.add_exception_handler(
        RequestValidationError, cast(handler_type, validation_exception_handler)
    )

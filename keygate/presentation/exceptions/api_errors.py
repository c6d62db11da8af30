"""
Presentation層のAPIエラークラス

FastAPI/Pydanticに依存するAPIエラークラス。
ドメインエラーをHTTPレスポンスに変換する。
"""

import json
from typing import Any, Optional

from fastapi import HTTPException, Response
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ConfigDict, Field

from ...domain.exceptions import (
    DomainError,
    ErrorCategory,
    ErrorCode,
    get_error_category,
    get_error_description,
    get_http_status,
)

# デバッグ無効時に返す汎用メッセージ
GENERIC_MESSAGES: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    429: "Too Many Requests",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
}


class ErrorResponse(BaseModel):
    """
    標準エラーレスポンス

    Attributes:
        status: ステータス（常に"error"）
        error_code: 機械可読なエラーコード（常に含まれる）
        error: エラーメッセージ（デバッグ無効時は汎用メッセージ）
        category: エラーカテゴリ（デバッグ時のみ）
        details: エラーの詳細情報（デバッグ時のみ）
    """

    model_config = ConfigDict(populate_by_name=True)

    status: str = "error"
    error_code: str = Field(alias="errorCode")
    error: str
    category: Optional[str] = None
    details: Optional[list[dict[str, Any]] | dict[str, Any]] = None


class APIError(HTTPException):
    """
    API エラーの基底クラス

    Attributes:
        status_code: HTTPステータスコード
        error_code: エラーコード
        error_message: エラーメッセージ
        details: エラーの詳細情報
    """

    def __init__(
        self,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        message: Optional[str] = None,
        details: Optional[list[dict[str, Any]] | dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ) -> None:
        """
        Args:
            code: エラーコード
            message: エラーメッセージ（オプション）
            details: エラーの詳細情報（オプション）
            status_code: HTTPステータス（省略時はコードのカテゴリから決定）
        """
        self.error_code = code
        self.error_message = message or get_error_description(code)
        self.details = details
        super().__init__(
            status_code=status_code or get_http_status(code),
            detail=self.error_message,
        )

    @property
    def category(self) -> ErrorCategory:
        return get_error_category(self.error_code)

    def to_response(self, debug: bool) -> ErrorResponse:
        """
        標準エラーレスポンス形式に変換

        Args:
            debug: 内部メッセージと詳細を含めるかどうか

        Returns:
            ErrorResponse: 標準エラーレスポンス
        """
        if debug:
            return ErrorResponse(
                error_code=self.error_code.value,
                error=self.error_message,
                category=self.category.value,
                details=self.details,
            )
        return ErrorResponse(
            error_code=self.error_code.value,
            error=GENERIC_MESSAGES.get(self.status_code, "An error occurred"),
        )


def domain_error_to_api_error(domain_error: DomainError) -> APIError:
    """
    ドメインエラーをAPIエラーに変換

    HTTPステータスはエラーコードのカテゴリから決まる

    Args:
        domain_error: ドメイン層のエラー

    Returns:
        APIError: API層のエラー

    Examples:
        >>> from keygate.domain.exceptions import NotFoundError
        >>> api_err = domain_error_to_api_error(NotFoundError("User not found"))
        >>> api_err.status_code
        404
    """
    return APIError(
        code=domain_error.code,
        message=domain_error.message,
        details=domain_error.details,
    )


def render_error(api_error: APIError, debug: bool) -> Response:
    """
    APIErrorをJSONレスポンスに変換

    Args:
        api_error: APIエラー
        debug: デバッグモード

    Returns:
        JSONレスポンス
    """
    body = jsonable_encoder(api_error.to_response(debug), exclude_none=True)
    return Response(
        content=json.dumps(body),
        status_code=api_error.status_code,
        media_type="application/json",
    )

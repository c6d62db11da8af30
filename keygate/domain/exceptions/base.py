"""
ドメイン層の例外クラス

ビジネスロジックで発生するエラーを表現する純粋なPython例外。
フレームワークに依存しない。
カテゴリごとに1クラスを用意し、エラーコードはカテゴリ内で選択する。
"""

from typing import Any, Optional

from .error_codes import (
    ErrorCategory,
    ErrorCode,
    get_error_category,
    get_error_description,
)


class DomainError(Exception):
    """
    ドメイン層のベース例外

    Attributes:
        message: エラーメッセージ
        code: エラーコード
        details: エラーの詳細情報（オプション）
    """

    default_code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[ErrorCode] = None,
        details: Optional[dict[str, Any] | list[dict[str, Any]]] = None,
    ) -> None:
        """
        Args:
            message: エラーメッセージ（省略時はコードの説明文）
            code: エラーコード（省略時はクラスの既定値）
            details: エラーの詳細情報（オプション）
        """
        self.code = code or self.default_code
        self.message = message or get_error_description(self.code)
        self.details = details
        super().__init__(self.message)

    @property
    def category(self) -> ErrorCategory:
        """エラーカテゴリ"""
        return get_error_category(self.code)


class AuthenticationError(DomainError):
    """認証エラー"""

    default_code = ErrorCode.UNAUTHORIZED


class ValidationError(DomainError):
    """入力値のバリデーションエラー"""

    default_code = ErrorCode.MISSING_FIELDS


class StoreError(DomainError):
    """リモートストアの実行・通信エラー"""

    default_code = ErrorCode.SQL_QUERY_FAILED


class ParsingError(DomainError):
    """リクエスト解析エラー"""

    default_code = ErrorCode.INVALID_REQUEST_FORMAT


class InternalError(DomainError):
    """内部エラー"""

    default_code = ErrorCode.UNKNOWN_ERROR


class NotFoundError(DomainError):
    """リソースが見つからない場合のエラー"""

    default_code = ErrorCode.NOT_FOUND


class RateLimitError(DomainError):
    """レート制限エラー"""

    default_code = ErrorCode.RATE_LIMIT_EXCEEDED

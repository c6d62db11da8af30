"""
エラーコード定義

形式: 0xXYZ（X = カテゴリ、YZ = 個別エラー）
カテゴリごとにHTTPステータスが一意に決まる
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """エラーカテゴリ"""

    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    STORE = "store"
    PARSING = "parsing"
    INTERNAL = "internal"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"


class ErrorCode(str, Enum):
    """機械可読なエラーコード"""

    # 認証 (0x001 - 0x0FF)
    UNAUTHORIZED = "0x001"
    INVALID_CREDENTIALS = "0x002"
    SESSION_EXPIRED = "0x003"
    SESSION_INVALID = "0x004"

    # バリデーション (0x100 - 0x1FF)
    MISSING_FIELDS = "0x100"
    INVALID_USERNAME = "0x101"
    INVALID_PASSWORD = "0x102"
    INVALID_PREFIX = "0x103"
    SQL_INJECTION_DETECTED = "0x104"
    INVALID_FIELD_TYPE = "0x105"
    INVALID_AMOUNT_VALUE = "0x106"
    INVALID_LENGTH_VALUE = "0x107"
    USERNAME_VALIDATION_FAILED = "0x108"
    PASSWORD_VALIDATION_FAILED = "0x109"
    PREFIX_VALIDATION_FAILED = "0x10A"
    INVALID_EMAIL = "0x10B"
    PASSWORD_TOO_LONG = "0x10C"
    INVALID_KEY_TYPE = "0x10D"

    # ストア (0x200 - 0x2FF)
    SQL_QUERY_FAILED = "0x200"
    DATABASE_CONNECTION_FAILED = "0x201"
    INSERT_FAILED = "0x202"
    UPDATE_FAILED = "0x203"
    DELETE_FAILED = "0x204"
    QUERY_TIMEOUT = "0x205"

    # リクエスト解析 (0x300 - 0x3FF)
    JSON_PARSE_ERROR = "0x300"
    INVALID_CONTENT_TYPE = "0x301"
    INVALID_REQUEST_FORMAT = "0x302"
    REQUEST_BODY_TOO_LARGE = "0x303"

    # 内部エラー (0x400 - 0x4FF)
    UNKNOWN_ERROR = "0x400"
    CONFIGURATION_ERROR = "0x401"
    ENCRYPTION_ERROR = "0x402"
    DECRYPTION_ERROR = "0x403"

    # リソース (0x500 - 0x5FF)
    NOT_FOUND = "0x500"
    RESOURCE_NOT_FOUND = "0x501"
    USER_NOT_FOUND = "0x502"
    KEY_NOT_FOUND = "0x503"

    # レート制限 (0x600 - 0x6FF)
    RATE_LIMIT_EXCEEDED = "0x600"
    QUOTA_EXCEEDED = "0x601"
    TOO_MANY_REQUESTS = "0x602"


ERROR_DESCRIPTIONS: dict[ErrorCode, str] = {
    ErrorCode.UNAUTHORIZED: "Unauthorized access",
    ErrorCode.INVALID_CREDENTIALS: "Invalid credentials provided",
    ErrorCode.SESSION_EXPIRED: "Session has expired",
    ErrorCode.SESSION_INVALID: "Invalid session token",
    ErrorCode.MISSING_FIELDS: "Required fields are missing",
    ErrorCode.INVALID_USERNAME: "Username format is invalid",
    ErrorCode.INVALID_PASSWORD: "Password format is invalid",
    ErrorCode.INVALID_PREFIX: "Prefix format is invalid",
    ErrorCode.SQL_INJECTION_DETECTED: "SQL injection attempt detected",
    ErrorCode.INVALID_FIELD_TYPE: "Field has invalid type",
    ErrorCode.INVALID_AMOUNT_VALUE: "Amount value is out of range",
    ErrorCode.INVALID_LENGTH_VALUE: "Length value is out of range",
    ErrorCode.USERNAME_VALIDATION_FAILED: "Username validation failed",
    ErrorCode.PASSWORD_VALIDATION_FAILED: "Password validation failed",
    ErrorCode.PREFIX_VALIDATION_FAILED: "Prefix validation failed",
    ErrorCode.INVALID_EMAIL: "Email format is invalid",
    ErrorCode.PASSWORD_TOO_LONG: "Password exceeds maximum length",
    ErrorCode.INVALID_KEY_TYPE: "Key type is invalid",
    ErrorCode.SQL_QUERY_FAILED: "SQL query execution failed",
    ErrorCode.DATABASE_CONNECTION_FAILED: "Database connection failed",
    ErrorCode.INSERT_FAILED: "Failed to insert record",
    ErrorCode.UPDATE_FAILED: "Failed to update record",
    ErrorCode.DELETE_FAILED: "Failed to delete record",
    ErrorCode.QUERY_TIMEOUT: "Query execution timed out",
    ErrorCode.JSON_PARSE_ERROR: "Failed to parse JSON request",
    ErrorCode.INVALID_CONTENT_TYPE: "Invalid content type",
    ErrorCode.INVALID_REQUEST_FORMAT: "Request format is invalid",
    ErrorCode.REQUEST_BODY_TOO_LARGE: "Request body exceeds size limit",
    ErrorCode.UNKNOWN_ERROR: "Unknown internal error",
    ErrorCode.CONFIGURATION_ERROR: "Server configuration error",
    ErrorCode.ENCRYPTION_ERROR: "Encryption operation failed",
    ErrorCode.DECRYPTION_ERROR: "Decryption operation failed",
    ErrorCode.NOT_FOUND: "Resource not found",
    ErrorCode.RESOURCE_NOT_FOUND: "Requested resource does not exist",
    ErrorCode.USER_NOT_FOUND: "User not found",
    ErrorCode.KEY_NOT_FOUND: "Key not found",
    ErrorCode.RATE_LIMIT_EXCEEDED: "Rate limit exceeded",
    ErrorCode.QUOTA_EXCEEDED: "Quota limit exceeded",
    ErrorCode.TOO_MANY_REQUESTS: "Too many requests",
}

# 上位桁 -> カテゴリ
_CATEGORY_BY_RANGE: dict[int, ErrorCategory] = {
    0x0: ErrorCategory.AUTHENTICATION,
    0x1: ErrorCategory.VALIDATION,
    0x2: ErrorCategory.STORE,
    0x3: ErrorCategory.PARSING,
    0x4: ErrorCategory.INTERNAL,
    0x5: ErrorCategory.NOT_FOUND,
    0x6: ErrorCategory.RATE_LIMIT,
}

CATEGORY_HTTP_STATUS: dict[ErrorCategory, int] = {
    ErrorCategory.AUTHENTICATION: 401,
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.STORE: 502,
    ErrorCategory.PARSING: 400,
    ErrorCategory.INTERNAL: 500,
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.RATE_LIMIT: 429,
}


def get_error_description(code: ErrorCode) -> str:
    """
    エラーコードの説明文を取得

    Args:
        code: エラーコード

    Returns:
        人間向けの説明文
    """
    return ERROR_DESCRIPTIONS.get(code, "Unknown error")


def get_error_category(code: ErrorCode) -> ErrorCategory:
    """
    エラーコードのカテゴリを取得

    Args:
        code: エラーコード

    Returns:
        エラーカテゴリ（範囲外の場合はINTERNAL）
    """
    return _CATEGORY_BY_RANGE.get(int(code.value, 16) >> 8, ErrorCategory.INTERNAL)


def get_http_status(code: ErrorCode) -> int:
    """
    エラーコードに対応するHTTPステータスを取得

    Args:
        code: エラーコード

    Returns:
        HTTPステータスコード
    """
    return CATEGORY_HTTP_STATUS[get_error_category(code)]

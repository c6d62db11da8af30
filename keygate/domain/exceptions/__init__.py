from .base import (
    AuthenticationError,
    DomainError,
    InternalError,
    NotFoundError,
    ParsingError,
    RateLimitError,
    StoreError,
    ValidationError,
)
from .error_codes import (
    ErrorCategory,
    ErrorCode,
    get_error_category,
    get_error_description,
    get_http_status,
)

__all__ = [
    "DomainError",
    "AuthenticationError",
    "ValidationError",
    "StoreError",
    "ParsingError",
    "InternalError",
    "NotFoundError",
    "RateLimitError",
    "ErrorCategory",
    "ErrorCode",
    "get_error_category",
    "get_error_description",
    "get_http_status",
]

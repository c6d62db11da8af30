"""Presentation layer exceptions"""

from .api_errors import (
    GENERIC_MESSAGES,
    APIError,
    ErrorResponse,
    domain_error_to_api_error,
    render_error,
)

__all__ = [
    "GENERIC_MESSAGES",
    "ErrorResponse",
    "APIError",
    "domain_error_to_api_error",
    "render_error",
]

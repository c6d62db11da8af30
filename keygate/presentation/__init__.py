"""Presentation layer - API and user interfaces"""

from .api import api_router
from .exception_handlers import register_exception_handlers
from .exceptions import APIError, ErrorResponse, domain_error_to_api_error
from .middleware import SecurityHeadersMiddleware, error_response_middleware

__all__ = [
    "api_router",
    "register_exception_handlers",
    "APIError",
    "ErrorResponse",
    "domain_error_to_api_error",
    "SecurityHeadersMiddleware",
    "error_response_middleware",
]

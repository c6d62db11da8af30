"""Domain layer - Business rules and entities"""

from .exceptions.base import (
    AuthenticationError,
    DomainError,
    InternalError,
    NotFoundError,
    ParsingError,
    RateLimitError,
    StoreError,
    ValidationError,
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
]

"""Infrastructure layer - Technical implementations"""

from .repositories import KeyActivationService, KeyRepository, UserRepository
from .security import TokenCodec
from .store import SqlStoreClient

__all__ = [
    "KeyActivationService",
    "KeyRepository",
    "UserRepository",
    "TokenCodec",
    "SqlStoreClient",
]

from .key_activation import ActivationResult, KeyActivationService
from .key_repository import KeyRepository
from .user_repository import UserRepository

__all__ = [
    "ActivationResult",
    "KeyActivationService",
    "KeyRepository",
    "UserRepository",
]

from .generator import generate_keys
from .lifecycle import (
    ActivationDecision,
    ActivationOutcome,
    build_client_response,
    decide_activation,
)

__all__ = [
    "generate_keys",
    "ActivationDecision",
    "ActivationOutcome",
    "build_client_response",
    "decide_activation",
]

from .handlers import classify_validation_errors, register_exception_handlers

__all__ = ["classify_validation_errors", "register_exception_handlers"]

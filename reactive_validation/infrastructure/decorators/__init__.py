"""Infrastructure layer decorators."""

from .error_handler import log_validation_errors

__all__ = [
    "log_validation_errors",
]

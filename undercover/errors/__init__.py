"""Error taxonomy for the Undercover game"""

from .handler import (
    ConfigurationError,
    ErrorHandler,
    ErrorType,
    InvariantViolation,
    UndercoverError,
)

__all__ = [
    "ConfigurationError",
    "ErrorHandler",
    "ErrorType",
    "InvariantViolation",
    "UndercoverError",
]

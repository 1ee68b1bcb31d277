"""
Error handling for the Undercover game engine.

Three families of failures exist:

- configuration errors, raised to the caller when a game cannot start with
  the requested roster and role counts;
- ignored commands (out of turn, wrong phase), which never raise and leave the
  state untouched;
- invariant violations, which indicate a bug in the validator/allocator
  pairing and must fail loudly.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorType(str, Enum):
    """Types of errors that can occur during a session."""

    # Configuration errors
    TOO_FEW_PLAYERS = "too_few_players"
    TOO_MANY_PLAYERS = "too_many_players"
    INVALID_ROLE_COUNTS = "invalid_role_counts"
    INVALID_PLAYER_NAMES = "invalid_player_names"

    # Ignored commands
    WRONG_PHASE = "wrong_phase"
    OUT_OF_TURN = "out_of_turn"
    UNKNOWN_PLAYER = "unknown_player"
    INVALID_TARGET = "invalid_target"

    # Programmer errors
    INVARIANT_VIOLATION = "invariant_violation"

    # Persistence
    STORAGE_FAILURE = "storage_failure"

    UNKNOWN_ERROR = "unknown_error"


class UndercoverError(Exception):
    """Base class for engine errors."""

    error_type = ErrorType.UNKNOWN_ERROR


class ConfigurationError(UndercoverError, ValueError):
    """The requested roster or role counts cannot start a game."""

    def __init__(self, message: str, error_type: Optional[ErrorType] = None):
        super().__init__(message)
        self.error_type = error_type or ErrorHandler.classify_validation_error(message)


class InvariantViolation(UndercoverError, RuntimeError):
    """Internal consistency check failed."""

    error_type = ErrorType.INVARIANT_VIOLATION


class ErrorHandler:
    """Classifies and formats errors for logging."""

    @staticmethod
    def classify_error(error: Exception) -> ErrorType:
        """
        Classify an exception into an ErrorType.

        Args:
            error: The exception that occurred

        Returns:
            Classified ErrorType
        """
        if isinstance(error, UndercoverError):
            return error.error_type
        # json.JSONDecodeError is a ValueError
        if isinstance(error, (OSError, ValueError)):
            return ErrorType.STORAGE_FAILURE
        return ErrorType.UNKNOWN_ERROR

    @staticmethod
    def classify_validation_error(error_msg: str) -> ErrorType:
        """
        Classify a validation error message from the RulesValidator.

        Args:
            error_msg: Error message from validation

        Returns:
            Classified ErrorType
        """
        error_lower = error_msg.lower()

        if "at least" in error_lower and "players" in error_lower:
            return ErrorType.TOO_FEW_PLAYERS
        if "at most" in error_lower and "players" in error_lower:
            return ErrorType.TOO_MANY_PLAYERS
        if "name" in error_lower:
            return ErrorType.INVALID_PLAYER_NAMES
        if "not allowed during" in error_lower:
            return ErrorType.WRONG_PHASE
        if "turn" in error_lower:
            return ErrorType.OUT_OF_TURN
        if "unknown player" in error_lower:
            return ErrorType.UNKNOWN_PLAYER
        if "transition" in error_lower:
            return ErrorType.WRONG_PHASE
        if "cannot" in error_lower or "already" in error_lower or "out of range" in error_lower:
            return ErrorType.INVALID_TARGET
        if any(word in error_lower for word in ("undercover", "mister white", "civilian", "role")):
            return ErrorType.INVALID_ROLE_COUNTS

        return ErrorType.UNKNOWN_ERROR

    @staticmethod
    def format_error_log(
        error_type: ErrorType,
        phase: str,
        round_number: int,
        details: Optional[str] = None,
        player_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Format an error for logging.

        Args:
            error_type: Type of error
            phase: Current game phase
            round_number: Current round number
            details: Additional error details
            player_id: Player the command targeted, if any

        Returns:
            Formatted error log dictionary
        """
        return {
            "error_type": error_type.value,
            "player_id": player_id,
            "phase": phase,
            "round_number": round_number,
            "details": details,
            "severity": ErrorHandler._get_severity(error_type),
        }

    @staticmethod
    def _get_severity(error_type: ErrorType) -> str:
        """Get severity level for an error type."""
        high_severity = {
            ErrorType.INVARIANT_VIOLATION,
        }

        medium_severity = {
            ErrorType.TOO_FEW_PLAYERS,
            ErrorType.TOO_MANY_PLAYERS,
            ErrorType.INVALID_ROLE_COUNTS,
            ErrorType.INVALID_PLAYER_NAMES,
            ErrorType.STORAGE_FAILURE,
        }

        if error_type in high_severity:
            return "high"
        elif error_type in medium_severity:
            return "medium"
        else:
            return "low"

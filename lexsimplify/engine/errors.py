"""
Error types for the substitution engine and its collaborators.

Missing data (unknown words, empty candidate pools, empty metric lists) is
never an error: the engine falls back to the original token. The classes
here cover the remaining conditions.
"""

from typing import Optional, Any, Dict


class SimplifierError(Exception):
    """
    Base exception for all simplifier errors.

    Carries a structured ``details`` dict for logging and reporting.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize simplifier error.

        Args:
            message: Error message
            details: Optional detailed error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class VectorLengthMismatchError(SimplifierError, ValueError):
    """
    Raised when two vectors of different length are compared.

    This is a precondition violation for a single comparison. The engine
    skips the offending candidate and keeps scoring the rest of the pool.
    """

    def __init__(self, left_length: int, right_length: int,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize length mismatch error.

        Args:
            left_length: Length of the first vector
            right_length: Length of the second vector
            details: Additional error context
        """
        super().__init__(
            f"Vectors must have the same length (got {left_length} and {right_length})",
            details,
        )
        self.left_length = left_length
        self.right_length = right_length

        self.details.update({
            'left_length': left_length,
            'right_length': right_length
        })


class ConfigurationError(SimplifierError):
    """Raised for unknown policy names and invalid settings values."""

    def __init__(self, message: str,
                 setting: Optional[str] = None,
                 value: Any = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.setting = setting
        self.value = value

        self.details.update({
            'setting': setting,
            'value': value
        })


class DataLoadError(SimplifierError):
    """
    Raised when a vocabulary or embedding file cannot be read.

    Malformed lines inside a readable file are not errors; they are skipped
    and counted by the loader.
    """

    def __init__(self, message: str,
                 path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.path = path

        self.details.update({'path': path})

"""
Custom exceptions for the token vending system.

Provides a hierarchy of typed exceptions for better error handling
and more informative error messages.
"""

from typing import Any, Optional


class VendingError(Exception):
    """Base exception for all token vending errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            code: Optional error code for programmatic handling.
            details: Optional additional error details.
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for command responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# Singleton Errors
# =============================================================================


class SingletonError(VendingError):
    """Base exception for singleton accessor errors."""

    def __init__(
        self,
        message: str,
        singleton_name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.singleton_name = singleton_name
        if singleton_name:
            self.details["singleton"] = singleton_name


class ConstructionFailure(SingletonError):
    """The shared instance could not be constructed."""

    pass


class SingletonCopyError(SingletonError, TypeError):
    """An attempt was made to copy or pickle a unique object."""

    pass


# =============================================================================
# Session Errors
# =============================================================================


class SessionError(VendingError):
    """Base exception for session registry errors."""

    def __init__(
        self,
        message: str,
        session_id: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.session_id = session_id
        if session_id:
            self.details["session_id"] = session_id


class UnknownSessionError(SessionError):
    """Session not found in the registry."""

    pass


class SessionExistsError(SessionError):
    """A session with the same id is already open."""

    pass


# =============================================================================
# Command Errors
# =============================================================================


class CommandError(VendingError):
    """Error while routing a command."""

    pass

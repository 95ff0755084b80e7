"""
Custom exception hierarchy for the Matchmaking API.
"""

from typing import Dict, Any

class MatchmakingException(Exception):
    """Base exception for the Matchmaking application."""
    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, context: Dict[str, Any] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

class NotFoundError(MatchmakingException):
    """Raised when a requested applicant, event or match does not exist."""
    code = "NOT_FOUND"
    status_code = 404

class InsufficientDataError(MatchmakingException):
    """Raised when there is not enough data to perform an operation."""
    code = "INSUFFICIENT_DATA"
    status_code = 400

class ConfigurationError(MatchmakingException):
    """Raised when there are configuration issues."""
    code = "CONFIGURATION_ERROR"
    status_code = 500

class AuthorizationError(MatchmakingException):
    """Base exception for access control errors."""
    code = "FORBIDDEN"
    status_code = 403

class AuthenticationRequiredError(AuthorizationError):
    """Raised when no authenticated identity accompanies the request."""
    code = "UNAUTHORIZED"
    status_code = 401

class AdminRequiredError(AuthorizationError):
    """Raised when a non-admin identity calls an admin endpoint."""
    code = "FORBIDDEN"
    status_code = 403

class MatchPersistenceError(MatchmakingException):
    """Raised when generated matches cannot be written."""
    code = "DATABASE_ERROR"
    status_code = 500

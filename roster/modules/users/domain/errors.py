"""
User Errors

Typed failures raised by the user service and translated to HTTP responses by
the API layer.
"""
from typing import List, Optional


class UserError(Exception):
    """Base exception for user management errors"""
    pass


class UserValidationError(UserError):
    """Raised when input is invalid or conflicts with an existing user"""

    def __init__(self, message: str, field: Optional[str] = None, errors: Optional[List] = None):
        self.field = field
        self.message = message
        self.errors = list(errors) if errors else []
        if field:
            super().__init__(f"Error in field '{field}': {message}")
        else:
            super().__init__(message)


class UserNotFoundError(UserError):
    """Raised when no user exists for the requested ID"""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User with ID '{user_id}' not found")


class InternalUserError(UserError):
    """Raised when storage breaks an invariant the service relies on"""
    pass

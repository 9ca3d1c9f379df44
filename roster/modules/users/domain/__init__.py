"""
Domain Models

Pure data models, typed errors and validation rules for users.
"""

from .user import User, UserInput
from .errors import UserError, UserValidationError, UserNotFoundError, InternalUserError
from .validation import FieldError, ValidationResult, validate_user_input

__all__ = [
    "User",
    "UserInput",
    "UserError",
    "UserValidationError",
    "UserNotFoundError",
    "InternalUserError",
    "FieldError",
    "ValidationResult",
    "validate_user_input",
]

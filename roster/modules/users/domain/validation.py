"""
User Validation Rules

Stateless field checks applied to user input before any create or update.
Fields are checked in order (name, email, age) and each field reports at most
its first failing rule.
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional

from roster.modules.users import constants
from roster.modules.users.domain.user import UserInput

_EMAIL_RE = re.compile(constants.EMAIL_PATTERN)


@dataclass(frozen=True)
class FieldError:
    """A single failed rule."""
    field: str
    message: str


@dataclass
class ValidationResult:
    """Outcome of validating one input, errors in check order."""
    errors: List[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def first(self) -> Optional[FieldError]:
        return self.errors[0] if self.errors else None


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def check_name(name: Optional[str]) -> Optional[FieldError]:
    if _is_blank(name):
        return FieldError("name", constants.NAME_REQUIRED_MESSAGE)
    if not constants.MIN_NAME_LENGTH <= len(name) <= constants.MAX_NAME_LENGTH:
        return FieldError("name", constants.NAME_LENGTH_MESSAGE)
    return None


def check_email(email: Optional[str]) -> Optional[FieldError]:
    if _is_blank(email):
        return FieldError("email", constants.EMAIL_REQUIRED_MESSAGE)
    if not _EMAIL_RE.fullmatch(email):
        return FieldError("email", constants.EMAIL_FORMAT_MESSAGE)
    return None


def check_age(age: Optional[int]) -> Optional[FieldError]:
    """Absent age passes; the service fills in the default."""
    if age is None:
        return None
    if isinstance(age, bool) or not isinstance(age, int):
        return FieldError("age", constants.AGE_RANGE_MESSAGE)
    if not constants.MIN_AGE <= age <= constants.MAX_AGE:
        return FieldError("age", constants.AGE_RANGE_MESSAGE)
    return None


def validate_user_input(data: UserInput) -> ValidationResult:
    """
    Validate name, email and age of a user input.

    Returns:
        ValidationResult whose ``first`` error is the one a fail-fast caller
        should report.
    """
    result = ValidationResult()
    for error in (check_name(data.name), check_email(data.email), check_age(data.age)):
        if error is not None:
            result.errors.append(error)
    return result

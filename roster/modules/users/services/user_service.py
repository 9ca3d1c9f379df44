"""
User Service

Business logic for user management operations. The service is the only
component that applies validation and uniqueness rules; storage is delegated to
the injected repository.
"""
import logging
import threading
import uuid
from dataclasses import replace
from typing import List, Optional

from roster.modules.users import constants
from roster.modules.users.domain.errors import (
    InternalUserError,
    UserNotFoundError,
    UserValidationError,
)
from roster.modules.users.domain.user import User, UserInput
from roster.modules.users.domain.validation import validate_user_input
from roster.modules.users.repositories.user_repository import InMemoryUserRepository

logger = logging.getLogger("roster.users.service")


class UserService:
    """Service for user business logic."""

    def __init__(self, repository: Optional[InMemoryUserRepository] = None):
        self.repository = repository if repository is not None else InMemoryUserRepository()
        # Serializes check-then-act sequences (uniqueness + save, exists + delete)
        self._write_lock = threading.Lock()

    def list_users(self) -> List[User]:
        """All users sorted by name, ignoring case."""
        logger.debug("[UserService.list_users]")
        users = self.repository.find_all()
        return sorted(users, key=lambda user: (user.name or "").casefold())

    def create_user(self, data: Optional[UserInput]) -> User:
        """
        Create a new user.

        Generates an ID when none is supplied and defaults age to
        ``DEFAULT_AGE`` when absent.

        Raises:
            UserValidationError: if input is missing, invalid, or the email or
                supplied ID is already taken
        """
        logger.debug(f"[UserService.create_user] name={getattr(data, 'name', None)}")
        self._validate(data)

        with self._write_lock:
            if self.repository.find_by_email(data.email) is not None:
                raise UserValidationError(constants.EMAIL_TAKEN_MESSAGE, field="email")

            user_id = data.id.strip() if data.id and data.id.strip() else None
            if user_id is None:
                user_id = self._generate_id()
                logger.debug(f"[UserService.create_user] generated user_id={user_id}")
            elif self.repository.exists_by_id(user_id):
                raise UserValidationError(constants.ID_TAKEN_MESSAGE, field="id")

            user = User(
                id=user_id,
                name=data.name,
                email=data.email,
                age=data.age if data.age is not None else constants.DEFAULT_AGE,
            )
            saved = self.repository.save(user)

        logger.info(f"[UserService.create_user] created user_id={saved.id}")
        return saved

    def get_user(self, user_id: Optional[str]) -> User:
        """
        Get user by ID.

        Raises:
            UserValidationError: if ``user_id`` is empty
            UserNotFoundError: if no user exists for ``user_id``
        """
        logger.debug(f"[UserService.get_user] user_id={user_id}")
        self._require_id(user_id)

        user = self.repository.find_by_id(user_id)
        if user is None:
            logger.warning(f"[UserService.get_user] not found user_id={user_id}")
            raise UserNotFoundError(user_id)
        return user

    def update_user(self, user_id: Optional[str], data: Optional[UserInput]) -> User:
        """
        Replace name, email and age of an existing user. The ID never changes.

        Raises:
            UserNotFoundError: if no user exists for ``user_id``
            UserValidationError: if input is invalid or the email belongs to
                another user
        """
        logger.debug(f"[UserService.update_user] user_id={user_id}")

        with self._write_lock:
            existing = self.get_user(user_id)
            self._validate(data)

            owner = self.repository.find_by_email(data.email)
            if owner is not None and owner.id != existing.id:
                raise UserValidationError(constants.EMAIL_TAKEN_MESSAGE, field="email")

            updated = replace(
                existing,
                name=data.name,
                email=data.email,
                age=data.age if data.age is not None else constants.DEFAULT_AGE,
            )
            saved = self.repository.save(updated)

        logger.info(f"[UserService.update_user] updated user_id={saved.id}")
        return saved

    def delete_user(self, user_id: Optional[str]) -> None:
        """
        Delete user by ID.

        Raises:
            UserValidationError: if ``user_id`` is empty
            UserNotFoundError: if no user exists for ``user_id``
            InternalUserError: if the repository fails to remove an existing user
        """
        logger.debug(f"[UserService.delete_user] user_id={user_id}")
        self._require_id(user_id)

        with self._write_lock:
            if not self.repository.exists_by_id(user_id):
                logger.warning(f"[UserService.delete_user] not found user_id={user_id}")
                raise UserNotFoundError(user_id)

            if not self.repository.delete_by_id(user_id):
                logger.error(f"[UserService.delete_user] ERROR: removal failed for user_id={user_id}")
                raise InternalUserError(constants.USER_DELETE_FAILED_MESSAGE)

        logger.info(f"[UserService.delete_user] deleted user_id={user_id}")

    def count_users(self) -> int:
        return self.repository.count()

    def _generate_id(self) -> str:
        user_id = str(uuid.uuid4())
        while self.repository.exists_by_id(user_id):
            user_id = str(uuid.uuid4())
        return user_id

    @staticmethod
    def _require_id(user_id: Optional[str]) -> None:
        if user_id is None or not user_id.strip():
            raise UserValidationError(constants.ID_REQUIRED_MESSAGE, field="id")

    @staticmethod
    def _validate(data: Optional[UserInput]) -> None:
        if data is None:
            raise UserValidationError(constants.USER_REQUIRED_MESSAGE)

        result = validate_user_input(data)
        if not result.is_valid:
            first = result.first
            raise UserValidationError(first.message, field=first.field, errors=result.errors)

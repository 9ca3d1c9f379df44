"""
User Repository

Thread-safe in-memory storage for user records, keyed by user ID.
"""
import logging
import threading
from typing import Dict, List, Optional

from roster.modules.users.domain.user import User

logger = logging.getLogger("roster.users.repository")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class InMemoryUserRepository:
    """Repository for user data access."""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._lock = threading.RLock()

    def save(self, user: User) -> User:
        """Insert or replace the user stored under its ID."""
        if user is None:
            raise ValueError("User cannot be null")
        if _is_blank(user.id):
            raise ValueError("User ID cannot be null or empty")

        with self._lock:
            self._users[user.id] = user
        logger.debug(f"[InMemoryUserRepository.save] user_id={user.id}")
        return user

    def find_by_id(self, user_id: Optional[str]) -> Optional[User]:
        """Get user by ID."""
        if _is_blank(user_id):
            return None
        with self._lock:
            return self._users.get(user_id)

    def delete_by_id(self, user_id: Optional[str]) -> bool:
        """Remove user by ID. Returns whether a user was removed."""
        if _is_blank(user_id):
            return False
        with self._lock:
            removed = self._users.pop(user_id, None)
        return removed is not None

    def exists_by_id(self, user_id: Optional[str]) -> bool:
        if _is_blank(user_id):
            return False
        with self._lock:
            return user_id in self._users

    def find_all(self) -> List[User]:
        """Snapshot of all users, in insertion order."""
        with self._lock:
            return list(self._users.values())

    def find_by_email(self, email: Optional[str]) -> Optional[User]:
        """First user whose email matches, ignoring case."""
        if _is_blank(email):
            return None
        wanted = email.casefold()
        with self._lock:
            for user in self._users.values():
                if user.email is not None and user.email.casefold() == wanted:
                    return user
        return None

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    def clear(self) -> None:
        """Remove every user. Intended for tests and bootstrap code."""
        with self._lock:
            total = len(self._users)
            self._users.clear()
        logger.info(f"[InMemoryUserRepository.clear] removed={total}")

"""
Data Access Layer (Repositories)

Repositories own the in-memory user store.
"""

from .user_repository import InMemoryUserRepository

__all__ = [
    "InMemoryUserRepository",
]

"""
User Domain Model

Pure data models representing a stored user and the input used to create or
replace one.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """User domain model."""
    id: str
    name: str
    email: str
    age: int

    def to_dict(self) -> dict:
        """Convert User to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "age": self.age,
        }


@dataclass
class UserInput:
    """Name/email/age triple supplied on create or update."""
    name: Optional[str]
    email: Optional[str]
    age: Optional[int] = None
    id: Optional[str] = None  # Only honoured on create

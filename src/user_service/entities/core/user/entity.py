"""User domain entity."""

from enum import StrEnum
from typing import Any

from pydantic import Field

from src.user_service.entities.core._base import Entity


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class UserStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


def full_name(first_name: str, last_name: str) -> str:
    """First and last name joined by a space, outer whitespace trimmed."""
    return f"{first_name} {last_name}".strip()


def initials(first_name: str, last_name: str) -> str:
    """Uppercased first letters of first and last name."""
    return f"{first_name[:1].upper()}{last_name[:1].upper()}"


class User(Entity):
    """User entity representing a person in the system.

    Holds the stored attributes only. ``full_name`` and ``initials`` are
    computed from the current names on every access and are never persisted.
    """

    login: str = Field(description="Unique login")
    first_name: str = Field(description="User's first name")
    last_name: str = Field(description="User's last name")
    middle_name: str | None = Field(default=None, description="User's middle name")
    gender: Gender = Field(default=Gender.OTHER, description="User's gender")
    age: int = Field(description="User's age in years")
    phone: str | None = Field(default=None, description="User's phone number")
    email: str = Field(description="Unique email address")
    avatar: str | None = Field(default=None, description="Avatar URL or path")
    status: UserStatus = Field(default=UserStatus.ACTIVE, description="Account status")

    @property
    def full_name(self) -> str:
        return full_name(self.first_name, self.last_name)

    @property
    def initials(self) -> str:
        return initials(self.first_name, self.last_name)

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.login == other.login
            and self.first_name == other.first_name
            and self.last_name == other.last_name
            and self.middle_name == other.middle_name
            and self.gender == other.gender
            and self.age == other.age
            and self.phone == other.phone
            and self.email == other.email
            and self.avatar == other.avatar
            and self.status == other.status
        )

    def __hash__(self) -> int:
        """Hash based on identity and natural keys, ignoring timestamps."""
        return hash((self.id, self.login, self.email))

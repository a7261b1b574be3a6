"""Request and response models for the user API.

Request models perform all shape validation (presence, types, lengths and
character sets) so that the domain service only ever sees well-formed input.
Age bounds are a business rule and are checked by the service, not here.
Field names are exposed in camelCase on the wire; snake_case is accepted too.
"""

from datetime import datetime
from typing import Annotated, ClassVar, Self

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, model_validator
from pydantic.alias_generators import to_camel

from src.user_service.entities.core.user.entity import (
    Gender,
    User,
    UserStatus,
    full_name,
    initials,
)

Login = Annotated[
    str, StringConstraints(min_length=3, max_length=50, pattern=r"^[a-zA-Z0-9_]+$")
]
PersonName = Annotated[str, StringConstraints(min_length=2, max_length=100)]
MiddleName = Annotated[str, StringConstraints(min_length=1, max_length=100)]
Phone = Annotated[
    str, StringConstraints(min_length=10, max_length=20, pattern=r"^\+?[0-9\s\-()]+$")
]
Avatar = Annotated[str, StringConstraints(min_length=1, max_length=255)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class UserCreate(_CamelModel):
    """Complete field set for a new user, minus system-managed fields."""

    login: Login = Field(examples=["john_doe"])
    first_name: PersonName = Field(examples=["John"])
    last_name: PersonName = Field(examples=["Doe"])
    middle_name: MiddleName | None = Field(default=None, examples=["Michael"])
    gender: Gender = Field(examples=[Gender.MALE])
    age: int = Field(examples=[25])
    phone: Phone | None = Field(default=None, examples=["+1234567890"])
    email: EmailStr = Field(examples=["john.doe@example.com"])
    avatar: Avatar | None = Field(
        default=None, examples=["https://example.com/avatar.jpg"]
    )


class UserUpdate(_CamelModel):
    """Any subset of the mutable user fields.

    Only fields present in the request are applied. Optional attributes
    (middle name, phone, avatar) may be cleared with an explicit null.
    """

    login: Login | None = None
    first_name: PersonName | None = None
    last_name: PersonName | None = None
    middle_name: MiddleName | None = None
    gender: Gender | None = None
    age: int | None = None
    phone: Phone | None = None
    email: EmailStr | None = None
    avatar: Avatar | None = None

    _NON_NULLABLE: ClassVar[tuple[str, ...]] = (
        "login", "first_name", "last_name", "gender", "age", "email"
    )

    @model_validator(mode="after")
    def _reject_null_required_fields(self) -> Self:
        nulled = [
            name
            for name in self._NON_NULLABLE
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self

    def changes(self) -> dict:
        """Fields explicitly sent by the caller, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class UserStatusUpdate(_CamelModel):
    status: UserStatus


class UserResponse(_CamelModel):
    """Outbound representation of a user, including the derived name fields."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
    login: str
    first_name: str
    last_name: str
    middle_name: str | None = None
    full_name: str
    initials: str
    gender: Gender
    age: int
    phone: str | None = None
    email: str
    avatar: str | None = None
    status: UserStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            login=user.login,
            first_name=user.first_name,
            last_name=user.last_name,
            middle_name=user.middle_name,
            full_name=full_name(user.first_name, user.last_name),
            initials=initials(user.first_name, user.last_name),
            gender=user.gender,
            age=user.age,
            phone=user.phone,
            email=user.email,
            avatar=user.avatar,
            status=user.status,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

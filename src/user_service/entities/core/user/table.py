"""User database table model."""

import sqlalchemy as sa
from sqlmodel import Field

from src.user_service.entities.core._base import EntityTable
from src.user_service.entities.core.user.entity import Gender, UserStatus


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    Unique indexes on ``email`` and ``login`` are the last line of defence
    against two concurrent creates that both passed the existence checks.
    """

    __tablename__ = "users"

    login: str = Field(max_length=50, unique=True, index=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    gender: Gender = Field(
        default=Gender.OTHER,
        sa_type=sa.Enum(Gender, name="user_gender", values_callable=lambda e: [m.value for m in e]),
    )
    age: int
    phone: str | None = Field(default=None, max_length=20)
    email: str = Field(max_length=255, unique=True, index=True)
    avatar: str | None = Field(default=None, max_length=255)
    status: UserStatus = Field(
        default=UserStatus.ACTIVE,
        index=True,
        sa_type=sa.Enum(UserStatus, name="user_status", values_callable=lambda e: [m.value for m in e]),
    )

"""User data-access layer.

``UserGateway`` is the persistence contract the domain service depends on;
``UserRepository`` implements it on top of a SQLModel session.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from typing import Any

from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import Session, col, select

from src.user_service.core.exceptions import DuplicateEntityError
from src.user_service.entities.core._base import as_utc, utc_now
from src.user_service.entities.core.user.entity import User
from src.user_service.entities.core.user.table import UserTable

_IMMUTABLE_FIELDS = frozenset({"id", "created_at", "updated_at"})


class UserGateway(ABC):
    """Persistence contract for user records."""

    @abstractmethod
    def create(self, fields: dict[str, Any]) -> User:
        """Persist a new user. Raises DuplicateEntityError on a unique key clash."""

    @abstractmethod
    def find_all(self) -> list[User]:
        """All users, most recently created first."""

    @abstractmethod
    def find_by_id(self, user_id: str) -> User | None: ...

    @abstractmethod
    def find_by_email(self, email: str) -> User | None: ...

    @abstractmethod
    def find_by_login(self, login: str) -> User | None: ...

    @abstractmethod
    def update(self, user_id: str, fields: dict[str, Any]) -> User | None:
        """Apply a partial update. Returns None when no such id exists."""

    @abstractmethod
    def delete(self, user_id: str) -> bool:
        """Hard delete. True iff a row was removed."""

    @abstractmethod
    def exists_by_email(self, email: str) -> bool: ...

    @abstractmethod
    def exists_by_login(self, login: str) -> bool: ...


class UserRepository(UserGateway):
    """SQLModel implementation of the user gateway.

    Each write commits its own transaction. ``clock`` supplies the audit
    timestamps so callers (and tests) control what "now" means.
    """

    def __init__(
        self, session: Session, clock: Callable[[], datetime] = utc_now
    ) -> None:
        self._session = session
        self._clock = clock

    def create(self, fields: dict[str, Any]) -> User:
        now = self._clock()
        row = UserTable(**fields, created_at=now, updated_at=now)
        self._session.add(row)
        self._commit(row.id, fields)
        self._session.refresh(row)
        return self._to_entity(row)

    def find_all(self) -> list[User]:
        statement = select(UserTable).order_by(col(UserTable.created_at).desc())
        return [self._to_entity(row) for row in self._session.exec(statement).all()]

    def find_by_id(self, user_id: str) -> User | None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None
        return self._to_entity(row)

    def find_by_email(self, email: str) -> User | None:
        statement = select(UserTable).where(UserTable.email == email)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return self._to_entity(row)

    def find_by_login(self, login: str) -> User | None:
        statement = select(UserTable).where(UserTable.login == login)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return self._to_entity(row)

    def update(self, user_id: str, fields: dict[str, Any]) -> User | None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None

        for name, value in fields.items():
            if name in _IMMUTABLE_FIELDS:
                raise ValueError(f"Field {name} cannot be updated")
            setattr(row, name, value)
        row.updated_at = self._clock()

        self._session.add(row)
        self._commit(user_id, fields)
        self._session.refresh(row)
        return self._to_entity(row)

    def delete(self, user_id: str) -> bool:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.commit()
        return True

    def exists_by_email(self, email: str) -> bool:
        return self._count(UserTable.email == email) > 0

    def exists_by_login(self, login: str) -> bool:
        return self._count(UserTable.login == login) > 0

    def _count(self, condition: ColumnElement[bool]) -> int:
        statement = select(func.count()).select_from(UserTable).where(condition)
        return self._session.exec(statement).one()

    def _commit(self, user_id: str, fields: dict[str, Any]) -> None:
        """Commit, translating a unique index violation into DuplicateEntityError.

        The colliding key is the one already held by a row other than ``user_id``.
        """
        try:
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            logger.warning("Unique constraint violated while writing user: {}", exc.orig)
            for key, column in (("email", UserTable.email), ("login", UserTable.login)):
                if key not in fields:
                    continue
                if self._count((column == fields[key]) & (UserTable.id != user_id)) > 0:
                    raise DuplicateEntityError(key, fields[key], exc) from exc
            raise

    @staticmethod
    def _to_entity(row: UserTable) -> User:
        user = User.model_validate(row, from_attributes=True)
        user.created_at = as_utc(user.created_at)
        user.updated_at = as_utc(user.updated_at)
        return user

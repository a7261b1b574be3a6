from loguru import logger

from src.user_service.core.exceptions import (
    ConflictError,
    DuplicateEntityError,
    InvalidArgumentError,
    NotFoundError,
)
from src.user_service.entities.core.user.entity import User, UserStatus
from src.user_service.entities.core.user.repository import UserGateway
from src.user_service.entities.core.user.schemas import (
    UserCreate,
    UserResponse,
    UserUpdate,
)
from src.user_service.runtime.config.config_data import UsersConfig
from src.user_service.runtime.context import get_config


class UserService:
    """Business rules for user records.

    Every rule is checked before the gateway is asked to write, in a fixed
    order: email uniqueness, login uniqueness, age bounds. The first
    violation is raised immediately.
    """

    def __init__(
        self, repository: UserGateway, rules: UsersConfig | None = None
    ) -> None:
        self._repository = repository
        self._rules = rules or get_config().users

    def create(self, data: UserCreate) -> UserResponse:
        """Create a new active user.

        Raises:
            ConflictError: email or login already taken (email reported first)
            InvalidArgumentError: age outside the configured bounds
        """
        if self._repository.exists_by_email(data.email):
            logger.warning("Rejected user create: email {} already exists", data.email)
            raise ConflictError("email")

        if self._repository.exists_by_login(data.login):
            logger.warning("Rejected user create: login {} already exists", data.login)
            raise ConflictError("login")

        self._validate_age(data.age)

        fields = data.model_dump()
        fields["status"] = UserStatus.ACTIVE
        try:
            user = self._repository.create(fields)
        except DuplicateEntityError as exc:
            raise ConflictError(exc.field_name) from exc

        logger.info("Created user {} ({})", user.id, user.login)
        return self._to_response(user)

    def find_all(self) -> list[UserResponse]:
        """All users, most recently created first."""
        return [self._to_response(user) for user in self._repository.find_all()]

    def find_by_id(self, user_id: str) -> UserResponse:
        return self._to_response(self._get_or_raise(user_id))

    def find_by_email(self, email: str) -> UserResponse:
        user = self._repository.find_by_email(email)
        if user is None:
            raise NotFoundError("email", email)
        return self._to_response(user)

    def find_by_login(self, login: str) -> UserResponse:
        user = self._repository.find_by_login(login)
        if user is None:
            raise NotFoundError("login", login)
        return self._to_response(user)

    def update(self, user_id: str, data: UserUpdate) -> UserResponse:
        """Apply a partial update.

        Email and login are re-checked only when they change, so writing a
        user's own current value back is not a conflict.
        """
        existing = self._get_or_raise(user_id)
        changes = data.changes()

        new_email = changes.get("email")
        if new_email is not None and new_email != existing.email:
            if self._repository.exists_by_email(new_email):
                logger.warning("Rejected update of {}: email {} taken", user_id, new_email)
                raise ConflictError("email")

        new_login = changes.get("login")
        if new_login is not None and new_login != existing.login:
            if self._repository.exists_by_login(new_login):
                logger.warning("Rejected update of {}: login {} taken", user_id, new_login)
                raise ConflictError("login")

        if "age" in changes:
            self._validate_age(changes["age"])

        try:
            updated = self._repository.update(user_id, changes)
        except DuplicateEntityError as exc:
            raise ConflictError(exc.field_name) from exc

        # The row may have been deleted between the lookup and the write.
        if updated is None:
            raise NotFoundError("ID", user_id)

        logger.info("Updated user {} fields {}", user_id, sorted(changes))
        return self._to_response(updated)

    def update_status(self, user_id: str, status: UserStatus) -> UserResponse:
        """Set the status. Any status may follow any other."""
        existing = self._get_or_raise(user_id)

        updated = self._repository.update(user_id, {"status": status})
        if updated is None:
            raise NotFoundError("ID", user_id)

        logger.info(
            "Changed status of user {} from {} to {}",
            user_id,
            existing.status.value,
            updated.status.value,
        )
        return self._to_response(updated)

    def delete(self, user_id: str) -> None:
        if not self._repository.delete(user_id):
            raise NotFoundError("ID", user_id)
        logger.info("Deleted user {}", user_id)

    def _get_or_raise(self, user_id: str) -> User:
        user = self._repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError("ID", user_id)
        return user

    def _validate_age(self, age: int) -> None:
        bounds = self._rules
        if age < bounds.min_age or age > bounds.max_age:
            raise InvalidArgumentError(
                "age", f"Age must be between {bounds.min_age} and {bounds.max_age}"
            )

    @staticmethod
    def _to_response(user: User) -> UserResponse:
        return UserResponse.from_entity(user)

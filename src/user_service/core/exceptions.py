"""
Exceptions raised by the user domain service and its repository.

Exception Hierarchy:
    UserServiceError (base)
    ├── NotFoundError          - No user matches the id, email or login
    ├── ConflictError          - Email or login already owned by another user
    └── InvalidArgumentError   - A business rule bound was violated (age)

    DuplicateEntityError       - Unique constraint fired inside the repository

The domain exceptions carry no HTTP vocabulary; the API layer decides
which status code each kind maps to.
"""

from typing import Any


class UserServiceError(Exception):
    """Base exception for all user domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class NotFoundError(UserServiceError):
    """Raised when no user matches the requested key."""

    def __init__(self, key: str, value: str) -> None:
        self.key = key
        self.value = value
        super().__init__(
            f"User with {key} {value} not found",
            details={"key": key, "value": value},
        )


class ConflictError(UserServiceError):
    """Raised when a create or update would duplicate an email or login."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(
            f"User with this {field} already exists", details={"field": field}
        )


class InvalidArgumentError(UserServiceError):
    """Raised when a value passes shape validation but breaks a business rule."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message, details={"field": field})


class DuplicateEntityError(Exception):
    """
    Raised by a repository when a write violates a unique constraint.

    Attributes:
        field_name: Natural key that collided ("email" or "login")
        field_value: The conflicting value
    """

    def __init__(
        self,
        field_name: str,
        field_value: Any,
        original_error: Exception | None = None,
    ) -> None:
        self.field_name = field_name
        self.field_value = field_value
        self.original_error = original_error
        super().__init__(f"User with {field_name}='{field_value}' already exists")

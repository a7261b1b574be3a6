from datetime import UTC, datetime, timedelta
from typing import Any

from src.user_service.entities.core.user import Gender, UserCreate


class FakeClock:
    """Deterministic clock that advances one second per reading."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)):
        self.current = start or datetime(2024, 1, 1, tzinfo=UTC)
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


def user_payload(**overrides: Any) -> dict[str, Any]:
    """Wire-format (camelCase) body for POST /users."""
    payload = {
        "login": "john_doe",
        "firstName": "John",
        "lastName": "Doe",
        "middleName": "Michael",
        "gender": "male",
        "age": 30,
        "phone": "+1234567890",
        "email": "john.doe@example.com",
        "avatar": "https://example.com/avatar.jpg",
    }
    payload.update(overrides)
    return payload


def make_user_create(**overrides: Any) -> UserCreate:
    """A validated create request with sensible defaults."""
    fields = {
        "login": "john_doe",
        "first_name": "John",
        "last_name": "Doe",
        "gender": Gender.MALE,
        "age": 30,
        "email": "john.doe@example.com",
    }
    fields.update(overrides)
    return UserCreate(**fields)

"""Shared utilities for CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console

from src.user_service.core.services import DbSessionService, UserService
from src.user_service.entities.core.user import UserRepository

# Initialize Rich console for colored output
console = Console()


@contextmanager
def user_service_scope() -> Iterator[UserService]:
    """Open a database handle, yield a UserService bound to it, then close it."""
    database_service = DbSessionService()
    try:
        with database_service.session_scope() as session:
            yield UserService(UserRepository(session))
    finally:
        database_service.close()

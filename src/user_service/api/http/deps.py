"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.user_service.api.http.app_data import ApplicationDependencies
from src.user_service.core.services import UserService
from src.user_service.entities.core.user import UserRepository


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_db_session(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> Iterator[Session]:
    """Yield a database session that is closed once the request is done."""
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_user_repository(db: Session = Depends(get_db_session)) -> UserRepository:
    return UserRepository(db)


def get_user_service(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
    repository: UserRepository = Depends(get_user_repository),
) -> UserService:
    """Get the User service instance."""
    return UserService(repository, app_deps.config.users)

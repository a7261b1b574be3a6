"""Database initialization script."""

from src.user_service.core.services import DbManageService, DbSessionService
from src.user_service.runtime.config.config_data import ConfigData


def init_db(config: ConfigData | None = None) -> None:
    """Create all database tables."""
    database_service = DbSessionService(config)
    try:
        DbManageService(database_service.engine).create_all()
    finally:
        database_service.close()


if __name__ == "__main__":
    init_db()

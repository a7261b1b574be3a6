from dataclasses import dataclass

from src.user_service.core.services import DbSessionService
from src.user_service.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    config: ConfigData
    database_service: DbSessionService

"""User entity package.

- User: Domain entity with derived name helpers
- UserTable: Database persistence model
- UserGateway / UserRepository: Data access contract and implementation
- UserCreate / UserUpdate / UserStatusUpdate / UserResponse: API shapes
"""

from .entity import Gender, User, UserStatus, full_name, initials
from .repository import UserGateway, UserRepository
from .schemas import UserCreate, UserResponse, UserStatusUpdate, UserUpdate
from .table import UserTable

__all__ = [
    "Gender",
    "User",
    "UserStatus",
    "full_name",
    "initials",
    "UserGateway",
    "UserRepository",
    "UserTable",
    "UserCreate",
    "UserUpdate",
    "UserStatusUpdate",
    "UserResponse",
]

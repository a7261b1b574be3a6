"""Entities organized by business concept.

Each entity package holds its domain model (entity.py), persistence model
(table.py), data access (repository.py) and API shapes (schemas.py).
"""

from .core.user import User, UserRepository, UserTable

__all__ = [
    "User",
    "UserTable",
    "UserRepository",
]

"""User entity module.

This module contains all User-related classes organized by responsibility:
- UserDetails: The mutable fields accepted by create and update
- User: Domain entity
- UserTable: Database persistence model
- UserRepository: SQLModel-backed data access layer
- InMemoryUserRepository: Dictionary-backed data access layer
"""

from .entity import User, UserDetails
from .memory import InMemoryUserRepository
from .repository import UserRepository
from .table import UserTable

__all__ = [
    "User",
    "UserDetails",
    "UserTable",
    "UserRepository",
    "InMemoryUserRepository",
]

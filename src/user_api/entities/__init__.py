"""Entities organized by business concept.

Each entity package contains:
- entity.py: Domain model
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .user import InMemoryUserRepository, User, UserDetails, UserRepository, UserTable

__all__ = [
    "User",
    "UserDetails",
    "UserTable",
    "UserRepository",
    "InMemoryUserRepository",
]

"""Storage contract consumed by the user domain service."""

from typing import Protocol, runtime_checkable

from src.user_api.entities.user.entity import User


@runtime_checkable
class UserPersistencePort(Protocol):
    """Named queries and writes the domain service relies on.

    ``save`` assigns an id when ``user.id`` is ``None`` and updates the stored
    record in place otherwise. Implementations return domain ``User`` objects,
    never storage rows. A write that would duplicate another user's username
    or email raises ``UserServiceError`` instead of storing it.
    """

    def exists_by_username(self, username: str) -> bool: ...

    def exists_by_email(self, email: str) -> bool: ...

    def exists_by_id(self, user_id: int) -> bool: ...

    def find_by_id(self, user_id: int) -> User | None: ...

    def find_by_username(self, username: str) -> User | None: ...

    def find_all(self) -> list[User]: ...

    def save(self, user: User) -> User: ...

    def delete_by_id(self, user_id: int) -> None: ...

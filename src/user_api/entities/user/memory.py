"""Dictionary-backed user repository."""

from datetime import UTC, datetime
from itertools import count

from src.user_api.core.errors import UserServiceError

from .entity import User


class InMemoryUserRepository:
    """Keeps users in process memory.

    Ids come from a counter that only moves forward, so deleted ids are
    never reused. Username and email are unique like the table columns.
    Stored and returned users are copies.
    """

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._ids = count(1)

    def exists_by_username(self, username: str) -> bool:
        return any(user.username == username for user in self._users.values())

    def exists_by_email(self, email: str) -> bool:
        return any(user.email == email for user in self._users.values())

    def exists_by_id(self, user_id: int) -> bool:
        return user_id in self._users

    def find_by_id(self, user_id: int) -> User | None:
        user = self._users.get(user_id)
        return user.model_copy() if user is not None else None

    def find_by_username(self, username: str) -> User | None:
        for user in self._users.values():
            if user.username == username:
                return user.model_copy()
        return None

    def find_all(self) -> list[User]:
        return [self._users[key].model_copy() for key in sorted(self._users)]

    def save(self, user: User) -> User:
        if user.id is not None and user.id not in self._users:
            raise ValueError(f"User with id {user.id} not found")
        others = [u for key, u in self._users.items() if key != user.id]
        if any(u.username == user.username for u in others):
            raise UserServiceError.duplicate_username(user.username)
        if any(u.email == user.email for u in others):
            raise UserServiceError.duplicate_email(user.email)

        if user.id is None:
            stored = user.model_copy(update={"id": next(self._ids)})
        else:
            stored = user.model_copy(update={"updated_at": datetime.now(UTC)})
        self._users[stored.id] = stored
        return stored.model_copy()

    def delete_by_id(self, user_id: int) -> None:
        self._users.pop(user_id, None)

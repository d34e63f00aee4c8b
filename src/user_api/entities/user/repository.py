"""User repository backed by SQLModel."""

from datetime import UTC, datetime

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from src.user_api.core.errors import UserServiceError

from .entity import User
from .table import UserTable


class UserRepository:
    """Data-access layer for users.

    Every write commits, so each save or delete is one unit of work at the
    storage boundary.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _exists(self, *criteria) -> bool:
        statement = select(func.count()).select_from(UserTable).where(*criteria)
        return self._session.exec(statement).one() > 0

    def exists_by_username(self, username: str) -> bool:
        return self._exists(UserTable.username == username)

    def exists_by_email(self, email: str) -> bool:
        return self._exists(UserTable.email == email)

    def exists_by_id(self, user_id: int) -> bool:
        return self._session.get(UserTable, user_id) is not None

    def find_by_id(self, user_id: int) -> User | None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def find_by_username(self, username: str) -> User | None:
        statement = select(UserTable).where(UserTable.username == username)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def find_all(self) -> list[User]:
        statement = select(UserTable).order_by(UserTable.id)
        rows = self._session.exec(statement).all()
        return [User.model_validate(row, from_attributes=True) for row in rows]

    def save(self, user: User) -> User:
        if user.id is None:
            row = UserTable(
                username=user.username,
                email=user.email,
                name=user.name,
                created_at=user.created_at,
                updated_at=user.updated_at,
            )
            self._session.add(row)
        else:
            row = self._session.get(UserTable, user.id)
            if row is None:
                raise ValueError(f"User with id {user.id} not found")
            row.username = user.username
            row.email = user.email
            row.name = user.name
            row.updated_at = datetime.now(UTC)

        try:
            self._session.commit()
        except IntegrityError:
            self._session.rollback()
            conflict = self._conflict(user)
            if conflict is None:
                raise
            raise conflict from None
        except Exception:
            self._session.rollback()
            raise
        self._session.refresh(row)
        return User.model_validate(row, from_attributes=True)

    def _conflict(self, user: User) -> UserServiceError | None:
        """Name the unique column a rejected write collided with.

        Runs after the rollback, so only other users' rows are compared.
        """
        others = [] if user.id is None else [UserTable.id != user.id]
        if self._exists(UserTable.username == user.username, *others):
            return UserServiceError.duplicate_username(user.username)
        if self._exists(UserTable.email == user.email, *others):
            return UserServiceError.duplicate_email(user.email)
        return None

    def delete_by_id(self, user_id: int) -> None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return
        self._session.delete(row)
        try:
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

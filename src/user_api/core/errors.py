"""Domain failures raised by the user service."""

from enum import Enum


class UserErrorKind(str, Enum):
    """The closed set of business-rule violations."""

    DUPLICATE_USERNAME = "duplicate_username"
    DUPLICATE_EMAIL = "duplicate_email"
    NOT_FOUND = "not_found"


class UserServiceError(Exception):
    """A business-rule violation, with the offending field and value attached."""

    def __init__(self, kind: UserErrorKind, field: str, value: object, message: str):
        super().__init__(message)
        self.kind = kind
        self.field = field
        self.value = value
        self.message = message

    @classmethod
    def duplicate_username(cls, username: str) -> "UserServiceError":
        return cls(
            UserErrorKind.DUPLICATE_USERNAME,
            "username",
            username,
            f"username already exists: {username}",
        )

    @classmethod
    def duplicate_email(cls, email: str) -> "UserServiceError":
        return cls(
            UserErrorKind.DUPLICATE_EMAIL,
            "email",
            email,
            f"email already exists: {email}",
        )

    @classmethod
    def not_found(cls, user_id: int) -> "UserServiceError":
        return cls(
            UserErrorKind.NOT_FOUND,
            "id",
            user_id,
            f"user not found, id: {user_id}",
        )

    def __repr__(self) -> str:
        return f"UserServiceError(kind={self.kind.value!r}, {self.field}={self.value!r})"

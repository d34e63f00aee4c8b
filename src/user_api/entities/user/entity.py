"""User domain entity."""

from typing import Any

from pydantic import BaseModel, Field

from src.user_api.entities._base import Entity


class UserDetails(BaseModel):
    """The caller-supplied fields of a user, used as create and update payload."""

    username: str = Field(min_length=1, description="Unique login name")
    email: str = Field(min_length=1, description="Unique email address")
    name: str = Field(min_length=1, description="Display name")


class User(Entity):
    """User entity representing a person in the system.

    ``username`` and ``email`` are unique across all users; ``id`` is assigned
    by the persistence layer and never changes afterwards.
    """

    username: str = Field(description="Unique login name")
    email: str = Field(description="Unique email address")
    name: str = Field(description="Display name")

    @classmethod
    def from_details(cls, details: UserDetails) -> "User":
        """Build an unsaved user from a payload."""
        return cls(username=details.username, email=details.email, name=details.name)

    def apply(self, details: UserDetails) -> None:
        """Replace the mutable fields wholesale, keeping ``id``."""
        self.username = details.username
        self.email = details.email
        self.name = details.name

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.username == other.username
            and self.email == other.email
            and self.name == other.name
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.username,
            self.email,
            self.name,
        ))

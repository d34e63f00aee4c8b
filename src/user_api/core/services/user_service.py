"""User domain service: uniqueness rules and lookups over the persistence port."""

from loguru import logger

from src.user_api.core.errors import UserServiceError
from src.user_api.core.repositories.user_port import UserPersistencePort
from src.user_api.entities.user.entity import User, UserDetails


class UserService:
    """Create, read, update and delete users while keeping username and email unique."""

    def __init__(self, repository: UserPersistencePort):
        self._repository = repository

    def create_user(self, details: UserDetails) -> User:
        """Persist a new user.

        Raises:
            UserServiceError: ``DUPLICATE_USERNAME`` if the username is taken,
                otherwise ``DUPLICATE_EMAIL`` if the email is taken.
        """
        if self._repository.exists_by_username(details.username):
            logger.warning("Rejected user creation: username {} taken", details.username)
            raise UserServiceError.duplicate_username(details.username)
        if self._repository.exists_by_email(details.email):
            logger.warning("Rejected user creation: email {} taken", details.email)
            raise UserServiceError.duplicate_email(details.email)

        created = self._repository.save(User.from_details(details))
        logger.info("Created user {} ({})", created.id, created.username)
        return created

    def get_user_by_id(self, user_id: int) -> User | None:
        logger.debug("Looking up user by id {}", user_id)
        return self._repository.find_by_id(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        logger.debug("Looking up user by username {}", username)
        return self._repository.find_by_username(username)

    def list_users(self) -> list[User]:
        return self._repository.find_all()

    def update_user(self, user_id: int, details: UserDetails) -> User:
        """Replace username, email and name of an existing user.

        A user keeping their own username or email is not a duplicate: the
        uniqueness checks only run for values that differ from the stored ones.

        Raises:
            UserServiceError: ``NOT_FOUND``, ``DUPLICATE_USERNAME`` or
                ``DUPLICATE_EMAIL``. Nothing is written in any of these cases.
        """
        user = self._repository.find_by_id(user_id)
        if user is None:
            logger.warning("Rejected update: user {} does not exist", user_id)
            raise UserServiceError.not_found(user_id)

        if user.username != details.username and self._repository.exists_by_username(
            details.username
        ):
            logger.warning("Rejected update of user {}: username {} taken", user_id, details.username)
            raise UserServiceError.duplicate_username(details.username)

        if user.email != details.email and self._repository.exists_by_email(details.email):
            logger.warning("Rejected update of user {}: email {} taken", user_id, details.email)
            raise UserServiceError.duplicate_email(details.email)

        user.apply(details)
        updated = self._repository.save(user)
        logger.info("Updated user {}", updated.id)
        return updated

    def delete_user(self, user_id: int) -> None:
        """Hard-delete a user.

        Raises:
            UserServiceError: ``NOT_FOUND`` if no user has ``user_id``.
        """
        if not self._repository.exists_by_id(user_id):
            logger.warning("Rejected delete: user {} does not exist", user_id)
            raise UserServiceError.not_found(user_id)

        self._repository.delete_by_id(user_id)
        logger.info("Deleted user {}", user_id)

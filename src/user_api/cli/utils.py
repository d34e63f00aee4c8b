"""Shared helpers for CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console

from src.user_api.core.services import DbManageService, DbSessionService, UserService
from src.user_api.entities.user import UserRepository

console = Console()


def get_database_service() -> DbSessionService:
    """Build a database service for the configured database."""
    return DbSessionService()


@contextmanager
def user_service_scope(
    database_service: DbSessionService | None = None,
) -> Iterator[UserService]:
    """Yield a user service bound to one session; tables are created if missing."""
    database_service = database_service or get_database_service()
    DbManageService(database_service.engine).create_all()
    with database_service.session_scope() as session:
        yield UserService(UserRepository(session))

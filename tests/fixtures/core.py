from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from src.user_api.core.services import DbSessionService, UserService
from src.user_api.entities.user import InMemoryUserRepository, UserDetails, UserRepository

# Models will be imported within fixtures to control timing


@pytest.fixture
def engine() -> Generator[Engine]:
    """Create a fresh in-memory SQLite engine with the schema in place."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Import models to register them with the metadata
    from src.user_api.entities.user import UserTable  # noqa: F401

    SQLModel.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session]:
    """Create a fresh database session for testing."""
    with Session(engine, expire_on_commit=False) as session:
        try:
            yield session
        finally:
            session.rollback()
            session.close()


@pytest.fixture
def user_repo(session: Session) -> UserRepository:
    return UserRepository(session)


@pytest.fixture
def memory_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def user_service(memory_repo: InMemoryUserRepository) -> UserService:
    return UserService(memory_repo)


@pytest.fixture
def alice() -> UserDetails:
    return UserDetails(username="alice", email="alice@example.com", name="Alice")


@pytest.fixture
def bob() -> UserDetails:
    return UserDetails(username="bob", email="bob@example.com", name="Bob")


@pytest.fixture
def client(engine: Engine, session: Session) -> Generator[TestClient]:
    """Yield a TestClient wired to the shared in-memory database."""
    from src.user_api.api.http.app import app
    from src.user_api.api.http.app_data import ApplicationDependencies
    from src.user_api.api.http.deps import get_db_session

    def override_get_db_session():
        yield session

    app.state.app_dependencies = ApplicationDependencies(
        database_service=DbSessionService(engine=engine),
    )
    app.dependency_overrides[get_db_session] = override_get_db_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        del app.state.app_dependencies

"""
Shared test fixtures.

Sets up an isolated test database so tests never touch
the real database. Tables are created before each test and
dropped after it, so no test data persists.
"""

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from finance_os.main import app
from finance_os.models import Base
from finance_os.models.base import get_db


# Use SQLite for tests; no external database needed.
# A file (not :memory:) so that several threads can open
# their own connections in the concurrency tests.
TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False, "timeout": 30},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def owner_id():
    return uuid.uuid4()


@pytest.fixture
def other_owner_id():
    return uuid.uuid4()


@pytest.fixture
def client(db_session, owner_id):
    """
    Provide a test client bound to the test database.

    Requests carry the `owner_id` fixture in X-Owner-Id unless a
    test sends its own header.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app, headers={"X-Owner-Id": str(owner_id)})
    app.dependency_overrides.clear()


@pytest.fixture
def session_factory():
    """Open extra sessions, e.g. one per thread in concurrency tests."""
    return TestSessionLocal

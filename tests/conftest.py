from pathlib import Path

from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / ".env.test"
load_dotenv(env_file)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from lms_api.core.security import create_access_token  # noqa: E402
from lms_api.db.base import Base  # noqa: E402
from lms_api.db.session import get_db  # noqa: E402
from lms_api.main import app  # noqa: E402
from tests.utils.factories import create_profile_factory  # noqa: E402


@pytest.fixture
def memory_engine():
    """In-memory SQLite engine shared across threads for the test client."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(memory_engine):
    session_factory = sessionmaker(bind=memory_engine, autocommit=False, autoflush=False)
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def test_app(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
def test_client(test_app):
    # Unhandled errors must surface as 500 responses, not test exceptions
    with TestClient(test_app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def test_learner(db_session):
    return create_profile_factory(db_session, email="learner@example.com", role="learner")


@pytest.fixture
def test_admin(db_session):
    return create_profile_factory(db_session, email="admin@example.com", role="admin")


@pytest.fixture
def test_learner_token(test_learner):
    return create_access_token({"sub": str(test_learner.id), "email": test_learner.email})


@pytest.fixture
def test_admin_token(test_admin):
    return create_access_token({"sub": str(test_admin.id), "email": test_admin.email})

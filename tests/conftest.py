"""
Shared fixtures for Employee Records Service tests.

Every test runs against a fresh in-memory SQLite database.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.core.database import get_session
from app.core.employee_store import EmployeeStore
from app.main import app
from app.models.employee import Employee  # noqa: F401


@pytest.fixture
def engine():
    """Create an isolated in-memory database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Create a database session for testing."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def store(db_session):
    return EmployeeStore(db_session)


@pytest.fixture
def client(engine):
    """API client whose requests use the test database."""

    def get_test_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_test_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_payload():
    """Build a valid employee form payload, with optional overrides."""

    def _make_payload(**overrides):
        payload = {
            "employeeId": "AB1-CD2-EF3-GH4",
            "firstName": "Jane",
            "middleName": "Marie",
            "lastName": "Doeson",
            "email": "jane.doeson@company.com",
            "phone": "+1 555 0100",
            "department": "Engineering",
            "otherDepartment": "",
            "dateOfJoining": "2020-01-10",
            "role": "Backend Developer",
            "dob": "1990-05-15",
            "age": 36,
            "gender": "Female",
        }
        payload.update(overrides)
        return payload

    return _make_payload

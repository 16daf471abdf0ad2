"""
Pytest configuration and fixtures for Carbon Footprint API tests.
"""
import os

# Settings are read at import time; provide the required ones first
os.environ.setdefault("CLIMATIQ_API_KEY", "test-api-key")
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from footprint_api.database import Base, get_db
from footprint_api.estimation import EmissionEstimator, EstimationSource, ProviderError, get_estimator
from footprint_api.limiter import limiter
from footprint_api.main import app
from footprint_api.models.activity import Activity, utcnow

# Disable rate limiting for tests
limiter.enabled = False

# Use in-memory SQLite for tests with shared connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Global session for sharing across requests
_test_session = None


def get_test_db():
    """Get the shared test database session."""
    yield _test_session


class FailingProvider(EstimationSource):
    """Remote source that is always unavailable."""

    def __init__(self):
        self.calls = []

    def commute(self, transport_mode, distance_km):
        self.calls.append(("commute", transport_mode, distance_km))
        raise ProviderError("provider unavailable", status_code=503)

    def electricity(self, kwh):
        self.calls.append(("electricity", kwh))
        raise ProviderError("provider unavailable", status_code=503)


class FixedProvider(EstimationSource):
    """Remote source answering every request with the same co2e."""

    def __init__(self, value):
        self.value = value
        self.calls = []

    def commute(self, transport_mode, distance_km):
        self.calls.append(("commute", transport_mode, distance_km))
        return self.value

    def electricity(self, kwh):
        self.calls.append(("electricity", kwh))
        return self.value


@pytest.fixture
def failing_provider():
    return FailingProvider()


@pytest.fixture
def fixed_provider():
    """Factory for providers returning a fixed value."""
    return FixedProvider


@pytest.fixture
def estimator(failing_provider):
    """Estimator whose remote source always fails, so results are deterministic."""
    return EmissionEstimator(remote=failing_provider)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    global _test_session

    Base.metadata.create_all(bind=engine)
    _test_session = TestingSessionLocal()

    app.dependency_overrides[get_db] = get_test_db

    yield _test_session

    app.dependency_overrides.clear()
    _test_session.close()
    _test_session = None

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db, estimator):
    """Create a test client that never reaches the real provider."""
    app.dependency_overrides[get_estimator] = lambda: estimator
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_activity(db):
    """Insert an activity directly, bypassing estimation."""
    def _make(**fields):
        values = {
            "user_id": "default-user",
            "activity_type": "commute",
            "distance": 10.0,
            "transport_mode": "car",
            "co2e": 2.1,
            "date": utcnow(),
        }
        values.update(fields)
        activity = Activity(**values)
        db.add(activity)
        db.commit()
        db.refresh(activity)
        return activity

    return _make

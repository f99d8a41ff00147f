"""
Test configuration and fixtures for the train running board.
"""
import pytest
import os
from datetime import datetime
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

# Set testing environment variable
os.environ["TESTING"] = "true"

# Create test database engine first
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Import app after setting up test database
from app.main import app
from app.db.models import Base  # Import from models file
from app.core.dependencies import get_clock, get_db, get_session_factory
from app.services.store import SqlAlchemyStore
from app.tests.fakes import FakeClock


# Override the database dependency
def override_get_db():
    """Override database dependency for testing."""
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db
app.dependency_overrides[get_session_factory] = lambda: TestingSessionLocal

# Create all tables in the test database
Base.metadata.create_all(bind=engine)


@pytest.fixture
def db_session():
    """Create database session for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def store(db_session):
    return SqlAlchemyStore(db_session)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 18, 10, 0, 0))


@pytest.fixture(scope="session")
def client():
    """Create test client."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def frozen_client(client, clock):
    """Test client whose timestamps come from the fake clock."""
    app.dependency_overrides[get_clock] = lambda: clock
    try:
        yield client
    finally:
        app.dependency_overrides.pop(get_clock, None)


@pytest.fixture(autouse=True)
def cleanup_db():
    """Clean up database after each test."""
    yield
    # Clear all data but keep tables
    with engine.connect() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
        conn.commit()


@pytest.fixture
def sample_train():
    """Train fields as submitted by the admin page."""
    return {
        "name": "Flying Scotsman",
        "railway": "LNER",
        "country": "🇬🇧",
        "power": "Steam",
        "trainType": "Passenger",
        "numberOfCars": 7,
        "powerType": "DC",
        "years": "1923–1963",
        "notes": "A3 Pacific",
        "owner": "Margaret",
        "location": "Upper loop",
    }


@pytest.fixture
def sample_trains(sample_train):
    """A few more trains spread over the loops."""
    return [
        sample_train,
        {
            **sample_train,
            "name": "ICE 3",
            "railway": "DB",
            "country": "🇩🇪",
            "power": "Electric",
            "trainType": "Passenger",
            "numberOfCars": 8,
            "powerType": "Digital",
            "years": "2000",
            "owner": "Jonas",
            "location": "Lower loop 1",
        },
        {
            **sample_train,
            "name": "Class 66",
            "railway": "EWS",
            "power": "Diesel",
            "trainType": "Freight",
            "numberOfCars": 24,
            "powerType": "AC",
            "years": "1998–",
            "notes": "",
            "location": "Lower loop 2",
        },
    ]


@pytest.fixture
def pooled_engine(tmp_path):
    """File database behind a small connection pool, as in production."""
    pooled = create_engine(
        f"sqlite:///{tmp_path / 'pooled.db'}",
        connect_args={"check_same_thread": False},
        poolclass=QueuePool,
        pool_size=2,
        max_overflow=1,
        pool_timeout=2,
    )
    Base.metadata.create_all(bind=pooled)
    try:
        yield pooled
    finally:
        pooled.dispose()


@pytest.fixture
def pooled_client(client, pooled_engine):
    """Test client whose sessions come from the pooled engine."""
    PooledSession = sessionmaker(autocommit=False, autoflush=False, bind=pooled_engine)

    def pooled_get_db():
        db = PooledSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = pooled_get_db
    app.dependency_overrides[get_session_factory] = lambda: PooledSession
    try:
        yield client
    finally:
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_session_factory] = lambda: TestingSessionLocal

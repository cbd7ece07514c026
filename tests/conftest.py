"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timezone
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from ecofinance.api.main import create_app
from ecofinance.infrastructure.database.models import Base
from ecofinance.infrastructure.database.session import get_db
from ecofinance.domain.models import RawRow


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def app(db: Session):
    """FastAPI app bound to the test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app) -> TestClient:
    """Create FastAPI test client with test database"""
    return TestClient(app)


@pytest.fixture
def fixed_clock():
    """Deterministic clock for summary dates"""
    moment = datetime(2024, 3, 31, 12, 0, tzinfo=timezone.utc)
    return lambda: moment


@pytest.fixture
def sample_rows() -> list[RawRow]:
    """Mixed batch touching merchant, category and default scoring"""
    return [
        RawRow(date="2024-03-01", merchant="Whole Foods Market", category="Groceries", amount="$120.50"),
        RawRow(date="2024-03-02", merchant="Zara", category="Shopping", amount="$80.00"),
        RawRow(date="2024-03-03", merchant="Uber", category="Transportation", amount="$25.00"),
        RawRow(date="2024-03-04", merchant="Joe's Diner", category="Dining", amount="$40.00"),
        RawRow(date="2024-03-05", merchant="Corner Store", category="groceries", amount="$15.25"),
    ]

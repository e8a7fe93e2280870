"""
Shared test fixtures — SQLite test database, test client, catalog and engines.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Point settings at the test database before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["CATALOG_PATH"] = ""

from pumpquote.catalog import load_catalog
from pumpquote.database import Base, get_db
from pumpquote.main import app
from pumpquote.rollup import CostRollupCalculator
from pumpquote.rules_engine import SelectionRulesEngine


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def catalog():
    """The bundled price list."""
    return load_catalog()


@pytest.fixture
def rules(catalog):
    return SelectionRulesEngine(catalog)


@pytest.fixture
def calculator(catalog):
    return CostRollupCalculator(catalog, extra_day_rate=17050)

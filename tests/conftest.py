import os

# Point the application at throwaway backends before any app module reads settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("REDIS_URL", "redis://localhost:6399/0")

from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base, enable_sqlite_foreign_keys, get_db
from app.models import Category, Product
from app.utils.cache import cache_service


# Create test database (SQLite in-memory for testing)
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the dependency
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def fake_redis():
    """Replace the Redis client with an in-memory mock."""
    store = {}
    client = MagicMock()
    client.get.side_effect = store.get
    client.setex.side_effect = lambda key, ttl, value: store.__setitem__(key, value)
    client.delete.side_effect = lambda key: store.pop(key, None)

    original = cache_service.client
    cache_service.client = client
    yield store
    cache_service.client = original


@pytest.fixture(scope="function")
def client():
    """Create test client with fresh database for each test."""
    Base.metadata.create_all(bind=engine)

    with TestClient(app) as test_client:
        yield test_client

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create database session for direct database access in tests."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(db_session):
    """Factory for extra sessions on the test database (e.g. a concurrent caller)."""
    return TestingSessionLocal


@pytest.fixture
def make_category(db_session):
    """Insert a category directly and return it."""
    def _make(name="Analgesics", description="Pain relief"):
        category = Category(name=name, description=description)
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category
    return _make


@pytest.fixture
def make_product(db_session):
    """Insert a product directly and return it."""
    def _make(category, **overrides):
        fields = {
            "code": 100,
            "name": "Aspirin",
            "price": Decimal("10.00"),
            "quantity": 50,
            "description": "Acetylsalicylic acid 500mg",
            "expiration_date": date.today() + timedelta(days=45),
            "manufacturer": "Acme",
        }
        fields.update(overrides)
        product = Product(category_id=category.id, **fields)
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product
    return _make

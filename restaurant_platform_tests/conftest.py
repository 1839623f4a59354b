"""
Pytest configuration for restaurant service tests.

Points the service at a throwaway SQLite database and a test identity
provider before the application modules are imported.
"""
import os

os.environ["DATABASE_URL"] = "sqlite:///./test_restaurants.db"
os.environ["AUTH0_AUDIENCE"] = "https://restaurant-api.test"
os.environ["AUTH0_ISSUER_BASE_URL"] = "https://tenant.auth0.test"

import pytest
from fastapi.testclient import TestClient

from restaurant_platform.restaurant_service.auth import get_token_verifier
from restaurant_platform.restaurant_service.db import Base, SessionLocal, engine
from restaurant_platform.restaurant_service.main import app

from .helpers import static_verifier


@pytest.fixture(scope="session")
def client():
    app.dependency_overrides[get_token_verifier] = static_verifier
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them before each test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

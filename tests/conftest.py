"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test clients (anonymous and logged in)
- Factories for the admin-portal entities
"""

import os
from datetime import date

# Settings and the engine are created at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fiverivers.database import Base, get_db, enable_sqlite_foreign_keys
from fiverivers.crud import user as user_crud
from fiverivers.models import Company, Dispatcher, Driver, Job, JobType, Unit
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_LOGIN = "admin"
TEST_PASSWORD = "Tr0ck!ng"


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_password():
    return TEST_PASSWORD


@pytest.fixture
def admin_user(db_session):
    return user_crud.create(
        db_session,
        login_id=TEST_LOGIN,
        password=TEST_PASSWORD,
        email="admin@5riverstruckinginc.ca",
    )


@pytest.fixture
def auth_headers(client, admin_user):
    response = client.post("/auth/login", json={"loginId": TEST_LOGIN, "password": TEST_PASSWORD})
    token = response.json()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_client(client, auth_headers):
    """Test client that sends a valid bearer token with every request."""
    client.headers.update(auth_headers)
    return client


# ----------------------------------------
# Factories
# ----------------------------------------

def _add(db, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@pytest.fixture
def make_company(db_session):
    def factory(name="Aggregate Co", **kwargs):
        return _add(db_session, Company(name=name, **kwargs))
    return factory


@pytest.fixture
def make_dispatcher(db_session):
    def factory(name="Gurpreet Singh", email="dispatch@example.com", commission_percent=5, **kwargs):
        return _add(db_session, Dispatcher(
            name=name, email=email, commission_percent=commission_percent, **kwargs
        ))
    return factory


@pytest.fixture
def make_driver(db_session):
    def factory(name="Harjit Dhillon", hourly_rate=30, **kwargs):
        return _add(db_session, Driver(name=name, hourly_rate=hourly_rate, **kwargs))
    return factory


@pytest.fixture
def make_unit(db_session):
    def factory(name="Truck 12", **kwargs):
        return _add(db_session, Unit(name=name, **kwargs))
    return factory


@pytest.fixture
def make_job_type(db_session, make_company):
    def factory(title="Quarry haul", dispatch_type="Hourly", rate_of_job=100, company=None, **kwargs):
        company = company or make_company()
        return _add(db_session, JobType(
            title=title,
            dispatch_type=dispatch_type,
            rate_of_job=rate_of_job,
            company_id=company.id,
            **kwargs
        ))
    return factory


@pytest.fixture
def make_job(db_session):
    def factory(job_type, driver, unit, dispatcher=None, job_date=date(2025, 1, 15),
                job_gross_amount=100.0, **kwargs):
        return _add(db_session, Job(
            job_date=job_date,
            job_type_id=job_type.id,
            driver_id=driver.id,
            unit_id=unit.id,
            dispatcher_id=dispatcher.id if dispatcher else None,
            job_gross_amount=job_gross_amount,
            **kwargs
        ))
    return factory


@pytest.fixture
def fleet(make_dispatcher, make_driver, make_unit, make_job_type):
    """One of each entity a job needs."""
    return {
        "dispatcher": make_dispatcher(),
        "driver": make_driver(),
        "unit": make_unit(),
        "job_type": make_job_type(),
    }

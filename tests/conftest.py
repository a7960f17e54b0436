"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown (in-memory SQLite, seeded per test)
- FastAPI test client
- Access tokens for regular and admin users
"""

import os

# Must be set before app settings are imported
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("SECRET_KEY", "secret-test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db, query
from app.core.security import create_token
from app.crud import user as user_crud
from app.models import Application, Company, Job, User  # noqa: F401
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def enable_foreign_keys(dbapi_connection, connection_record):
    """SQLite only enforces foreign keys (and ON DELETE CASCADE) when asked to."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def seed(db):
    """
    Three companies, one job each, four users (u4Admin is an admin).
    u1 has applied to the first two jobs.

    Returns:
        The job ids, in insertion order
    """
    for n in (1, 2, 3):
        query(
            db,
            """INSERT INTO companies (handle, name, num_employees, description, logo_url)
               VALUES ($1, $2, $3, $4, $5)""",
            [f"c{n}", f"C{n}", n, f"Desc{n}", f"http://c{n}.img"],
        )

    job_ids = []
    for title, salary, equity, handle in (
        ("Comp1 Job", 10000, 0.5, "c1"),
        ("Comp2 Job", 10000, 0, "c2"),
        ("Comp3 Job", 5000, 0.9, "c3"),
    ):
        rows = query(
            db,
            """INSERT INTO jobs (title, salary, equity, company_handle)
               VALUES ($1, $2, $3, $4)
               RETURNING id""",
            [title, salary, equity, handle],
        )
        job_ids.append(rows[0]["id"])
    db.commit()

    for n in (1, 2, 3):
        user_crud.register(db, {
            "username": f"u{n}",
            "password": f"password{n}",
            "firstName": f"U{n}F",
            "lastName": f"U{n}L",
            "email": f"user{n}@user.com",
            "isAdmin": False,
        })
    user_crud.register(db, {
        "username": "u4Admin",
        "password": "password4",
        "firstName": "U4F",
        "lastName": "U4L",
        "email": "user4@user.com",
        "isAdmin": True,
    })

    user_crud.apply_to_job(db, "u1", job_ids[0])
    user_crud.apply_to_job(db, "u1", job_ids[1])

    return job_ids


@pytest.fixture
def db_session():
    """
    Create a fresh, seeded database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    db.info["job_ids"] = seed(db)
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def job_ids(db_session):
    """Ids of the seeded jobs: Comp1 Job, Comp2 Job, Comp3 Job"""
    return db_session.info["job_ids"]


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


def _bearer(username, is_admin=False):
    token = create_token({"username": username, "isAdmin": is_admin})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def u1_headers():
    """Authorization header for regular user u1"""
    return _bearer("u1")


@pytest.fixture
def u2_headers():
    """Authorization header for regular user u2"""
    return _bearer("u2")


@pytest.fixture
def admin_headers():
    """Authorization header for admin u4Admin"""
    return _bearer("u4Admin", is_admin=True)


@pytest.fixture
def unauthorized():
    """Body of every 401 response"""
    return {"error": {"message": "Unauthorized", "status": 401}}

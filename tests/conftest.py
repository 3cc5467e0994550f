# tests/conftest.py
"""
Shared fixtures: student factories, a throwaway SQLite database per test and
a TestClient whose get_db dependency points at it.
"""
import os

# keep the module-level engine away from any real database
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from fairgroup.domain.roster import Student
from fairgroup.infrastructure import models  # noqa: F401
from fairgroup.infrastructure.db.session import Base, get_db


def make_students(*pairs):
    return [Student.create(name, grade) for name, grade in pairs]


@pytest.fixture
def five_students():
    """A:5.0 B:4.0 C:3.0 D:2.0 E:1.0, already in roster order."""
    return make_students(("A", 5.0), ("B", 4.0), ("C", 3.0), ("D", 2.0), ("E", 1.0))


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory):
    from main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

# /tests/conftest.py

import pytest
from unittest.mock import MagicMock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.database import init_db
from app.services.database_service import DatabaseService


# --- Database Fixtures ---

@pytest.fixture
def db_session():
    """A session on a fresh in-memory SQLite database, shared across threads."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def db_service(db_session):
    return DatabaseService(db_session=db_session)


@pytest.fixture
def mock_db_service():
    """A mock gateway whose writes all succeed."""
    db = MagicMock()
    db.update_class.return_value = True
    db.update_enrollment.return_value = True
    db.delete_enrollment.return_value = True
    return db



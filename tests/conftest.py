"""
Soft Enable Test Configuration

Provides pytest fixtures for in-memory SQLite database and session management.
"""

import pytest
from sqlalchemy import create_engine

from soft_enable import create_session_factory, hooks
from sample_models import Base, User


@pytest.fixture(scope="session")
def db_engine():
    """Create an in-memory SQLite database for testing"""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """
    Create a new enablement-aware session for each test function.
    Rolls back all changes after the test completes.
    """
    connection = db_engine.connect()
    transaction = connection.begin()

    SessionLocal = create_session_factory(bind=connection)
    session = SessionLocal()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(autouse=True)
def clear_hooks():
    """Hooks are registered per class, so drop them between tests"""
    yield
    hooks.flush()


@pytest.fixture
def users(db_session):
    """taylor is disabled, abigail is enabled"""
    taylor = User(id=1, email="taylorotwell@gmail.com")
    abigail = User(id=2, email="abigailotwell@gmail.com")
    db_session.add_all([taylor, abigail])
    db_session.commit()

    taylor.disable()
    return taylor, abigail


@pytest.fixture
def fresh(db_session):
    """Reload a record through a default (filtered) query, like a new request would"""

    def _fresh(record):
        model = type(record)
        record_id = record.id
        db_session.expunge_all()
        return db_session.query(model).filter(model.id == record_id).first()

    return _fresh

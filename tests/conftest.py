"""
Pytest configuration and fixtures.

Provides an in-memory SQLite session with the full schema plus small
factories for agents and skills.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.models import Base, Agent, Skill


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Function-scoped session over a fresh in-memory database."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_agent(db_session):
    """Factory persisting an agent with skills given as dicts."""
    def _make_agent(name="Agent", skills=(), **fields):
        agent = Agent(name=name, **fields)
        agent.skills = [Skill(**skill) for skill in skills]
        db_session.add(agent)
        db_session.commit()
        return agent
    return _make_agent

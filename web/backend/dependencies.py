#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache
from typing import Generator

from sqlalchemy.orm import Session

from core.app_context import AppContext
from database.database import get_session_factory
from .config import get_config


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    session = get_session_factory(get_config().database.url)()
    try:
        yield session
    finally:
        session.close()


@lru_cache()
def get_app_context() -> AppContext:
    """Process-wide AppContext, so the embedding client is built once."""
    return AppContext.build(get_config())

"""Shared test fixtures."""

from collections.abc import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from blog_taxonomy.db import models  # noqa: F401 - registers models
from blog_taxonomy.db.base import Base


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """In-memory SQLite session for testing; unique constraints are enforced."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    TestSession = sessionmaker(bind=engine)
    session = TestSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)

"""
Point the app at a throwaway SQLite database before any test module
imports it, and create the schema once per run.
"""
import os
import tempfile

import pytest

_tmpdir = tempfile.mkdtemp(prefix="musclegram-tests-")
os.environ.setdefault("DB_URL", f"sqlite:///{os.path.join(_tmpdir, 'test.db')}")
os.environ.setdefault("ENGAGEMENT_CACHE_ENABLED", "false")

from app.db import Base, SessionLocal, engine  # noqa: E402
from app import models  # noqa: E402,F401

Base.metadata.create_all(engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

"""Shared fixtures for the Rounds test-suite."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Settings are read once at import time, so the environment must be ready first.
_TEST_DIR = Path(tempfile.mkdtemp(prefix="rounds-tests-"))
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TEST_DIR / 'test.db'}")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "1000")
os.environ.setdefault("APP_TIMEZONE", "UTC")


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def db_session():
    """Yield a session bound to a private in-memory SQLite database."""

    from sqlalchemy.orm import sessionmaker

    from rounds.infrastructure.database import Base, build_engine, initialize_database

    engine = build_engine("sqlite://")
    initialize_database(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()

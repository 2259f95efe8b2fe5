"""Shared fixtures for core and domain tests."""

import sys
from pathlib import Path

import pytest
from loguru import logger

from tunevote.core.database import get_db_connection, init_database


@pytest.fixture
def temp_db(tmp_path: Path, monkeypatch) -> Path:
    """Point DATABASE_PATH at a fresh, initialized database file."""
    db_path = tmp_path / "votes.db"
    monkeypatch.setenv("DATABASE_PATH", str(db_path))
    init_database()
    return db_path


@pytest.fixture
def conn(temp_db: Path):
    """Open connection to the temporary database."""
    with get_db_connection() as connection:
        yield connection


@pytest.fixture
def isolated_dirs(tmp_path: Path, monkeypatch) -> Path:
    """Redirect XDG config/data dirs and CWD into tmp_path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.chdir(tmp_path)
    for var in ("HOST", "PORT", "ALLOWED_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture
def restore_loguru():
    """Put loguru back to its default stderr sink after a test reconfigures it."""
    yield
    logger.remove()
    logger.add(sys.stderr)

"""
SQLite database operations for TuneVote
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path

from loguru import logger

from .config import get_data_dir


# Database schema version for migrations
SCHEMA_VERSION = 1


def get_database_path() -> Path:
    """Get the path to the SQLite database file.

    DATABASE_PATH in the environment wins over the data directory default.
    """
    override = os.environ.get("DATABASE_PATH")
    if override:
        return Path(override).expanduser()
    return get_data_dir() / "tunevote.db"


@contextmanager
def get_db_connection():
    """Get a database connection with proper cleanup and concurrency support."""
    db_path = get_database_path()
    # Writers are serialized by SQLite; waiting writers block up to the timeout
    conn = sqlite3.connect(db_path, timeout=30.0)
    conn.row_factory = sqlite3.Row

    # WAL allows reads during writes
    conn.execute("PRAGMA journal_mode=WAL")

    try:
        yield conn
    finally:
        conn.close()


def _create_votes_table(conn) -> None:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS votes (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            track_key TEXT NOT NULL,
            identity TEXT NOT NULL,
            polarity INTEGER NOT NULL CHECK (polarity IN (1, -1)),
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE (track_key, identity)
        )
    """)
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_votes_track_key ON votes (track_key)"
    )


def migrate_database(conn, current_version: int) -> None:
    """Migrate database from current_version to latest schema."""
    if current_version < 1:
        # v0 -> v1: initial votes table
        _create_votes_table(conn)
        conn.commit()


def init_database() -> None:
    """Initialize the database with required tables."""
    db_path = get_database_path()

    # Ensure data directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db_connection() as conn:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY
            )
        """)

        cursor = conn.execute("SELECT MAX(version) as version FROM schema_version")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        if current_version < SCHEMA_VERSION:
            logger.info(
                f"Migrating database {db_path} from v{current_version} to v{SCHEMA_VERSION}"
            )
            migrate_database(conn, current_version)

        conn.execute("DELETE FROM schema_version")
        conn.execute(
            "INSERT INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,),
        )
        conn.commit()

    logger.debug(f"Database initialized: {db_path}")


def get_schema_version() -> int:
    """Return the schema version recorded in the database (0 if uninitialized)."""
    with get_db_connection() as conn:
        try:
            row = conn.execute(
                "SELECT MAX(version) as version FROM schema_version"
            ).fetchone()
        except sqlite3.OperationalError:
            return 0
    return row["version"] if row and row["version"] is not None else 0

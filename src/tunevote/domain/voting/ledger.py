"""Vote ledger operations.

Pure functions over a database connection. The votes table is append-only:
nothing here updates or deletes a row. Duplicate votes are prevented by the
UNIQUE (track_key, identity) constraint alone, so two racing submissions from
the same identity produce exactly one row and one AlreadyVotedError.
"""

import sqlite3
from datetime import datetime
from typing import Any, Optional

from loguru import logger

from .exceptions import AlreadyVotedError, VoteStorageError, VoteValidationError
from .models import DOWNVOTE, UPVOTE, VALID_POLARITIES, Tally, Vote, VoteStatus


def _is_unique_violation(error: sqlite3.IntegrityError) -> bool:
    return "UNIQUE constraint failed" in str(error)


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def validate_vote(track_key: Any, polarity: Any) -> None:
    """Check submit preconditions before anything reaches storage.

    Polarity must be exactly the int 1 or -1. Booleans, floats and numeric
    strings are rejected rather than coerced.

    Raises:
        VoteValidationError: If track_key or polarity is missing or malformed
    """
    if track_key is None or polarity is None:
        raise VoteValidationError("Missing required fields: track_key, polarity")

    if not isinstance(track_key, str) or not track_key:
        raise VoteValidationError("track_key must be a non-empty string")

    if type(polarity) is not int or polarity not in VALID_POLARITIES:
        raise VoteValidationError(
            "Polarity must be 1 (thumbs up) or -1 (thumbs down)"
        )


def get_tally(conn, track_key: str) -> Tally:
    """Count up and down votes for a track.

    Unknown tracks return a zero tally.
    """
    row = conn.execute(
        """
        SELECT
            COALESCE(SUM(CASE WHEN polarity = ? THEN 1 ELSE 0 END), 0) AS up_count,
            COALESCE(SUM(CASE WHEN polarity = ? THEN 1 ELSE 0 END), 0) AS down_count
        FROM votes
        WHERE track_key = ?
        """,
        (UPVOTE, DOWNVOTE, track_key),
    ).fetchone()

    return Tally(up_count=row["up_count"], down_count=row["down_count"])


def get_vote(conn, track_key: str, identity: str) -> Optional[Vote]:
    """Fetch the vote an identity cast on a track, if any."""
    row = conn.execute(
        """
        SELECT track_key, identity, polarity, created_at
        FROM votes
        WHERE track_key = ? AND identity = ?
        """,
        (track_key, identity),
    ).fetchone()

    if row is None:
        return None

    return Vote(
        track_key=row["track_key"],
        identity=row["identity"],
        polarity=row["polarity"],
        created_at=_parse_timestamp(row["created_at"]),
    )


def has_voted(conn, track_key: str, identity: str) -> VoteStatus:
    """Point lookup on (track_key, identity)."""
    vote = get_vote(conn, track_key, identity)
    if vote is None:
        return VoteStatus(has_voted=False, polarity=None)
    return VoteStatus(has_voted=True, polarity=vote.polarity)


def submit_vote(conn, track_key: str, identity: str, polarity: int) -> Tally:
    """Record one vote and return the recomputed tally.

    The insert is a single transaction; on any failure nothing is written.

    Raises:
        VoteValidationError: If track_key or polarity is invalid
        AlreadyVotedError: If this identity already voted on this track
        VoteStorageError: On any other database failure
    """
    validate_vote(track_key, polarity)

    try:
        with conn:
            conn.execute(
                "INSERT INTO votes (track_key, identity, polarity) VALUES (?, ?, ?)",
                (track_key, identity, polarity),
            )
    except sqlite3.IntegrityError as e:
        if _is_unique_violation(e):
            logger.warning(f"Duplicate vote rejected: {track_key!r} from {identity!r}")
            raise AlreadyVotedError(track_key, identity) from e
        raise VoteStorageError(f"Failed to record vote: {e}") from e
    except sqlite3.Error as e:
        raise VoteStorageError(f"Failed to record vote: {e}") from e

    logger.info(f"Vote recorded: {track_key!r} polarity={polarity:+d}")

    try:
        return get_tally(conn, track_key)
    except sqlite3.Error as e:
        raise VoteStorageError(f"Failed to read tally: {e}") from e


def count_votes(conn) -> int:
    """Total number of stored votes across all tracks."""
    row = conn.execute("SELECT COUNT(*) AS vote_count FROM votes").fetchone()
    return row["vote_count"] if row else 0

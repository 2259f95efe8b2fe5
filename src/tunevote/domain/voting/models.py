"""
Voting domain models.

Contains data structures for votes, tallies and the request metadata used to
derive an anonymous voter identity.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Optional


UPVOTE = 1
DOWNVOTE = -1
VALID_POLARITIES = (UPVOTE, DOWNVOTE)


@dataclass(frozen=True)
class Vote:
    """A single recorded vote. Never updated or deleted once stored."""

    track_key: str
    identity: str
    polarity: int  # +1 (thumbs up) | -1 (thumbs down)
    created_at: Optional[datetime]


@dataclass(frozen=True)
class Tally:
    """Up/down vote counts for a track, computed fresh from the votes table."""

    up_count: int = 0
    down_count: int = 0

    @property
    def total(self) -> int:
        return self.up_count + self.down_count


@dataclass(frozen=True)
class VoteStatus:
    """Whether an identity has voted on a track, and how."""

    has_voted: bool
    polarity: Optional[int] = None


@dataclass(frozen=True)
class RequestMetadata:
    """Network hints for one inbound request.

    Header names are matched case-insensitively.
    """

    headers: Mapping[str, str] = field(default_factory=dict)
    socket_address: Optional[str] = None  # Peer address of the socket
    connection_address: Optional[str] = None  # Peer address from the connection object

    def header(self, name: str) -> Optional[str]:
        """Return the value of a header, ignoring name case."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

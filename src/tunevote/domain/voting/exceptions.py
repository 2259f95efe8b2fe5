"""Voting exceptions for error handling."""


class VotingError(Exception):
    """Base exception for voting operations."""

    pass


class VoteValidationError(VotingError):
    """Raised when a track key or polarity is missing or malformed."""

    pass


class AlreadyVotedError(VotingError):
    """Raised when an identity votes a second time on the same track."""

    def __init__(self, track_key: str, identity: str, message: str = None):
        self.track_key = track_key
        self.identity = identity
        super().__init__(message or "You have already voted on this track")


class VoteStorageError(VotingError):
    """Raised when the database fails for any reason other than a duplicate vote."""

    pass


class UnresolvableIdentityError(VotingError):
    """Raised when no voter identity can be derived from a request."""

    pass

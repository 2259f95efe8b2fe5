"""
Voting domain module.

Anonymous thumbs-up/thumbs-down voting on radio tracks: track key derivation,
voter identity resolution, and the append-only vote ledger.
"""

from .exceptions import (
    AlreadyVotedError,
    UnresolvableIdentityError,
    VoteStorageError,
    VoteValidationError,
    VotingError,
)
from .identity import (
    ForwardedHeaderResolver,
    IdentityResolver,
    PeerAddressResolver,
    get_resolver,
    require_identity,
    resolve_identity,
    resolve_peer_identity,
)
from .ledger import (
    count_votes,
    get_tally,
    get_vote,
    has_voted,
    submit_vote,
    validate_vote,
)
from .models import (
    DOWNVOTE,
    UPVOTE,
    RequestMetadata,
    Tally,
    Vote,
    VoteStatus,
)
from .track_key import SEPARATOR, make_track_key, split_track_key

__all__ = [
    "AlreadyVotedError",
    "UnresolvableIdentityError",
    "VoteStorageError",
    "VoteValidationError",
    "VotingError",
    "ForwardedHeaderResolver",
    "IdentityResolver",
    "PeerAddressResolver",
    "get_resolver",
    "require_identity",
    "resolve_identity",
    "resolve_peer_identity",
    "count_votes",
    "get_tally",
    "get_vote",
    "has_voted",
    "submit_vote",
    "validate_vote",
    "DOWNVOTE",
    "UPVOTE",
    "RequestMetadata",
    "Tally",
    "Vote",
    "VoteStatus",
    "SEPARATOR",
    "make_track_key",
    "split_track_key",
]

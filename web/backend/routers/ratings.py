"""
Track rating endpoints.

Anonymous thumbs-up/thumbs-down votes keyed by track key and the voter identity
resolved from the request. The track key is trusted as sent by the client.
"""

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from tunevote.domain.voting.exceptions import (
    AlreadyVotedError,
    UnresolvableIdentityError,
    VoteStorageError,
    VoteValidationError,
)
from tunevote.domain.voting.identity import IdentityResolver, require_identity
from tunevote.domain.voting.ledger import get_tally, has_voted, submit_vote
from tunevote.domain.voting.models import RequestMetadata

from ..deps import get_db, get_identity_resolver, get_request_metadata
from ..schemas import (
    SubmitVoteRequest,
    SubmitVoteResponse,
    TallyResponse,
    VoteCheckResponse,
)

router = APIRouter()


def _identity_or_400(resolver: IdentityResolver, metadata: RequestMetadata) -> str:
    try:
        return require_identity(resolver, metadata)
    except UnresolvableIdentityError as e:
        logger.warning("Rejected request without identity: no address hint present")
        raise HTTPException(400, str(e))


# Must precede the tally route, whose path converter also matches ".../check"
@router.get("/ratings/{track_key:path}/check", response_model=VoteCheckResponse)
async def check_voted(
    track_key: str,
    db=Depends(get_db),
    resolver: IdentityResolver = Depends(get_identity_resolver),
    metadata: RequestMetadata = Depends(get_request_metadata),
):
    identity = _identity_or_400(resolver, metadata)

    try:
        status = has_voted(db, track_key, identity)
    except Exception as e:
        logger.exception(f"Failed to check vote for {track_key!r}")
        raise HTTPException(500, f"Failed to check rating: {str(e)}")

    return VoteCheckResponse(has_voted=status.has_voted, polarity=status.polarity)


@router.get("/ratings/{track_key:path}", response_model=TallyResponse)
async def read_tally(track_key: str, db=Depends(get_db)):
    try:
        tally = get_tally(db, track_key)
    except Exception as e:
        logger.exception(f"Failed to read tally for {track_key!r}")
        raise HTTPException(500, f"Failed to read ratings: {str(e)}")

    logger.debug(f"Tally {track_key!r}: +{tally.up_count} -{tally.down_count}")
    return TallyResponse(
        track_key=track_key,
        up_count=tally.up_count,
        down_count=tally.down_count,
    )


@router.post("/ratings", response_model=SubmitVoteResponse, status_code=201)
async def create_vote(
    body: SubmitVoteRequest,
    db=Depends(get_db),
    resolver: IdentityResolver = Depends(get_identity_resolver),
    metadata: RequestMetadata = Depends(get_request_metadata),
):
    identity = _identity_or_400(resolver, metadata)

    try:
        tally = submit_vote(db, body.track_key, identity, body.polarity)
    except VoteValidationError as e:
        raise HTTPException(400, str(e))
    except AlreadyVotedError as e:
        raise HTTPException(409, str(e))
    except VoteStorageError as e:
        logger.exception(f"Failed to record vote for {body.track_key!r}")
        raise HTTPException(500, str(e))

    return SubmitVoteResponse(
        track_key=body.track_key,
        up_count=tally.up_count,
        down_count=tally.down_count,
    )

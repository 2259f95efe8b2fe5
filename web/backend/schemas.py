from pydantic import BaseModel, StrictInt, StrictStr
from typing import Optional


class HealthResponse(BaseModel):
    status: str
    message: str


class TallyResponse(BaseModel):
    track_key: str
    up_count: int
    down_count: int


class VoteCheckResponse(BaseModel):
    has_voted: bool
    polarity: Optional[int] = None


class SubmitVoteRequest(BaseModel):
    # Optional so missing fields surface as a domain validation error
    track_key: Optional[StrictStr] = None
    polarity: Optional[StrictInt] = None


class SubmitVoteResponse(BaseModel):
    success: bool = True
    track_key: str
    up_count: int
    down_count: int

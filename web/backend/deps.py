from typing import AsyncGenerator

from fastapi import Depends, Request

from tunevote.core.config import Config, load_config
from tunevote.core.database import get_db_connection
from tunevote.domain.voting.identity import IdentityResolver, get_resolver
from tunevote.domain.voting.models import RequestMetadata


async def get_db() -> AsyncGenerator:
    """FastAPI dependency for database connections."""
    with get_db_connection() as conn:
        yield conn


def get_config() -> Config:
    """FastAPI dependency for configuration."""
    return load_config()


def get_identity_resolver(config: Config = Depends(get_config)) -> IdentityResolver:
    """FastAPI dependency for the configured identity strategy."""
    return get_resolver(config.voting.identity_strategy)


def get_request_metadata(request: Request) -> RequestMetadata:
    """Snapshot the network hints of the current request.

    ASGI servers report a single peer address in scope["client"], which is the
    socket-level address. No connection-level address is exposed separately.
    """
    client = request.client
    return RequestMetadata(
        headers=dict(request.headers),
        socket_address=client.host if client else None,
    )

"""
Anonymous voter identity resolution.

Identity is a coarse network heuristic: shared NAT or proxies collapse many
listeners into one identity, and one listener on several networks shows up as
several identities. Resolvers are pluggable so a deployment can choose which
hints to trust; none of them attempt stronger fingerprinting.

Resolvers never validate address syntax. Whatever string the hint carries
(IPv4, IPv6, a proxy-injected hostname) is the identity.
"""

from typing import Optional, Protocol

from .exceptions import UnresolvableIdentityError
from .models import RequestMetadata


FORWARDED_FOR_HEADER = "x-forwarded-for"
REAL_IP_HEADER = "x-real-ip"


class IdentityResolver(Protocol):
    """Contract for deriving a voter identity from request metadata."""

    name: str

    def resolve(self, metadata: RequestMetadata) -> Optional[str]: ...


def _first_forwarded_for(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return value.split(",")[0].strip() or None


def resolve_identity(metadata: RequestMetadata) -> Optional[str]:
    """Resolve identity with the forwarded-header precedence.

    First match wins:
    1. First comma-separated token of X-Forwarded-For, trimmed
    2. X-Real-IP, verbatim
    3. Socket peer address
    4. Connection-level peer address

    Returns:
        The identity string, or None if no hint is present
    """
    return (
        _first_forwarded_for(metadata.header(FORWARDED_FOR_HEADER))
        or metadata.header(REAL_IP_HEADER)
        or metadata.socket_address
        or metadata.connection_address
        or None
    )


def resolve_peer_identity(metadata: RequestMetadata) -> Optional[str]:
    """Resolve identity from transport addresses only, ignoring proxy headers."""
    return metadata.socket_address or metadata.connection_address or None


class ForwardedHeaderResolver:
    """Default resolver for deployments behind a reverse proxy."""

    name = "forwarded"

    def resolve(self, metadata: RequestMetadata) -> Optional[str]:
        return resolve_identity(metadata)


class PeerAddressResolver:
    """Resolver that trusts only the transport peer address."""

    name = "peer"

    def resolve(self, metadata: RequestMetadata) -> Optional[str]:
        return resolve_peer_identity(metadata)


_RESOLVERS = {
    ForwardedHeaderResolver.name: ForwardedHeaderResolver,
    PeerAddressResolver.name: PeerAddressResolver,
}


def get_resolver(strategy: str) -> IdentityResolver:
    """Return the resolver for a configured strategy name.

    Raises:
        ValueError: If the strategy is unknown
    """
    try:
        return _RESOLVERS[strategy]()
    except KeyError:
        raise ValueError(
            f"Unknown identity strategy: {strategy!r}. "
            f"Valid strategies are: {tuple(_RESOLVERS)}"
        ) from None


def require_identity(resolver: IdentityResolver, metadata: RequestMetadata) -> str:
    """Resolve identity, rejecting requests that carry no usable hint.

    Raises:
        UnresolvableIdentityError: If the resolver yields nothing
    """
    identity = resolver.resolve(metadata)
    if not identity:
        raise UnresolvableIdentityError("Could not determine client identity")
    return identity

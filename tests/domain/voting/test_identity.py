"""Tests for voter identity resolution."""

import pytest

from tunevote.domain.voting.exceptions import UnresolvableIdentityError
from tunevote.domain.voting.identity import (
    ForwardedHeaderResolver,
    PeerAddressResolver,
    get_resolver,
    require_identity,
    resolve_identity,
    resolve_peer_identity,
)
from tunevote.domain.voting.models import RequestMetadata


class TestResolveIdentity:
    """Tests for the forwarded-header precedence chain."""

    def test_forwarded_for(self) -> None:
        meta = RequestMetadata(
            headers={"x-forwarded-for": "203.0.113.1"}, socket_address="10.0.0.1"
        )
        assert resolve_identity(meta) == "203.0.113.1"

    def test_forwarded_for_takes_first_of_many(self) -> None:
        meta = RequestMetadata(
            headers={"x-forwarded-for": "203.0.113.1, 198.51.100.1, 192.0.2.1"},
            socket_address="10.0.0.1",
        )
        assert resolve_identity(meta) == "203.0.113.1"

    def test_forwarded_for_trimmed(self) -> None:
        meta = RequestMetadata(
            headers={"x-forwarded-for": "  203.0.113.1  , 198.51.100.1"},
            socket_address="10.0.0.1",
        )
        assert resolve_identity(meta) == "203.0.113.1"

    def test_header_name_case_insensitive(self) -> None:
        meta = RequestMetadata(headers={"X-Forwarded-For": "203.0.113.1"})
        assert resolve_identity(meta) == "203.0.113.1"

    def test_real_ip_fallback(self) -> None:
        meta = RequestMetadata(
            headers={"x-real-ip": "198.51.100.1"}, socket_address="10.0.0.1"
        )
        assert resolve_identity(meta) == "198.51.100.1"

    def test_real_ip_taken_verbatim(self) -> None:
        meta = RequestMetadata(headers={"x-real-ip": " 198.51.100.1, x "})
        assert resolve_identity(meta) == " 198.51.100.1, x "

    def test_socket_address_fallback(self) -> None:
        meta = RequestMetadata(headers={}, socket_address="192.0.2.1")
        assert resolve_identity(meta) == "192.0.2.1"

    def test_connection_address_fallback(self) -> None:
        meta = RequestMetadata(headers={}, connection_address="192.0.2.99")
        assert resolve_identity(meta) == "192.0.2.99"

    def test_all_present_prefers_forwarded_for(self) -> None:
        meta = RequestMetadata(
            headers={"x-forwarded-for": " 203.0.113.1 ,10.1.1.1", "x-real-ip": "198.51.100.1"},
            socket_address="10.0.0.1",
            connection_address="10.0.0.2",
        )
        assert resolve_identity(meta) == "203.0.113.1"

    def test_empty_forwarded_token_falls_through(self) -> None:
        meta = RequestMetadata(
            headers={"x-forwarded-for": " , 198.51.100.7"}, socket_address="10.0.0.1"
        )
        assert resolve_identity(meta) == "10.0.0.1"

    @pytest.mark.parametrize("address", ["2001:db8::1", "::1", "127.0.0.1", "proxy.local"])
    def test_no_syntax_validation(self, address) -> None:
        meta = RequestMetadata(headers={"x-forwarded-for": address})
        assert resolve_identity(meta) == address

    def test_nothing_available(self) -> None:
        assert resolve_identity(RequestMetadata()) is None


class TestResolvers:
    """Tests for pluggable resolver strategies."""

    def test_peer_resolver_ignores_headers(self) -> None:
        meta = RequestMetadata(
            headers={"x-forwarded-for": "203.0.113.1", "x-real-ip": "198.51.100.1"},
            socket_address="10.0.0.1",
        )
        assert PeerAddressResolver().resolve(meta) == "10.0.0.1"
        assert resolve_peer_identity(RequestMetadata(connection_address="::1")) == "::1"

    def test_get_resolver(self) -> None:
        assert isinstance(get_resolver("forwarded"), ForwardedHeaderResolver)
        assert isinstance(get_resolver("peer"), PeerAddressResolver)

    def test_get_resolver_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown identity strategy"):
            get_resolver("fingerprint")

    def test_require_identity_rejects_missing(self) -> None:
        with pytest.raises(UnresolvableIdentityError):
            require_identity(ForwardedHeaderResolver(), RequestMetadata())

    def test_require_identity_returns_value(self) -> None:
        meta = RequestMetadata(socket_address="192.0.2.1")
        assert require_identity(ForwardedHeaderResolver(), meta) == "192.0.2.1"

"""Tests for relay credential resolution."""
from __future__ import annotations

import json

import pytest

from roomrtc.core.config import Settings
from roomrtc.core.errors import ParseError, TransportError
from roomrtc.schemas.signaling import ConnectionServer, RelayCredentialSet
from roomrtc.services import relay


def test_parse_relay_credentials_keeps_uri_order(relay_body):
    credentials = relay.parse_relay_credentials(relay_body(uris=["turn:b", "turn:a"]))

    assert credentials == RelayCredentialSet(username="user", password="secret", uris=("turn:b", "turn:a"))
    assert credentials.to_connection_servers() == [
        ConnectionServer(uri="turn:b", username="user", credential="secret"),
        ConnectionServer(uri="turn:a", username="user", credential="secret"),
    ]


@pytest.mark.parametrize(
    "body",
    ["<html>", json.dumps({"username": "u", "password": "p"}), json.dumps({"username": "u", "password": "p", "uris": "turn:a"})],
)
def test_parse_relay_credentials_rejects_malformed_bodies(body):
    with pytest.raises(ParseError):
        relay.parse_relay_credentials(body)


@pytest.mark.asyncio
async def test_relay_present_skips_request(make_transport, turn_url):
    transport = make_transport({})
    servers = [ConnectionServer(uri="stun:s1"), ConnectionServer(uri="turn:t1", credential="pw")]

    resolved = await relay.resolve_connection_servers(transport, servers, turn_url)

    assert resolved == servers
    assert resolved is not servers
    assert transport.calls == []


@pytest.mark.asyncio
async def test_relay_servers_are_appended_after_embedded_servers(make_transport, relay_body, turn_url):
    transport = make_transport({("GET", turn_url): relay_body(uris=["turn:t1", "turn:t2"])})
    embedded = [ConnectionServer(uri="stun:s1"), ConnectionServer(uri="stun:s2")]

    resolved = await relay.resolve_connection_servers(transport, embedded, turn_url)

    assert resolved == [
        ConnectionServer(uri="stun:s1"),
        ConnectionServer(uri="stun:s2"),
        ConnectionServer(uri="turn:t1", username="user", credential="secret"),
        ConnectionServer(uri="turn:t2", username="user", credential="secret"),
    ]
    assert transport.calls == [("GET", turn_url, None, 5.0)]


@pytest.mark.asyncio
async def test_relay_timeout_follows_settings(make_transport, relay_body, turn_url):
    transport = make_transport({("GET", turn_url): relay_body()})

    await relay.resolve_connection_servers(transport, [], turn_url, settings=Settings(turn_http_timeout_ms=1500))

    assert transport.calls[0][3] == 1.5


@pytest.mark.asyncio
async def test_non_success_status_reports_url_and_status(make_transport, turn_url):
    transport = make_transport(
        {("GET", turn_url): TransportError("Non-200 response", url=turn_url, status_code=403)}
    )

    with pytest.raises(TransportError) as exc:
        await relay.resolve_connection_servers(transport, [ConnectionServer(uri="stun:s1")], turn_url)

    assert exc.value.status_code == 403
    assert exc.value.url == turn_url
    assert turn_url in str(exc.value)
    assert "403" in str(exc.value)


@pytest.mark.asyncio
async def test_connection_failure_propagates_unchanged(make_transport, turn_url):
    failure = TransportError(f"HTTP GET to {turn_url} timeout", url=turn_url)
    transport = make_transport({("GET", turn_url): failure})

    with pytest.raises(TransportError) as exc:
        await relay.resolve_connection_servers(transport, [], turn_url)

    assert exc.value is failure


@pytest.mark.asyncio
async def test_missing_turn_url_is_a_parse_error(make_transport):
    transport = make_transport({})

    with pytest.raises(ParseError):
        await relay.resolve_connection_servers(transport, [ConnectionServer(uri="stun:s1")], None)

    assert transport.calls == []


@pytest.mark.asyncio
async def test_empty_relay_uris_is_a_parse_error(make_transport, relay_body, turn_url):
    transport = make_transport({("GET", turn_url): relay_body(uris=[])})

    with pytest.raises(ParseError):
        await relay.resolve_connection_servers(transport, [], turn_url)

    assert len(transport.calls) == 1

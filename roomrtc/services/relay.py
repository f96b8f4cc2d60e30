"""Relay (TURN) credential resolution."""
from __future__ import annotations

import logging

from ..core.config import Settings, get_settings
from ..core.errors import ParseError, TransportError
from ..schemas.signaling import ConnectionServer, RelayCredentialSet
from ..schemas.wire import RelayCredentialResponse, decode
from .ice_servers import has_relay_server
from .transport import Transport

logger = logging.getLogger(__name__)


def parse_relay_credentials(body: str) -> RelayCredentialSet:
    payload = decode(RelayCredentialResponse, body)
    return RelayCredentialSet(username=payload.username, password=payload.password, uris=tuple(payload.uris))


async def request_relay_servers(transport: Transport, turn_url: str, *, timeout: float) -> list[ConnectionServer]:
    """GET ``turn_url`` and expand the returned credentials into relay servers.

    ``timeout`` is in seconds and bounds both connecting and reading.
    """

    logger.debug("Request TURN from: %s", turn_url)
    try:
        body = await transport.send("GET", turn_url, timeout=timeout)
    except TransportError as exc:
        if exc.status_code is None:
            raise
        raise TransportError(
            f"Non-200 response when requesting TURN server from {turn_url} : {exc.status_code}",
            url=turn_url,
            status_code=exc.status_code,
        ) from exc
    logger.debug("TURN response: %s", body)
    return parse_relay_credentials(body).to_connection_servers()


async def resolve_connection_servers(
    transport: Transport,
    servers: list[ConnectionServer],
    turn_url: str | None,
    *,
    settings: Settings | None = None,
) -> list[ConnectionServer]:
    """Return ``servers`` with relay servers appended when none is present yet.

    Embedded servers keep their position ahead of the resolved relay servers,
    since callers treat list order as priority.
    """

    settings = settings or get_settings()
    if has_relay_server(servers, settings.relay_scheme_prefix):
        return list(servers)
    if not turn_url:
        raise ParseError("turn_url: Field required when no relay server is configured")

    relay_servers = await request_relay_servers(
        transport, turn_url, timeout=settings.turn_http_timeout_ms / 1000
    )
    if not relay_servers:
        raise ParseError(f"uris: relay response from {turn_url} listed no servers")
    for server in relay_servers:
        logger.debug("TurnServer: %s", server.uri)
    return [*servers, *relay_servers]

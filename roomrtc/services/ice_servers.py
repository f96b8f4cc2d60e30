"""Connection-server list derived from a peer connection configuration."""
from __future__ import annotations

import logging
from typing import Iterable

from ..schemas.signaling import RELAY_SCHEME_PREFIX, ConnectionServer
from ..schemas.wire import PeerConnectionConfig, decode

logger = logging.getLogger(__name__)


def ice_servers_from_pc_config(pc_config: str) -> list[ConnectionServer]:
    """Return the servers listed under ``iceServers``, in document order.

    Embedded servers never carry a username. An entry whose ``urls`` is an
    array yields one server per URI with the entry's credential.
    """

    config = decode(PeerConnectionConfig, pc_config)
    servers: list[ConnectionServer] = []
    for entry in config.ice_servers:
        uris = [entry.urls] if isinstance(entry.urls, str) else entry.urls
        for uri in uris:
            server = ConnectionServer(uri=uri, credential=entry.credential)
            logger.debug("IceServer: %s", server.uri)
            servers.append(server)
    return servers


def has_relay_server(servers: Iterable[ConnectionServer], prefix: str = RELAY_SCHEME_PREFIX) -> bool:
    return any(server.uri.startswith(prefix) for server in servers)

"""Resolve the signaling parameters a peer needs to join a room."""
from __future__ import annotations

from .core.errors import (
    InvalidStateError,
    ParseError,
    RoomResponseError,
    SignalingError,
    TransportError,
)
from .schemas.signaling import (
    ConnectionServer,
    IceCandidate,
    RelayCredentialSet,
    RoomDescriptor,
    SdpType,
    SessionDescription,
    SignalingParameters,
)
from .services.room_parameters import (
    FetcherState,
    RoomParametersEvents,
    RoomParametersFetcher,
    fetch_room_parameters,
)
from .services.transport import HttpTransport, Transport

__all__ = [
    "ConnectionServer",
    "FetcherState",
    "HttpTransport",
    "IceCandidate",
    "InvalidStateError",
    "ParseError",
    "RelayCredentialSet",
    "RoomDescriptor",
    "RoomParametersEvents",
    "RoomParametersFetcher",
    "RoomResponseError",
    "SdpType",
    "SessionDescription",
    "SignalingError",
    "SignalingParameters",
    "Transport",
    "TransportError",
    "fetch_room_parameters",
]

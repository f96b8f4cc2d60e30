"""Immutable data contracts produced by the room parameters workflow."""
from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

RELAY_SCHEME_PREFIX = "turn:"


class SdpType(str, enum.Enum):
    OFFER = "offer"
    ANSWER = "answer"
    PRANSWER = "pranswer"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class SessionDescription(_Frozen):
    type: SdpType
    sdp: str


class IceCandidate(_Frozen):
    sdp_mid: str = Field(..., description="Media stream identification tag (room message `id`)")
    sdp_mline_index: int = Field(..., description="Media line index (room message `label`)")
    candidate: str


class ConnectionServer(_Frozen):
    """A STUN/TURN endpoint used for NAT traversal."""

    uri: str
    username: str = ""
    credential: str = ""

    @property
    def is_relay(self) -> bool:
        return self.uri.startswith(RELAY_SCHEME_PREFIX)


class RelayCredentialSet(_Frozen):
    """Credentials returned by the relay-credential endpoint."""

    username: str
    password: str
    uris: tuple[str, ...] = ()

    def to_connection_servers(self) -> list[ConnectionServer]:
        """Expand into one server per URI, all sharing the same credentials."""

        return [
            ConnectionServer(uri=uri, username=self.username, credential=self.password)
            for uri in self.uris
        ]


class _RoomState(_Frozen):
    initiator: bool
    offer_sdp: SessionDescription | None = None
    ice_candidates: tuple[IceCandidate, ...] = ()

    @model_validator(mode="after")
    def _initiator_has_no_remote_state(self) -> "_RoomState":
        if self.initiator and (self.offer_sdp is not None or self.ice_candidates):
            raise ValueError("initiator rooms carry no offer or pending candidates")
        return self


class RoomDescriptor(_RoomState):
    room_id: str
    client_id: str
    wss_url: str
    wss_post_url: str


class SignalingParameters(_RoomState):
    """Everything a peer needs to begin establishing a connection in a room."""

    ice_servers: tuple[ConnectionServer, ...] = ()
    room_id: str
    client_id: str
    wss_url: str
    wss_post_url: str

    @classmethod
    def from_room(
        cls, room: RoomDescriptor, ice_servers: list[ConnectionServer] | tuple[ConnectionServer, ...]
    ) -> "SignalingParameters":
        return cls(
            ice_servers=tuple(ice_servers),
            initiator=room.initiator,
            room_id=room.room_id,
            client_id=room.client_id,
            wss_url=room.wss_url,
            wss_post_url=room.wss_post_url,
            offer_sdp=room.offer_sdp,
            ice_candidates=room.ice_candidates,
        )

    def ice_servers_config(self) -> list[dict[str, Any]]:
        """Return the servers in ``RTCConfiguration.iceServers`` form, in priority order."""

        entries: list[dict[str, Any]] = []
        for server in self.ice_servers:
            entry: dict[str, Any] = {"urls": server.uri}
            if server.username:
                entry["username"] = server.username
            if server.credential:
                entry["credential"] = server.credential
            entries.append(entry)
        return entries

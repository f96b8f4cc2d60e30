"""Data contracts for RTC endpoints."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from .signaling import SignalingParameters


class RoomParametersRequest(BaseModel):
    room_url: str = Field(..., min_length=1, description="Room endpoint of the signaling server")
    message: str = Field(default="", description="Request body forwarded to the room endpoint")


class RoomParametersResponse(BaseModel):
    parameters: SignalingParameters
    ice_servers_config: list[dict[str, Any]] = Field(
        ..., description="Servers in RTCConfiguration.iceServers form, highest priority first"
    )

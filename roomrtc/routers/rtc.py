"""Room parameter resolution endpoint."""
from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.errors import RoomResponseError, SignalingError
from ..schemas.rtc import RoomParametersRequest, RoomParametersResponse
from ..services.room_parameters import fetch_room_parameters
from ..services.transport import HttpTransport, Transport

router = APIRouter()


async def get_transport() -> AsyncGenerator[Transport, None]:
    """FastAPI dependency providing a per-request HTTP transport."""

    async with HttpTransport() as transport:
        yield transport


@router.post("/room-parameters", response_model=RoomParametersResponse)
async def resolve_room_parameters(
    payload: RoomParametersRequest,
    transport: Transport = Depends(get_transport),
) -> RoomParametersResponse:
    """Resolve the signaling parameters for a room on behalf of the caller."""

    try:
        params = await fetch_room_parameters(payload.room_url, payload.message, transport=transport)
    except RoomResponseError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=f"Room response error: {exc.result}"
        ) from exc
    except SignalingError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return RoomParametersResponse(parameters=params, ice_servers_config=params.ice_servers_config())

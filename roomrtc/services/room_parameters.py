"""Room parameters workflow.

Converts a room URL into the ``SignalingParameters`` a peer needs to join the
room: POST to the room endpoint, parse the room state, then fetch relay
credentials when the embedded configuration lists no relay server. Exactly
one of the two completion callbacks fires per fetcher.
"""
from __future__ import annotations

import asyncio
import enum
import inspect
import logging
from typing import Any, Awaitable, Callable, Protocol

from ..core.config import Settings, get_settings
from ..core.errors import InvalidStateError, ParseError, RoomResponseError, SignalingError, TransportError
from ..schemas.signaling import SignalingParameters
from .ice_servers import has_relay_server, ice_servers_from_pc_config
from .relay import resolve_connection_servers
from .room import describe_room, parse_room_response
from .transport import HttpTransport, Transport

logger = logging.getLogger(__name__)


class FetcherState(str, enum.Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    PARSING_ROOM = "parsing_room"
    RESOLVING_RELAY = "resolving_relay"
    ASSEMBLING_RESULT = "assembling_result"
    DONE = "done"


class RoomParametersEvents(Protocol):
    """Completion channels; either method may be a coroutine function."""

    def on_signaling_parameters_ready(self, params: SignalingParameters) -> Awaitable[None] | None: ...

    def on_signaling_parameters_error(self, description: str) -> Awaitable[None] | None: ...


class RoomParametersFetcher:
    """Single-use resolver of a room's signaling parameters."""

    def __init__(
        self,
        room_url: str,
        room_message: str = "",
        events: RoomParametersEvents | None = None,
        *,
        transport: Transport | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._room_url = room_url
        self._room_message = room_message
        self._events = events
        self._transport = transport
        self._settings = settings or get_settings()
        self._state = FetcherState.IDLE
        self._result: SignalingParameters | None = None
        self._error: SignalingError | None = None
        self._task: asyncio.Task[SignalingParameters | None] | None = None

    @property
    def state(self) -> FetcherState:
        return self._state

    @property
    def result(self) -> SignalingParameters | None:
        return self._result

    @property
    def error(self) -> SignalingError | None:
        return self._error

    def start(self) -> asyncio.Task[SignalingParameters | None]:
        """Schedule the workflow on the running loop and return its task."""

        loop = asyncio.get_running_loop()
        self._claim()
        self._task = loop.create_task(self._run(), name=f"room-parameters:{self._room_url}")
        return self._task

    async def run(self) -> SignalingParameters | None:
        """Run the workflow inline; returns ``None`` when it ended in error."""

        self._claim()
        return await self._run()

    def _claim(self) -> None:
        if self._state is not FetcherState.IDLE:
            raise InvalidStateError(f"Room parameters fetcher already used (state: {self._state.value})")
        self._state = FetcherState.FETCHING

    async def _run(self) -> SignalingParameters | None:
        try:
            if self._transport is not None:
                params = await self._resolve(self._transport)
            else:
                async with HttpTransport(settings=self._settings) as transport:
                    params = await self._resolve(transport)
        except asyncio.CancelledError:
            self._state = FetcherState.DONE
            logger.info("Room parameters workflow for %s cancelled", self._room_url)
            raise
        except RoomResponseError as exc:
            await self._fail(exc, f"Room response error: {exc.result}")
        except ParseError as exc:
            await self._fail(exc, f"Room JSON parsing error: {exc}")
        except TransportError as exc:
            if self._state is FetcherState.FETCHING:
                await self._fail(exc, str(exc))
            else:
                await self._fail(exc, f"Room IO error: {exc}")
        except Exception as exc:  # noqa: BLE001
            logger.exception("Room parameters workflow failed for %s", self._room_url)
            error = SignalingError(f"Unexpected room parameters error: {exc!r}")
            error.__cause__ = exc
            await self._fail(error, str(error))
        else:
            await self._succeed(params)
        return self._result

    async def _resolve(self, transport: Transport) -> SignalingParameters:
        logger.info("Connecting to room: %s", self._room_url)
        body = await transport.send("POST", self._room_url, self._room_message)

        self._state = FetcherState.PARSING_ROOM
        room_params = parse_room_response(body)
        room = describe_room(room_params)
        servers = ice_servers_from_pc_config(room_params.pc_config)

        if not has_relay_server(servers, self._settings.relay_scheme_prefix):
            self._state = FetcherState.RESOLVING_RELAY
            logger.info("No relay server configured for room %s; requesting credentials", room.room_id)
        servers = await resolve_connection_servers(
            transport, servers, room_params.turn_url, settings=self._settings
        )

        self._state = FetcherState.ASSEMBLING_RESULT
        return SignalingParameters.from_room(room, servers)

    async def _succeed(self, params: SignalingParameters) -> None:
        self._state = FetcherState.DONE
        self._result = params
        logger.info(
            "Signaling parameters ready for room %s (%d ICE servers)", params.room_id, len(params.ice_servers)
        )
        if self._events is not None:
            await _deliver(self._events.on_signaling_parameters_ready, params)

    async def _fail(self, error: SignalingError, description: str) -> None:
        self._state = FetcherState.DONE
        self._error = error
        logger.error("Room parameters error for %s: %s", self._room_url, description)
        if self._events is not None:
            await _deliver(self._events.on_signaling_parameters_error, description)


async def _deliver(callback: Callable[[Any], Awaitable[None] | None], argument: Any) -> None:
    """Invoke a caller callback; its failures are logged and never re-routed."""

    try:
        outcome = callback(argument)
        if inspect.isawaitable(outcome):
            await outcome
    except Exception:  # noqa: BLE001
        logger.exception("Room parameters callback %s raised", getattr(callback, "__name__", callback))


async def fetch_room_parameters(
    room_url: str,
    room_message: str = "",
    *,
    transport: Transport | None = None,
    settings: Settings | None = None,
) -> SignalingParameters:
    """Resolve a room's signaling parameters, raising the typed error on failure."""

    fetcher = RoomParametersFetcher(room_url, room_message, transport=transport, settings=settings)
    params = await fetcher.run()
    if params is None:
        raise fetcher.error or SignalingError("Room parameters unavailable")
    return params

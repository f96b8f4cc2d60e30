"""Wire-format models for the signaling server's JSON responses.

The room endpoint nests JSON documents as strings (``params``, ``messages``,
``pc_config``), so several fields here are typed ``str`` and decoded in a
second pass by the services that consume them.
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter, ValidationError

from ..core.errors import ParseError

ROOM_RESULT_SUCCESS = "SUCCESS"

_M = TypeVar("_M", bound=BaseModel)


def _scalar_as_text(value: Any) -> Any:
    """Render JSON scalars the way the server's string getters do."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


_Text = Annotated[str, BeforeValidator(_scalar_as_text)]


class _Wire(BaseModel):
    model_config = ConfigDict(extra="ignore")


class RoomResponse(_Wire):
    result: _Text
    params: str | None = None


class RoomParams(_Wire):
    room_id: str
    client_id: str
    wss_url: str
    wss_post_url: str
    is_initiator: bool
    messages: str | None = None
    pc_config: str
    turn_url: str | None = None


class RoomMessage(_Wire):
    type: str


class OfferMessage(_Wire):
    type: Literal["offer"]
    sdp: str


class CandidateMessage(_Wire):
    type: Literal["candidate"]
    id: _Text
    label: int
    candidate: str


class IceServerEntry(_Wire):
    urls: str | list[str]
    credential: str = ""


class PeerConnectionConfig(_Wire):
    ice_servers: list[IceServerEntry] = Field(..., alias="iceServers")


class RelayCredentialResponse(_Wire):
    username: str
    password: str
    uris: list[str]


_STRING_LIST = TypeAdapter(list[str])


def decode(model: type[_M], raw: str | bytes) -> _M:
    """Validate a JSON document against ``model``, raising ``ParseError`` on failure."""

    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        raise ParseError(_describe(exc)) from exc


def decode_string_list(raw: str | bytes) -> list[str]:
    try:
        return _STRING_LIST.validate_json(raw)
    except ValidationError as exc:
        raise ParseError(_describe(exc)) from exc


def _describe(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors(include_url=False):
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        problems.append(f"{location}: {error['msg']}")
    return f"{exc.title}: " + "; ".join(problems)

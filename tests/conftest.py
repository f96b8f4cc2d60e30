"""Shared builders for room and relay payloads."""
from __future__ import annotations

import json
from typing import Any

import pytest

ROOM_URL = "https://rtc.example/join/r1"
TURN_URL = "https://turn"


def build_room_body(
    *,
    result: str = "SUCCESS",
    initiator: bool | str = True,
    messages: list[dict[str, Any] | str] | None = None,
    ice_servers: list[dict[str, Any]] | None = None,
    turn_url: str | None = TURN_URL,
    **overrides: Any,
) -> str:
    params: dict[str, Any] = {
        "room_id": "r1",
        "client_id": "c1",
        "wss_url": "wss://x",
        "wss_post_url": "https://x/post",
        "is_initiator": initiator,
        "pc_config": json.dumps({"iceServers": ice_servers if ice_servers is not None else []}),
    }
    if turn_url is not None:
        params["turn_url"] = turn_url
    if messages is not None:
        params["messages"] = json.dumps(
            [entry if isinstance(entry, str) else json.dumps(entry) for entry in messages]
        )
    params.update(overrides)
    return json.dumps({"result": result, "params": json.dumps(params)})


def build_relay_body(username: str = "user", password: str = "secret", uris: list[str] | None = None) -> str:
    return json.dumps(
        {
            "username": username,
            "password": password,
            "uris": uris if uris is not None else ["turn:t1:3478?transport=udp", "turn:t1:3478?transport=tcp"],
        }
    )


class FakeTransport:
    """Transport stub answering from a (method, url) table and recording calls."""

    def __init__(self, responses: dict[tuple[str, str], str | Exception]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, str, str | None, float | None]] = []

    async def send(
        self,
        method: str,
        url: str,
        body: str | None = None,
        *,
        timeout: float | None = None,
    ) -> str:
        self.calls.append((method, url, body, timeout))
        outcome = self.responses[(method, url)]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingEvents:
    def __init__(self) -> None:
        self.ready: list[Any] = []
        self.errors: list[str] = []

    def on_signaling_parameters_ready(self, params: Any) -> None:
        self.ready.append(params)

    def on_signaling_parameters_error(self, description: str) -> None:
        self.errors.append(description)


@pytest.fixture
def room_body():
    return build_room_body


@pytest.fixture
def relay_body():
    return build_relay_body


@pytest.fixture
def make_transport():
    return FakeTransport


@pytest.fixture
def events() -> RecordingEvents:
    return RecordingEvents()


@pytest.fixture
def room_url() -> str:
    return ROOM_URL


@pytest.fixture
def turn_url() -> str:
    return TURN_URL

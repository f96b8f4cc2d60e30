"""Error taxonomy for room parameter resolution."""
from __future__ import annotations


class SignalingError(RuntimeError):
    """Base class for every failure surfaced by the room parameters workflow."""


class TransportError(SignalingError):
    """Network failure, timeout or non-success HTTP status."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ParseError(SignalingError):
    """Malformed JSON or a missing/ill-typed field in a server response."""


class RoomResponseError(SignalingError):
    """The room endpoint answered with a result other than ``SUCCESS``."""

    def __init__(self, result: str) -> None:
        super().__init__(result)
        self.result = result


class InvalidStateError(SignalingError):
    """A single-use fetcher was started more than once."""

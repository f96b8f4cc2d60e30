"""Room response parsing.

Turns the room endpoint's JSON envelope into a ``RoomDescriptor``. The
``params`` and ``messages`` fields arrive JSON-encoded inside strings and are
decoded in turn.
"""
from __future__ import annotations

import logging

from ..core.errors import ParseError, RoomResponseError
from ..schemas.signaling import IceCandidate, RoomDescriptor, SdpType, SessionDescription
from ..schemas.wire import (
    ROOM_RESULT_SUCCESS,
    CandidateMessage,
    OfferMessage,
    RoomMessage,
    RoomParams,
    RoomResponse,
    decode,
    decode_string_list,
)

logger = logging.getLogger(__name__)


def parse_room_response(body: str) -> RoomParams:
    """Validate the room envelope and decode its nested ``params`` document.

    A result other than ``SUCCESS`` raises ``RoomResponseError`` before
    ``params`` is looked at.
    """

    logger.debug("Room response: %s", body)
    envelope = decode(RoomResponse, body)
    if envelope.result != ROOM_RESULT_SUCCESS:
        raise RoomResponseError(envelope.result)
    if envelope.params is None:
        raise ParseError("params: Field required")
    return decode(RoomParams, envelope.params)


def describe_room(params: RoomParams) -> RoomDescriptor:
    offer_sdp: SessionDescription | None = None
    ice_candidates: list[IceCandidate] = []

    if not params.is_initiator:
        if params.messages is None:
            raise ParseError("messages: Field required for a non-initiator room")
        for index, raw in enumerate(decode_string_list(params.messages)):
            message = decode(RoomMessage, raw)
            logger.debug("Room message #%d: %s", index, raw)
            if message.type == SdpType.OFFER.value:
                if offer_sdp is not None:
                    logger.debug("Room message #%d replaces an earlier offer", index)
                offer = decode(OfferMessage, raw)
                offer_sdp = SessionDescription(type=SdpType.OFFER, sdp=offer.sdp)
            elif message.type == "candidate":
                candidate = decode(CandidateMessage, raw)
                ice_candidates.append(
                    IceCandidate(
                        sdp_mid=candidate.id,
                        sdp_mline_index=candidate.label,
                        candidate=candidate.candidate,
                    )
                )
            else:
                logger.warning("Unknown room message #%d: %s", index, raw)

    descriptor = RoomDescriptor(
        room_id=params.room_id,
        client_id=params.client_id,
        wss_url=params.wss_url,
        wss_post_url=params.wss_post_url,
        initiator=params.is_initiator,
        offer_sdp=offer_sdp,
        ice_candidates=tuple(ice_candidates),
    )
    logger.debug("RoomId: %s. ClientId: %s", descriptor.room_id, descriptor.client_id)
    logger.debug("Initiator: %s", descriptor.initiator)
    logger.debug("WSS url: %s", descriptor.wss_url)
    logger.debug("WSS POST url: %s", descriptor.wss_post_url)
    return descriptor

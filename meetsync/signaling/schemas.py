"""Tagged WebRTC signal variants.

Signals are relayed between peers without interpretation, but their shape
is checked at the boundary so malformed payloads never enter the core:

- offer / answer: a session description (``sdp`` plus optional ``sdpType``)
- ice-candidate: a candidate string or candidate init object
"""

from typing import Annotated, Any, Literal

from pydantic import ConfigDict, Field, TypeAdapter

from meetsync.models.base import WireModel


class SessionDescription(WireModel):
    """SDP body of an offer or answer."""

    model_config = ConfigDict(extra="allow")

    sdp: str = Field(min_length=1)
    sdp_type: str | None = None


class IceCandidate(WireModel):
    """ICE candidate, as produced by ``RTCPeerConnection.onicecandidate``."""

    model_config = ConfigDict(extra="allow")

    candidate: str | dict[str, Any]
    sdp_mid: str | None = None
    sdp_m_line_index: int | None = None


class SignalBase(WireModel):
    """Routing fields shared by every signal."""

    room: str = Field(min_length=1)
    from_: str = Field(alias="from", min_length=1)
    to: str | None = Field(
        default=None,
        description="Target user id; broadcast to the room when omitted",
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class OfferSignal(SignalBase):
    type: Literal["offer"]
    data: SessionDescription


class AnswerSignal(SignalBase):
    type: Literal["answer"]
    data: SessionDescription


class IceCandidateSignal(SignalBase):
    type: Literal["ice-candidate"]
    data: IceCandidate


Signal = Annotated[
    OfferSignal | AnswerSignal | IceCandidateSignal,
    Field(discriminator="type"),
]

signal_adapter: TypeAdapter[Signal] = TypeAdapter(Signal)


def parse_signal(payload: Any) -> Signal:
    """Validate an inbound signal payload into its tagged variant.

    Raises:
        pydantic.ValidationError: If routing fields are missing or the
            data does not match the signal type
    """
    return signal_adapter.validate_python(payload)

"""WebRTC signal schemas and relay."""

from meetsync.signaling.relay import SignalRelay
from meetsync.signaling.schemas import (
    AnswerSignal,
    IceCandidate,
    IceCandidateSignal,
    OfferSignal,
    SessionDescription,
    Signal,
    parse_signal,
)

__all__ = [
    "Signal",
    "OfferSignal",
    "AnswerSignal",
    "IceCandidateSignal",
    "SessionDescription",
    "IceCandidate",
    "SignalRelay",
    "parse_signal",
]

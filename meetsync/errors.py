"""Errors reported back to the originator of an inbound session event."""


class SessionError(Exception):
    """Base class for recoverable, per-event errors.

    Each subclass carries the wire ``code`` sent to the client in an
    ``error`` event. State is never mutated when one of these is raised.
    """

    code: str = "session_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(SessionError):
    """Raised when an inbound event is missing required fields."""

    code = "bad_request"


class InvalidTargetError(SessionError):
    """Raised when a targeted signal names a participant not in the room."""

    code = "invalid_target"

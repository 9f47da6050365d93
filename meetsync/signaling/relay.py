"""Routing of signals between participants of a room."""

import structlog

from meetsync.errors import InvalidTargetError
from meetsync.rooms.store import RoomStore
from meetsync.signaling.schemas import Signal

logger = structlog.get_logger()


class SignalRelay:
    """Resolves which connections a signal is delivered to.

    A signal with ``to`` goes to that participant's connection only; a
    signal without ``to`` goes to every connection in the room except the
    sender's.
    """

    def __init__(self, store: RoomStore):
        self._store = store

    def route(
        self, signal: Signal, sender_connection_id: str | None
    ) -> tuple[str, ...]:
        """Return recipient connection ids for a signal.

        Raises:
            InvalidTargetError: If ``to`` names no participant of the room
        """
        if signal.to:
            target = self._store.find_participant_by_user_id(signal.room, signal.to)
            if target is None or target.connection_id is None:
                logger.info(
                    "signal target not found",
                    room=signal.room,
                    sender=signal.from_,
                    target=signal.to,
                )
                raise InvalidTargetError(
                    f"target {signal.to} not found in room {signal.room}"
                )
            return (target.connection_id,)
        return self._store.connection_ids(signal.room, exclude=sender_connection_id)

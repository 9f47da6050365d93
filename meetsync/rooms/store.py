"""In-memory room store.

Owns every room, participant, transcript, MOM and metrics record. All
operations are synchronous and individually atomic; callers that need a
multi-step transition on one room serialize it with ``RoomLocks``.
"""

import threading
from typing import Any

import structlog

from meetsync.models import Mom, Participant, Room, RoomSummary, TranscriptEntry

logger = structlog.get_logger()

DEFAULT_TRANSCRIPT_CAP = 2000


class RoomStore:
    """Registry of live rooms.

    Rooms are created lazily on first reference and released as soon as
    they have no participants and no transcripts (checked on every
    participant removal; writers of minutes or metrics call
    ``release_if_vacant`` themselves).

    The connection index maps a transport connection id to the
    ``(room, user_id)`` pairs it currently holds. It is a lookup aid for
    disconnect cleanup only; rooms own their participants.
    """

    def __init__(self, transcript_cap: int = DEFAULT_TRANSCRIPT_CAP):
        """Initialize an empty store.

        Args:
            transcript_cap: Maximum transcript entries kept per room
        """
        if transcript_cap < 1:
            raise ValueError("transcript_cap must be at least 1")
        self._rooms: dict[str, Room] = {}
        self._connections: dict[str, set[tuple[str, str]]] = {}
        self._transcript_cap = transcript_cap
        self._lock = threading.RLock()

    @property
    def transcript_cap(self) -> int:
        return self._transcript_cap

    # Rooms

    def ensure_room(self, room: str) -> Room:
        """Return the room, inserting an empty one if absent."""
        with self._lock:
            existing = self._rooms.get(room)
            if existing is None:
                existing = Room(key=room)
                self._rooms[room] = existing
                logger.debug("room created", room=room)
            return existing

    def has_room(self, room: str) -> bool:
        with self._lock:
            return room in self._rooms

    def list_rooms(self) -> list[RoomSummary]:
        """Snapshot of every live room."""
        with self._lock:
            return [
                RoomSummary(
                    room=key,
                    participants=len(r.participants),
                    last_updated=r.last_updated,
                )
                for key, r in self._rooms.items()
            ]

    # Participants

    def add_participant(self, room: str, participant: Participant) -> Participant:
        """Insert or replace the participant with the same user id.

        A connection holds at most one participant per room: any other
        user id joined in this room over the same connection is dropped.
        """
        with self._lock:
            r = self.ensure_room(room)
            previous = r.participants.get(participant.user_id)
            if previous is not None:
                self._unindex(previous.connection_id, room, previous.user_id)

            conn_id = participant.connection_id
            if conn_id is not None:
                stale = [
                    user_id
                    for key, user_id in self._connections.get(conn_id, set())
                    if key == room and user_id != participant.user_id
                ]
                for user_id in stale:
                    r.participants.pop(user_id, None)
                    self._unindex(conn_id, room, user_id)
                    logger.info(
                        "participant replaced on shared connection",
                        room=room,
                        user_id=user_id,
                        connection_id=conn_id,
                    )
                self._connections.setdefault(conn_id, set()).add(
                    (room, participant.user_id)
                )

            r.participants[participant.user_id] = participant
            return participant

    def remove_participant(self, room: str, user_id: str) -> bool:
        """Remove a participant; no-op if room or participant is missing.

        Returns:
            True if a participant was removed
        """
        with self._lock:
            r = self._rooms.get(room)
            if r is None:
                return False
            participant = r.participants.pop(user_id, None)
            if participant is None:
                return False
            self._unindex(participant.connection_id, room, user_id)
            self.release_if_vacant(room)
            return True

    def remove_participant_by_connection_id(
        self,
        connection_id: str,
        room: str | None = None,
    ) -> list[str]:
        """Remove every participant held by a connection.

        Args:
            connection_id: Transport connection that went away
            room: Restrict the removal to this room (all rooms if None)

        Returns:
            Keys of the rooms that lost a participant, including rooms
            released as a result
        """
        with self._lock:
            held = self._connections.get(connection_id, set())
            targets = sorted(
                (key, user_id) for key, user_id in held if room is None or key == room
            )
            affected: list[str] = []
            for key, user_id in targets:
                held.discard((key, user_id))
                r = self._rooms.get(key)
                if r is None:
                    continue
                participant = r.participants.get(user_id)
                if participant is None or participant.connection_id != connection_id:
                    continue
                del r.participants[user_id]
                if key not in affected:
                    affected.append(key)
            if not held:
                self._connections.pop(connection_id, None)
            for key in affected:
                self.release_if_vacant(key)
            return affected

    def rooms_for_connection(self, connection_id: str) -> list[str]:
        """Keys of the rooms in which a connection currently holds a participant."""
        with self._lock:
            return sorted({key for key, _ in self._connections.get(connection_id, ())})

    def get_participants(self, room: str) -> list[Participant]:
        """Snapshot of a room's participants; empty if the room is absent."""
        with self._lock:
            r = self._rooms.get(room)
            return list(r.participants.values()) if r else []

    def find_participant_by_user_id(
        self, room: str, user_id: str
    ) -> Participant | None:
        with self._lock:
            r = self._rooms.get(room)
            return r.participants.get(user_id) if r else None

    def connection_ids(self, room: str, exclude: str | None = None) -> tuple[str, ...]:
        """Connection ids of a room's participants, optionally minus one."""
        with self._lock:
            r = self._rooms.get(room)
            if r is None:
                return ()
            seen: dict[str, None] = {}
            for p in r.participants.values():
                if p.connection_id is not None and p.connection_id != exclude:
                    seen[p.connection_id] = None
            return tuple(seen)

    # Transcripts

    def add_transcript(self, room: str, entry: TranscriptEntry) -> TranscriptEntry:
        """Append an entry, evicting the oldest ones beyond the cap."""
        with self._lock:
            r = self.ensure_room(room)
            r.transcripts.append(entry)
            excess = len(r.transcripts) - self._transcript_cap
            if excess > 0:
                del r.transcripts[:excess]
            return entry

    def get_transcripts(self, room: str) -> list[TranscriptEntry]:
        """Snapshot of a room's transcript, oldest first."""
        with self._lock:
            r = self._rooms.get(room)
            return list(r.transcripts) if r else []

    # Minutes

    def set_mom(self, room: str, mom: Mom) -> Mom:
        with self._lock:
            self.ensure_room(room).mom = mom
            return mom

    def get_mom(self, room: str) -> Mom | None:
        with self._lock:
            r = self._rooms.get(room)
            return r.mom if r else None

    # Metrics

    def set_participant_metrics(
        self, room: str, user_id: str, metrics: dict[str, Any]
    ) -> None:
        with self._lock:
            self.ensure_room(room).metrics[user_id] = metrics

    def get_metrics(self, room: str) -> dict[str, dict[str, Any]]:
        with self._lock:
            r = self._rooms.get(room)
            return dict(r.metrics) if r else {}

    # Lifecycle

    def release_if_vacant(self, room: str) -> bool:
        """Delete the room if it has no participants and no transcripts.

        Returns:
            True if the room was released
        """
        with self._lock:
            r = self._rooms.get(room)
            if r is None or not r.is_vacant:
                return False
            del self._rooms[room]
            logger.debug("room released", room=room)
            return True

    # Internals

    def _unindex(self, connection_id: str | None, room: str, user_id: str) -> None:
        if connection_id is None:
            return
        held = self._connections.get(connection_id)
        if held is None:
            return
        held.discard((room, user_id))
        if not held:
            del self._connections[connection_id]


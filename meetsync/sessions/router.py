"""Session event router.

The connection-lifecycle state machine: every inbound event is validated,
applied to the room store under that room's lock, and followed by the
outbound event(s) it causes. Outbound events are published before the
lock is released, so clients never see a broadcast older than the state
change that produced it.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from meetsync.errors import BadRequestError, SessionError
from meetsync.events.bus import EventBus
from meetsync.events.types import (
    ErrorNotice,
    MomUpdate,
    ParticipantsMetrics,
    ParticipantsUpdate,
    SignalDelivery,
    TranscriptBroadcast,
)
from meetsync.models import Mom, Participant, TranscriptEntry, now_ms
from meetsync.rooms.locks import RoomLocks
from meetsync.rooms.store import RoomStore
from meetsync.sessions.schemas import (
    JoinRoom,
    LeaveRoom,
    MomRequest,
    StatsUpdate,
    TranscriptSubmission,
    describe_validation_error,
)
from meetsync.signaling.relay import SignalRelay
from meetsync.signaling.schemas import Signal, parse_signal
from meetsync.summarization.service import SummarizationService

logger = structlog.get_logger()

M = TypeVar("M", bound=BaseModel)
Handler = Callable[[str | None, Any], Awaitable[Any]]


class SessionEventRouter:
    """Applies inbound session events to the room store.

    Transport adapters call ``dispatch`` with the raw event name and
    payload; HTTP routes call the typed methods directly.
    """

    def __init__(
        self,
        store: RoomStore,
        bus: EventBus,
        summarization: SummarizationService,
        locks: RoomLocks | None = None,
    ):
        """Initialize router.

        Args:
            store: Room store to mutate
            bus: Notification port for outbound events
            summarization: Guarded summarizer for minutes generation
            locks: Per-room locks (a private set if None)
        """
        self._store = store
        self._bus = bus
        self._summarization = summarization
        self._locks = locks or RoomLocks()
        self._relay = SignalRelay(store)
        self._handlers: dict[str, Handler] = {
            "join-room": self._on_join,
            "leave-room": self._on_leave,
            "signal": self._on_signal,
            "transcript": self._on_transcript,
            "request_mom": self._on_request_mom,
            "stats_update": self._on_stats_update,
        }

    @property
    def store(self) -> RoomStore:
        return self._store

    @property
    def events(self) -> tuple[str, ...]:
        """Inbound event names understood by ``dispatch``."""
        return tuple(self._handlers)

    async def dispatch(
        self, connection_id: str | None, event: str, payload: Any
    ) -> bool:
        """Handle one inbound event from a connection.

        Rejections are sent back to the originator as an ``error`` event.

        Returns:
            True if the event was applied, False if it was rejected
        """
        handler = self._handlers.get(event)
        try:
            if handler is None:
                raise BadRequestError(f"unknown event: {event}")
            await handler(connection_id, payload)
        except SessionError as e:
            await self.reject(connection_id, e)
            return False
        return True

    async def reject(self, connection_id: str | None, error: SessionError) -> None:
        """Report an error to the originating connection only."""
        logger.info(
            "event rejected",
            connection_id=connection_id,
            code=error.code,
            message=error.message,
        )
        if connection_id is None:
            return
        await self._bus.publish(
            ErrorNotice(
                code=error.code,
                message=error.message,
                recipients=(connection_id,),
            )
        )

    # Transitions

    async def join(self, connection_id: str | None, request: JoinRoom) -> Participant:
        """Upsert a participant and broadcast the new member list."""
        participant = Participant(
            user_id=request.user_id,
            display_name=request.display_name,
            connection_id=connection_id,
        )
        async with self._locks.hold(request.room):
            self._store.add_participant(request.room, participant)
            await self._publish_participants(request.room)
        logger.info(
            "participant joined",
            room=request.room,
            user_id=participant.user_id,
            connection_id=connection_id,
        )
        return participant

    async def leave(self, connection_id: str | None, request: LeaveRoom) -> bool:
        """Remove a participant; nothing happens unless room and user are given."""
        if not request.room or not request.user_id:
            return False
        async with self._locks.hold(request.room):
            removed = self._store.remove_participant(request.room, request.user_id)
            extra = (connection_id,) if connection_id else ()
            await self._publish_participants(request.room, extra_recipients=extra)
        logger.info(
            "participant left",
            room=request.room,
            user_id=request.user_id,
            removed=removed,
        )
        return removed

    async def signal(
        self, connection_id: str | None, signal: Signal
    ) -> tuple[str, ...]:
        """Relay a signal to its target, or to the room minus the sender.

        Raises:
            InvalidTargetError: If the target is not in the room
        """
        async with self._locks.hold(signal.room):
            recipients = self._relay.route(signal, connection_id)
            await self._bus.publish(
                SignalDelivery(room=signal.room, signal=signal, recipients=recipients)
            )
        logger.debug(
            "signal relayed",
            room=signal.room,
            type=signal.type,
            sender=signal.from_,
            recipients=len(recipients),
        )
        return recipients

    async def submit_transcript(
        self, submission: TranscriptSubmission
    ) -> TranscriptEntry:
        """Append a transcript entry and broadcast it to the room."""
        entry = TranscriptEntry(
            user_id=submission.user_id,
            display_name=submission.display_name,
            text=submission.text,
            ts=submission.ts,
        )
        async with self._locks.hold(submission.room):
            self._store.add_transcript(submission.room, entry)
            await self._bus.publish(
                TranscriptBroadcast(
                    room=submission.room,
                    entry=entry,
                    recipients=self._store.connection_ids(submission.room),
                )
            )
        return entry

    async def update_metrics(self, request: StatsUpdate) -> dict[str, dict[str, Any]]:
        """Replace one participant's metrics and broadcast the room's metrics."""
        async with self._locks.hold(request.room):
            self._store.set_participant_metrics(
                request.room, request.user_id, request.stats
            )
            metrics = self._store.get_metrics(request.room)
            await self._bus.publish(
                ParticipantsMetrics(
                    room=request.room,
                    metrics=metrics,
                    recipients=self._store.connection_ids(request.room),
                )
            )
            self._store.release_if_vacant(request.room)
        return metrics

    async def disconnect(self, connection_id: str) -> list[str]:
        """Drop every participant held by a connection.

        Rooms are processed one at a time, each under its own lock.

        Returns:
            Keys of the rooms that lost a participant
        """
        affected: list[str] = []
        for room in self._store.rooms_for_connection(connection_id):
            async with self._locks.hold(room):
                if self._store.remove_participant_by_connection_id(
                    connection_id, room=room
                ):
                    affected.append(room)
                    await self._publish_participants(room)
        if affected:
            logger.info(
                "connection closed",
                connection_id=connection_id,
                rooms=affected,
            )
        return affected

    async def generate_mom(self, room: str) -> Mom:
        """Summarize a room on request, store and broadcast the result.

        A room with no participants and no transcripts is not kept; the
        minutes are still returned.
        """
        transcripts, taken_at = self._snapshot(room)
        mom = await self._summarization.summarize(transcripts, room)
        async with self._locks.hold(room):
            return await self._apply_mom(room, mom, taken_at)

    async def refresh_mom(self, room: str) -> Mom | None:
        """Regenerate minutes for the periodic scan.

        The summary runs outside the room lock. If the room was released
        while it ran, the result is dropped.

        Returns:
            The stored minutes, or None if the room no longer exists
        """
        transcripts, taken_at = self._snapshot(room)
        mom = await self._summarization.summarize(transcripts, room)
        async with self._locks.hold(room):
            if not self._store.has_room(room):
                logger.info("room released during summarization", room=room)
                return None
            return await self._apply_mom(room, mom, taken_at)

    # Inbound adapters

    async def _on_join(self, connection_id: str | None, payload: Any) -> None:
        await self.join(connection_id, _parse(JoinRoom, payload, "join-room"))

    async def _on_leave(self, connection_id: str | None, payload: Any) -> None:
        await self.leave(connection_id, _parse(LeaveRoom, payload, "leave-room"))

    async def _on_signal(self, connection_id: str | None, payload: Any) -> None:
        _require_object(payload, "signal")
        try:
            signal = parse_signal(payload)
        except ValidationError as e:
            raise BadRequestError(describe_validation_error("signal", e)) from e
        await self.signal(connection_id, signal)

    async def _on_transcript(self, connection_id: str | None, payload: Any) -> None:
        await self.submit_transcript(
            _parse(TranscriptSubmission, payload, "transcript")
        )

    async def _on_request_mom(self, connection_id: str | None, payload: Any) -> None:
        await self.generate_mom(_parse(MomRequest, payload, "request_mom").room)

    async def _on_stats_update(self, connection_id: str | None, payload: Any) -> None:
        await self.update_metrics(_parse(StatsUpdate, payload, "stats_update"))

    # Helpers

    async def _publish_participants(
        self, room: str, extra_recipients: tuple[str, ...] = ()
    ) -> None:
        recipients = self._store.connection_ids(room)
        recipients += tuple(c for c in extra_recipients if c not in recipients)
        await self._bus.publish(
            ParticipantsUpdate(
                room=room,
                participants=tuple(self._store.get_participants(room)),
                recipients=recipients,
            )
        )

    def _snapshot(self, room: str) -> tuple[list[TranscriptEntry], int]:
        # Minutes carry the read time: lines appended during summarization
        # stay newer than them.
        taken_at = now_ms()
        return self._store.get_transcripts(room), taken_at

    async def _apply_mom(self, room: str, mom: Mom, taken_at: int) -> Mom:
        # Caller holds the room lock.
        generated_at = taken_at
        previous = self._store.get_mom(room)
        if previous is not None:
            generated_at = max(generated_at, previous.generated_at)
        mom = mom.model_copy(update={"generated_at": generated_at})
        self._store.set_mom(room, mom)
        await self._bus.publish(
            MomUpdate(room=room, mom=mom, recipients=self._store.connection_ids(room))
        )
        self._store.release_if_vacant(room)
        logger.info(
            "minutes stored",
            room=room,
            action_items=len(mom.action_items),
            confidence=mom.confidence,
        )
        return mom


def _require_object(payload: Any, event: str) -> None:
    if not isinstance(payload, dict):
        raise BadRequestError(f"{event}: payload must be an object")


def _parse(model: type[M], payload: Any, event: str) -> M:
    _require_object(payload, event)
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise BadRequestError(describe_validation_error(event, e)) from e

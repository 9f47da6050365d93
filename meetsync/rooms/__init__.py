"""Room state ownership and per-room serialization."""

from meetsync.rooms.locks import RoomLocks
from meetsync.rooms.store import DEFAULT_TRANSCRIPT_CAP, RoomStore

__all__ = ["RoomStore", "RoomLocks", "DEFAULT_TRANSCRIPT_CAP"]

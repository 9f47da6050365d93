"""Per-room asyncio locks for serializing room transitions."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class RoomLocks:
    """One ``asyncio.Lock`` per room key, dropped when nobody uses it.

    Holders take one room lock at a time and never nest them; cross-room
    work (disconnect cleanup) acquires and releases each room in turn.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, room: str) -> AsyncIterator[None]:
        """Acquire the lock for ``room`` for the duration of the block."""
        lock = self._locks.get(room)
        if lock is None:
            lock = self._locks[room] = asyncio.Lock()
        self._users[room] = self._users.get(room, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[room] -= 1
            if self._users[room] == 0:
                del self._users[room]
                del self._locks[room]

    def __len__(self) -> int:
        return len(self._locks)

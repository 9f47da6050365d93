"""APScheduler integration for periodic minutes generation.

Every tick scans all rooms and regenerates minutes for rooms whose newest
transcript entry is newer than their stored minutes.
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import UTC
from typing import TYPE_CHECKING

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from meetsync.models import Mom

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from meetsync.rooms.store import RoomStore
    from meetsync.sessions.router import SessionEventRouter

logger = structlog.get_logger()

MOM_SCANNER_JOB_ID = "mom_scanner"
DEFAULT_INTERVAL_SECONDS = 25.0

# Module-level scheduler instance
_scheduler: AsyncIOScheduler | None = None


class MomScanner:
    """Finds rooms with transcript activity newer than their minutes."""

    def __init__(self, store: "RoomStore", router: "SessionEventRouter"):
        self._store = store
        self._router = router

    def stale_rooms(self) -> list[str]:
        """Rooms whose newest transcript ts is strictly after the last MOM."""
        stale = []
        for summary in self._store.list_rooms():
            mom = self._store.get_mom(summary.room)
            generated_at = mom.generated_at if mom else 0
            if summary.last_updated > generated_at:
                stale.append(summary.room)
        return stale

    async def tick(self) -> list[str]:
        """Regenerate minutes for every stale room.

        Rooms are summarized concurrently; a failure in one room is logged
        and does not affect the others.

        Returns:
            Rooms whose minutes were regenerated
        """
        rooms = self.stale_rooms()
        if not rooms:
            return []

        results = await asyncio.gather(
            *(self._router.refresh_mom(room) for room in rooms),
            return_exceptions=True,
        )

        refreshed = []
        for room, result in zip(rooms, results, strict=True):
            if isinstance(result, Exception):
                logger.error("Minutes refresh failed", room=room, error=str(result))
            elif isinstance(result, Mom):
                refreshed.append(room)
        if refreshed:
            logger.info("Generated minutes", count=len(refreshed), rooms=refreshed)
        return refreshed


def get_scheduler() -> AsyncIOScheduler:
    """Get or create the scheduler instance.

    Returns:
        AsyncIOScheduler instance
    """
    global _scheduler
    if _scheduler is None:
        _scheduler = AsyncIOScheduler(timezone=UTC)
    return _scheduler


def reset_scheduler() -> None:
    """Reset the scheduler instance (for testing)."""
    global _scheduler
    if _scheduler is not None and _scheduler.running:
        _scheduler.shutdown(wait=False)
    _scheduler = None


@asynccontextmanager
async def mom_scheduler_lifespan(
    scanner: MomScanner,
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
) -> "AsyncGenerator[None, None]":
    """Lifespan context manager for the minutes scheduler.

    Starts the scheduler with a job that scans rooms every
    ``interval_seconds``. Shuts down cleanly on exit.

    Usage:
        async with mom_scheduler_lifespan(scanner):
            # Scheduler is running
            yield
        # Scheduler stopped
    """
    scheduler = get_scheduler()

    scheduler.add_job(
        run_mom_scan,
        "interval",
        seconds=interval_seconds,
        args=[scanner],
        id=MOM_SCANNER_JOB_ID,
        replace_existing=True,
        max_instances=1,  # A tick never starts while the previous one runs
        coalesce=True,
    )

    logger.info("Starting minutes scheduler", interval_seconds=interval_seconds)
    scheduler.start()

    try:
        yield
    finally:
        logger.info("Shutting down minutes scheduler")
        scheduler.shutdown(wait=False)


async def run_mom_scan(scanner: MomScanner) -> None:
    """Scheduled job: one scan over all rooms."""
    try:
        await scanner.tick()
    except Exception as e:
        logger.error("Minutes scan failed", error=str(e))

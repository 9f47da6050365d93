"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import AsyncExitStack, asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from meetsync.api.hub import ConnectionHub
from meetsync.api.router import api_router
from meetsync.config import settings
from meetsync.events.bus import EventBus
from meetsync.rooms.store import RoomStore
from meetsync.sessions.router import SessionEventRouter
from meetsync.summarization.scheduler import (
    MomScanner,
    get_scheduler,
    mom_scheduler_lifespan,
)
from meetsync.summarization.service import build_summarization_service

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_mom_scheduler_context(app: FastAPI, scanner: MomScanner):
    """Get minutes scheduler lifespan context manager.

    Returns a no-op context if the scheduler is disabled in settings.
    """
    if not settings.mom_scheduler_enabled:

        @asynccontextmanager
        async def noop_context():
            yield

        logger.info("Minutes scheduler disabled")
        app.state.mom_scheduler = None
        return noop_context()

    app.state.mom_scheduler = get_scheduler()
    return mom_scheduler_lifespan(scanner, settings.mom_interval_seconds)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan management.

    Startup:
    - Create the room store and event bus
    - Attach the WebSocket hub to the bus
    - Build the summarization service and session router
    - Start the periodic minutes scheduler

    Shutdown:
    - Stop the scheduler
    """
    logger.info(f"Starting {settings.app_name}...")

    store = RoomStore(transcript_cap=settings.transcript_cap)
    app.state.room_store = store

    event_bus = EventBus()
    app.state.event_bus = event_bus

    hub = ConnectionHub()
    hub.attach(event_bus)
    app.state.connection_hub = hub
    logger.info("Connection hub subscribed to outbound events")

    summarization = build_summarization_service(settings)
    app.state.summarization = summarization

    session_router = SessionEventRouter(store, event_bus, summarization)
    app.state.session_router = session_router
    logger.info("Session router initialized")

    scanner = MomScanner(store, session_router)
    async with AsyncExitStack() as stack:
        await stack.enter_async_context(_get_mom_scheduler_context(app, scanner))
        yield

    logger.info(f"Shutting down {settings.app_name}...")


app = FastAPI(
    title=settings.app_name,
    description="Meeting rooms with WebRTC signaling, live transcripts and minutes",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "meetsync.main:app",
        host="0.0.0.0",
        port=3000,
        reload=True,
    )

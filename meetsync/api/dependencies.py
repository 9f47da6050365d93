"""Request dependencies resolving core services from app state."""

from fastapi import Request

from meetsync.rooms.store import RoomStore
from meetsync.sessions.router import SessionEventRouter


def get_room_store(request: Request) -> RoomStore:
    """Dependency to get RoomStore from app state."""
    return request.app.state.room_store


def get_session_router(request: Request) -> SessionEventRouter:
    """Dependency to get SessionEventRouter from app state."""
    return request.app.state.session_router

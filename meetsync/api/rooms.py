"""Room listing and minutes endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from meetsync.api.dependencies import get_room_store, get_session_router
from meetsync.models import Mom, RoomSummary, WireModel
from meetsync.rooms.store import RoomStore
from meetsync.sessions.router import SessionEventRouter

router = APIRouter(prefix="/rooms", tags=["rooms"])


class RoomListResponse(WireModel):
    """All live rooms."""

    rooms: list[RoomSummary]


class MomResponse(WireModel):
    """Latest minutes of a room."""

    room: str
    last_mom: Mom


class MomRequestResponse(WireModel):
    """Result of an explicit minutes request."""

    status: str = "ok"
    message: str
    mom: Mom


@router.get("", response_model=RoomListResponse)
async def list_rooms(store: RoomStore = Depends(get_room_store)) -> RoomListResponse:
    """List live rooms with participant count and last transcript time."""
    return RoomListResponse(rooms=store.list_rooms())


@router.get(
    "/{room}/mom",
    response_model=MomResponse,
    responses={404: {"description": "No minutes generated yet"}},
)
async def get_mom(room: str, store: RoomStore = Depends(get_room_store)):
    """Return the latest minutes of a room."""
    mom = store.get_mom(room)
    if mom is None:
        return JSONResponse(
            status_code=404,
            content={
                "error": "no_mom",
                "message": f"No MOM generated yet for room {room}",
            },
        )
    return MomResponse(room=room, last_mom=mom)


@router.post("/{room}/request-mom", response_model=MomRequestResponse)
async def request_mom(
    room: str,
    session_router: SessionEventRouter = Depends(get_session_router),
) -> MomRequestResponse:
    """Generate minutes now, store them and broadcast ``mom_update``."""
    mom = await session_router.generate_mom(room)
    return MomRequestResponse(message="MOM generation triggered", mom=mom)

"""WebSocket endpoint carrying session events.

Frames are JSON objects ``{"event": <name>, "data": {...}}`` in both
directions. Inbound names: join-room, leave-room, signal, transcript,
request_mom, stats_update. Closing the socket is the disconnect event.
"""

import json

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from fastapi.websockets import WebSocketState

from meetsync.errors import BadRequestError

logger = structlog.get_logger()

router = APIRouter(tags=["sessions"])


@router.websocket("/ws")
async def session_socket(websocket: WebSocket) -> None:
    """Run one client session until the socket closes."""
    hub = websocket.app.state.connection_hub
    session_router = websocket.app.state.session_router

    connection_id = await hub.connect(websocket)
    try:
        # The hub closes the socket when a delivery to it fails.
        while websocket.application_state == WebSocketState.CONNECTED:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except ValueError:
                await session_router.reject(
                    connection_id, BadRequestError("frame is not valid JSON")
                )
                continue
            if not isinstance(message, dict) or not isinstance(
                message.get("event"), str
            ):
                await session_router.reject(
                    connection_id,
                    BadRequestError('frame must be {"event": <name>, "data": {...}}'),
                )
                continue
            await session_router.dispatch(
                connection_id, message["event"], message.get("data")
            )
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(connection_id)
        await session_router.disconnect(connection_id)

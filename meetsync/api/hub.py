"""WebSocket connection registry and outbound delivery."""

import asyncio
from dataclasses import dataclass, field
from uuid import uuid4

import structlog
from fastapi import WebSocket, status

from meetsync.events.base import Event
from meetsync.events.bus import EventBus
from meetsync.events.types import OUTBOUND_EVENTS

logger = structlog.get_logger()


@dataclass
class Connection:
    """One accepted WebSocket."""

    connection_id: str
    websocket: WebSocket
    send_lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class ConnectionHub:
    """Maps connection ids to sockets and delivers outbound events.

    Delivery failures are logged, the connection is dropped from the hub
    and its socket is closed; the receive loop then ends and runs the
    usual disconnect cleanup.
    Failed deliveries are not retried.
    """

    def __init__(self) -> None:
        self._connections: dict[str, Connection] = {}

    def attach(self, bus: EventBus) -> None:
        """Subscribe to every outbound event type."""
        bus.subscribe_many(OUTBOUND_EVENTS, self.deliver)

    async def connect(self, websocket: WebSocket) -> str:
        """Accept a socket, assign it a connection id and announce the id."""
        await websocket.accept()
        connection_id = uuid4().hex
        conn = Connection(connection_id=connection_id, websocket=websocket)
        self._connections[connection_id] = conn
        await self._send(
            conn, {"event": "connected", "data": {"connectionId": connection_id}}
        )
        logger.info("socket connected", connection_id=connection_id)
        return connection_id

    def disconnect(self, connection_id: str) -> None:
        if self._connections.pop(connection_id, None) is not None:
            logger.info("socket disconnected", connection_id=connection_id)

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._connections

    def __len__(self) -> int:
        return len(self._connections)

    async def deliver(self, event: Event) -> int:
        """Send an event to each of its recipients still connected.

        Returns:
            Number of connections that received the event
        """
        frame = event.to_wire()
        sent = 0
        for connection_id in event.recipients:
            conn = self._connections.get(connection_id)
            if conn is None:
                continue
            if await self._send(conn, frame):
                sent += 1
        return sent

    async def _send(self, conn: Connection, frame: dict) -> bool:
        try:
            async with conn.send_lock:
                await conn.websocket.send_json(frame)
            return True
        except Exception as e:
            logger.warning(
                "delivery failed",
                connection_id=conn.connection_id,
                event=frame.get("event"),
                error=str(e),
            )
            self._connections.pop(conn.connection_id, None)
            await self._close(conn)
            return False

    async def _close(self, conn: Connection) -> None:
        # Ends the socket's receive loop, which runs the disconnect cleanup.
        try:
            await conn.websocket.close(code=status.WS_1011_INTERNAL_ERROR)
        except Exception as e:
            logger.debug(
                "close after failed delivery",
                connection_id=conn.connection_id,
                error=str(e),
            )

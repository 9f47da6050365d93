"""Pytest configuration and fixtures."""

from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from meetsync.api.hub import ConnectionHub
from meetsync.api.router import api_router
from meetsync.events import OUTBOUND_EVENTS, Event, EventBus
from meetsync.rooms import RoomStore
from meetsync.sessions import SessionEventRouter
from meetsync.summarization import SummarizationService


class EventCollector:
    """Records every outbound event published on a bus."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    async def handle(self, event: Event) -> None:
        self.events.append(event)

    def of_type(self, event_type: type[Event]) -> list[Event]:
        return [e for e in self.events if isinstance(e, event_type)]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def store() -> RoomStore:
    return RoomStore()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def collector(bus: EventBus) -> EventCollector:
    """Collector subscribed to every outbound event type."""
    c = EventCollector()
    bus.subscribe_many(OUTBOUND_EVENTS, c.handle)
    return c


@pytest.fixture
def summarization() -> SummarizationService:
    """Service using the rule-based generator only."""
    return SummarizationService()


@pytest.fixture
def session_router(
    store: RoomStore,
    bus: EventBus,
    collector: EventCollector,
    summarization: SummarizationService,
) -> SessionEventRouter:
    return SessionEventRouter(store, bus, summarization)


@pytest.fixture
def app(
    store: RoomStore,
    bus: EventBus,
    session_router: SessionEventRouter,
) -> FastAPI:
    """Test application with in-memory state and no scheduler."""
    test_app = FastAPI()
    hub = ConnectionHub()
    hub.attach(bus)
    test_app.state.room_store = store
    test_app.state.event_bus = bus
    test_app.state.connection_hub = hub
    test_app.state.session_router = session_router
    test_app.include_router(api_router)
    return test_app


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Create async test client for the test application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

"""Async event bus for in-process pub/sub.

The bus is the notification port of the core: the session router and the
minutes scanner publish outbound events, the transport subscribes to them.
Producers never know how (or whether) an event reaches a client.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from meetsync.events.base import Event

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Event)
EventHandler = Callable[[Event], None] | Callable[[Event], Awaitable[None]]


class EventBus:
    """Simple async event bus for in-process pub/sub.

    Features:
    - Type-safe subscriptions
    - Async handler support, sync handlers run in a worker thread
    - Error isolation (one handler failure doesn't affect others)
    - ``publish`` returns once every handler has finished, so events
      published in sequence are delivered in sequence
    """

    def __init__(self) -> None:
        self._subscribers: dict[type[Event], list[EventHandler]] = {}

    def subscribe(
        self,
        event_type: type[T],
        handler: Callable[[T], None] | Callable[[T], Awaitable[None]],
    ) -> None:
        """Subscribe a handler to an event type.

        Args:
            event_type: The event class to subscribe to
            handler: Function to call when event is published
        """
        self._subscribers.setdefault(event_type, []).append(handler)
        logger.debug(f"Subscribed handler to {event_type.__name__}")

    def subscribe_many(
        self,
        event_types: Iterable[type[Event]],
        handler: EventHandler,
    ) -> None:
        """Subscribe one handler to several event types."""
        for event_type in event_types:
            self.subscribe(event_type, handler)

    def unsubscribe(
        self,
        event_type: type[T],
        handler: EventHandler,
    ) -> None:
        """Unsubscribe a handler from an event type.

        Args:
            event_type: The event class to unsubscribe from
            handler: The handler to remove
        """
        if event_type in self._subscribers:
            try:
                self._subscribers[event_type].remove(handler)
                logger.debug(f"Unsubscribed handler from {event_type.__name__}")
            except ValueError:
                pass  # Handler wasn't subscribed

    async def publish(self, event: Event) -> None:
        """Publish an event to all subscribers of its exact type.

        Args:
            event: The event to publish
        """
        handlers = list(self._subscribers.get(type(event), []))

        logger.debug(f"Publishing {event.event_type} to {len(handlers)} handler(s)")

        tasks = []
        for handler in handlers:
            if inspect.iscoroutinefunction(handler):
                tasks.append(self._run_async_handler(handler, event))
            else:
                tasks.append(self._run_sync_handler(handler, event))

        if tasks:
            results = await asyncio.gather(*tasks, return_exceptions=True)
            # Log any handler errors but don't re-raise
            for result in results:
                if isinstance(result, Exception):
                    logger.error(f"Handler error for {event.event_type}: {result}")

    async def _run_async_handler(
        self,
        handler: Callable[[Event], Awaitable[None]],
        event: Event,
    ) -> None:
        """Run an async handler safely."""
        try:
            await handler(event)
        except Exception as e:
            logger.error(f"Async handler error: {e}")
            raise

    async def _run_sync_handler(
        self,
        handler: Callable[[Event], None],
        event: Event,
    ) -> None:
        """Run a sync handler in thread pool."""
        try:
            await asyncio.to_thread(handler, event)
        except Exception as e:
            logger.error(f"Sync handler error: {e}")
            raise

    def subscriber_count(self, event_type: type[Event]) -> int:
        """Get number of subscribers for an event type."""
        return len(self._subscribers.get(event_type, []))

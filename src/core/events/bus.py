"""
EventBus - Application-wide Pub/Sub

Named events with sync or async handlers. Handlers run on the event loop
that publishes; producers running on other threads use publish_threadsafe().
"""
import asyncio
import inspect
from typing import Any, Callable, Dict, List, Optional
from loguru import logger

from src.core.base_system import BaseSystem


class EventBus(BaseSystem):
    """
    Event bus for application-wide pub/sub.

    Usage:
        # Subscribe
        event_bus.subscribe(Events.FOLDERS_CHANGED, refresh_folders)

        # Publish
        await event_bus.publish(Events.FOLDERS_CHANGED)
    """

    def __init__(self, locator, config):
        super().__init__(locator, config)
        self._subscribers: Dict[str, List[Callable]] = {}
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    async def initialize(self):
        """Bind to the running loop so other threads can publish onto it."""
        self._loop = asyncio.get_running_loop()
        logger.info("EventBus initialized")
        await super().initialize()

    async def shutdown(self):
        self._subscribers.clear()
        self._loop = None
        await super().shutdown()

    def subscribe(self, event: str, handler: Callable) -> None:
        """
        Subscribe to an event.

        Args:
            event: Event name (e.g., "folders.changed")
            handler: Callback function (sync or async) taking one data argument
        """
        handlers = self._subscribers.setdefault(event, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug(f"Subscribed to {event}: {getattr(handler, '__name__', handler)}")

    def unsubscribe(self, event: str, handler: Callable) -> None:
        if event in self._subscribers and handler in self._subscribers[event]:
            self._subscribers[event].remove(handler)
            logger.debug(f"Unsubscribed from {event}: {getattr(handler, '__name__', handler)}")

    async def publish(self, event: str, data: Any = None) -> None:
        """
        Publish an event to all subscribers, awaiting async handlers.

        Handler exceptions are logged and do not stop delivery.
        """
        for handler in list(self._subscribers.get(event, [])):
            try:
                if inspect.iscoroutinefunction(handler):
                    await handler(data)
                else:
                    handler(data)
            except Exception as e:
                logger.error(f"Error in handler for {event}: {e}")

    def publish_sync(self, event: str, data: Any = None) -> None:
        """
        Publish from synchronous code running on the loop thread.

        Async handlers are scheduled as tasks rather than awaited.
        """
        for handler in list(self._subscribers.get(event, [])):
            try:
                if inspect.iscoroutinefunction(handler):
                    asyncio.get_running_loop().create_task(handler(data))
                else:
                    handler(data)
            except Exception as e:
                logger.error(f"Error in sync handler for {event}: {e}")

    def publish_threadsafe(self, event: str, data: Any = None) -> None:
        """Publish from any thread; delivery happens on the bus's loop."""
        if self._loop is None or self._loop.is_closed():
            logger.warning(f"EventBus not running, dropped {event}")
            return
        self._loop.call_soon_threadsafe(self.publish_sync, event, data)

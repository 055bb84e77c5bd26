from abc import ABC, abstractmethod
import inspect
from typing import TYPE_CHECKING, List, Type
from loguru import logger

if TYPE_CHECKING:
    from .locator import ServiceLocator
    from .config import ConfigManager

class BaseSystem(ABC):
    """
    Abstract Base Class for all core systems (EventBus, FoldersService, ...).
    Ensures consistent initialization and access to globals (Locator, Config).

    Supports automatic event subscription via @subscribe_event decorator:
        from src.core.decorators import subscribe_event

        class MyService(BaseSystem):
            @subscribe_event("folders.changed")
            async def on_folders_changed(self, data):
                pass
    """
    # Systems that must be started before this one (see ServiceLocator.start_all)
    depends_on: List[Type["BaseSystem"]] = []

    def __init__(self, locator: 'ServiceLocator', config: 'ConfigManager'):
        self.locator = locator
        self.config = config
        self._is_ready = False

    @abstractmethod
    async def initialize(self):
        """
        Async initialization logic (opening stores, starting timers).
        Called by the ServiceLocator during startup.

        Automatically subscribes methods decorated with @subscribe_event.
        """
        self._auto_subscribe_events()
        self._is_ready = True

    def _auto_subscribe_events(self) -> None:
        """Subscribe methods carrying a _subscribed_events attribute to the EventBus."""
        from .events import EventBus

        try:
            bus = self.locator.get_system(EventBus)
        except (KeyError, AttributeError):
            logger.debug(f"{self.__class__.__name__}: EventBus not available for auto-subscription")
            return

        for name, method in inspect.getmembers(self, predicate=inspect.ismethod):
            events = getattr(method, '_subscribed_events', None)
            if not events:
                continue
            for event in events:
                bus.subscribe(event, method)
                logger.debug(f"{self.__class__.__name__}.{name} auto-subscribed to: {event}")

    @abstractmethod
    async def shutdown(self):
        """
        Cleanup logic (flushing pending writes, cancelling timers).
        """
        self._is_ready = False

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    async def __aenter__(self):
        """Async context manager entry: Initialize system."""
        if not self._is_ready:
            await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit: Shutdown system."""
        if self._is_ready:
            await self.shutdown()

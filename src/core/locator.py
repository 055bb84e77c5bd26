from typing import Dict, List, Optional, Type, TypeVar
from loguru import logger

from .config import ConfigManager
from .base_system import BaseSystem

T = TypeVar("T", bound=BaseSystem)


class ServiceLocator:
    """
    Process-wide registry of systems.

    Systems are constructed with (locator, config), started in dependency
    order by start_all() and stopped in reverse order by stop_all().
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ServiceLocator, cls).__new__(cls)
            cls._instance.is_ready = False
            cls._instance._systems = {}
            cls._instance._started = []
            cls._instance.config = None
        return cls._instance

    def init(self, config_path: str = "config.json", config: Optional[ConfigManager] = None):
        if self.is_ready:
            return
        self.config = config or ConfigManager(config_path)
        self.is_ready = True

    def register_system(self, system_cls: Type[T], instance: Optional[T] = None) -> T:
        """Register a system class; an already built instance may be supplied."""
        if system_cls in self._systems:
            return self._systems[system_cls]
        if instance is None:
            instance = system_cls(self, self.config)
        self._systems[system_cls] = instance
        logger.debug(f"Registered system: {system_cls.__name__}")
        return instance

    def get_system(self, system_cls: Type[T]) -> T:
        """Return the registered instance; raises KeyError when absent."""
        try:
            return self._systems[system_cls]
        except KeyError:
            raise KeyError(f"System not registered: {system_cls.__name__}") from None

    def _start_order(self) -> List[Type[BaseSystem]]:
        ordered: List[Type[BaseSystem]] = []
        visiting = set()

        def visit(cls):
            if cls in ordered:
                return
            if cls in visiting:
                raise RuntimeError(f"Circular system dependency at {cls.__name__}")
            visiting.add(cls)
            for dep in getattr(cls, "depends_on", []):
                if dep in self._systems:
                    visit(dep)
            visiting.discard(cls)
            ordered.append(cls)

        for cls in self._systems:
            visit(cls)
        return ordered

    async def start_all(self):
        for cls in self._start_order():
            system = self._systems[cls]
            if system.is_ready:
                continue
            logger.info(f"Starting {cls.__name__}")
            await system.initialize()
            self._started.append(system)

    async def stop_all(self):
        while self._started:
            system = self._started.pop()
            try:
                await system.shutdown()
            except Exception as e:
                logger.error(f"Failed to stop {system.__class__.__name__}: {e}")

    def reset(self):
        """Forget all systems and config (tests and restarts)."""
        self._systems = {}
        self._started = []
        self.config = None
        self.is_ready = False

# Global access
sl = ServiceLocator()

"""
Bootstrap helpers.

Simplifies application setup and initialization.
"""
import asyncio
from typing import Awaitable, Callable, List, Optional, Type

from loguru import logger

from .locator import ServiceLocator, sl
from .base_system import BaseSystem
from .events import EventBus


class ApplicationBuilder:
    """
    Fluent builder for applications built on the service locator.

    Example:
        locator = await (ApplicationBuilder("Folders", "config.json")
                         .with_logging()
                         .add_system(FoldersService)
                         .build())
    """

    def __init__(self, name: str = "Watch Folders", config_path: str = "config.json",
                 locator: Optional[ServiceLocator] = None):
        self.name = name
        self.config_path = config_path
        self.locator = locator or sl
        self._systems: List[Type[BaseSystem]] = []
        self._instances: dict = {}
        self._logging_configured = False

    def add_system(self, system_cls: Type[BaseSystem], instance: Optional[BaseSystem] = None):
        """Register a system class, optionally with a pre-built instance."""
        self._systems.append(system_cls)
        if instance is not None:
            self._instances[system_cls] = instance
        return self

    def with_logging(self, enable: bool = True):
        self._logging_configured = enable
        return self

    async def build(self) -> ServiceLocator:
        """Initialize and start all systems."""
        self.locator.init(self.config_path)

        if self._logging_configured:
            from .logging import setup_logging
            general = self.locator.config.data.general
            setup_logging(general.debug_mode, general.log_dir)
            logger.info(f"Starting {self.name}")

        self.locator.register_system(EventBus)

        for sys_cls in self._systems:
            self.locator.register_system(sys_cls, self._instances.get(sys_cls))

        await self.locator.start_all()
        return self.locator


def run_app(main: Callable[[ServiceLocator], Awaitable[int]], builder: ApplicationBuilder) -> int:
    """
    Build the application, run main(locator) and stop all systems afterwards.

    Returns main's exit code.
    """
    async def async_main() -> int:
        locator = await builder.build()
        try:
            return await main(locator)
        finally:
            await locator.stop_all()

    try:
        return asyncio.run(async_main())
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        return 130

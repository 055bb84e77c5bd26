"""
Watch Folders - watched folder management for media library applications.

Async services on a small service-locator core.
"""

# Core systems
from src.core.base_system import BaseSystem
from src.core.locator import ServiceLocator, sl
from src.core.config import ConfigManager, AppConfig
from src.core.events import Signal, EventBus, Events
from src.core.logging import setup_logging
from src.core.bootstrap import ApplicationBuilder, run_app

# Folders
from src.watchfolders.service import FoldersService

__version__ = "0.1.0"

__all__ = [
    "BaseSystem",
    "ServiceLocator",
    "sl",
    "ConfigManager",
    "AppConfig",
    "Signal",
    "EventBus",
    "Events",
    "setup_logging",
    "ApplicationBuilder",
    "run_app",
    "FoldersService",
]

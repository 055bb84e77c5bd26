"""
Core - Application Infrastructure.

Provides core systems shared by services:
- ServiceLocator: System registry and startup ordering
- BaseSystem: Abstract base for all systems
- ConfigManager: Configuration with persistence
- Signal / EventBus: Observer and pub/sub messaging

Usage:
    from src.core import sl

    sl.init("config.json")
    sl.register_system(MyService)
    await sl.start_all()
"""
from .base_system import BaseSystem
from .locator import ServiceLocator, sl
from .config import (
    ConfigManager,
    AppConfig,
    GeneralSettings,
    FolderSettings,
    SelectionSettings,
)
from .events import Signal, EventBus, Events
from .decorators import system, subscribe_event

__all__ = [
    "BaseSystem",
    "ServiceLocator",
    "sl",
    "ConfigManager",
    "AppConfig",
    "GeneralSettings",
    "FolderSettings",
    "SelectionSettings",
    "Signal",
    "EventBus",
    "Events",
    "system",
    "subscribe_event",
]

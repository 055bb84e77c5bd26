"""
Event System - Unified Pub/Sub Messaging.

Provides:
- Signal: Simple observer pattern for sync notifications (e.g., config changes)
- EventBus: Pub/sub for application-wide events
- Events: Standard event type constants

Usage:
    from src.core.events import EventBus, Events

    event_bus.subscribe(Events.FOLDERS_CHANGED, on_folders_changed)
    await event_bus.publish(Events.FOLDERS_CHANGED)
"""
from .observer import Signal
from .bus import EventBus
from .constants import Events


__all__ = ["Signal", "EventBus", "Events"]

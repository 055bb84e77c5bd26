"""
Event Type Constants.

Standard event types for application-wide pub/sub messaging.
Use these constants with EventBus for type-safe event handling.

Usage:
    from src.core.events import Events, EventBus

    event_bus.subscribe(Events.FOLDERS_CHANGED, on_folders_changed)
    await event_bus.publish(Events.FOLDERS_CHANGED)
"""


class Events:
    """
    Standard event type constants for EventBus.

    Organized by domain (folders, playback).
    """

    # Folder catalog events
    FOLDERS_CHANGED = "folders.changed"
    FOLDER_SELECTED = "folders.selected"

    # Playback events
    PLAYBACK_CHANGED = "playback.changed"

"""
Decorator Utilities.

Provides syntactic sugar for declaring systems and event subscribers.
"""
from typing import Type, TypeVar, Optional, List

T = TypeVar('T')


def system(depends_on: Optional[List[Type]] = None, name: Optional[str] = None):
    """
    Decorator to declare system dependencies.

    Usage:
        @system(depends_on=[EventBus])
        class FoldersService(BaseSystem):
            pass
    """
    def decorator(cls: Type[T]) -> Type[T]:
        cls.depends_on = list(depends_on or [])
        cls._system_name = name or cls.__name__
        return cls
    return decorator


def subscribe_event(*event_types: str):
    """
    Mark a BaseSystem method as an EventBus subscriber.

    The subscription is made by BaseSystem.initialize().

    Usage:
        @subscribe_event(Events.PLAYBACK_CHANGED)
        async def on_playback_changed(self, data):
            pass
    """
    def decorator(func):
        func._subscribed_events = list(event_types)
        return func
    return decorator

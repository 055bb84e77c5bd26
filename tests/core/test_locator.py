"""
ServiceLocator Tests
"""
import pytest

from src.core.base_system import BaseSystem
from src.core.decorators import subscribe_event, system
from src.core.events import EventBus


events = []


class StorageSystem(BaseSystem):
    async def initialize(self):
        events.append("storage.start")
        await super().initialize()

    async def shutdown(self):
        events.append("storage.stop")
        await super().shutdown()


@system(depends_on=[StorageSystem, EventBus])
class CatalogSystem(BaseSystem):
    async def initialize(self):
        events.append("catalog.start")
        await super().initialize()

    async def shutdown(self):
        events.append("catalog.stop")
        await super().shutdown()

    @subscribe_event("catalog.refresh")
    async def on_refresh(self, data):
        events.append(f"refresh:{data}")


@pytest.fixture(autouse=True)
def clear_events():
    events.clear()


def test_get_unregistered_system_raises(locator):
    with pytest.raises(KeyError):
        locator.get_system(StorageSystem)


def test_register_returns_same_instance(locator):
    first = locator.register_system(StorageSystem)
    assert locator.register_system(StorageSystem) is first
    assert locator.get_system(StorageSystem) is first
    assert first.config is locator.config


@pytest.mark.asyncio
async def test_start_in_dependency_order_and_stop_in_reverse(locator):
    locator.register_system(CatalogSystem)
    locator.register_system(EventBus)
    locator.register_system(StorageSystem)

    await locator.start_all()
    assert events == ["storage.start", "catalog.start"]
    assert locator.get_system(EventBus).is_ready

    await locator.stop_all()
    assert events[-2:] == ["catalog.stop", "storage.stop"]
    assert not locator.get_system(CatalogSystem).is_ready


@pytest.mark.asyncio
async def test_decorated_handlers_are_subscribed(locator):
    locator.register_system(EventBus)
    locator.register_system(CatalogSystem)
    locator.register_system(StorageSystem)
    await locator.start_all()

    await locator.get_system(EventBus).publish("catalog.refresh", "now")

    assert "refresh:now" in events
    await locator.stop_all()


@pytest.mark.asyncio
async def test_system_as_async_context_manager(locator):
    async with StorageSystem(locator, locator.config) as storage:
        assert storage.is_ready
    assert events == ["storage.start", "storage.stop"]

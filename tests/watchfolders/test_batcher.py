"""
FolderMutationBatcher Tests

Covers debouncing, coalescing per folder, batch failures and shutdown.
"""
import pytest
import asyncio
from unittest.mock import AsyncMock, MagicMock

from src.watchfolders.batcher import FolderMutationBatcher
from src.watchfolders.errors import FolderStoreError
from src.watchfolders.models import Folder, FolderView


def make_view(folder_id: int, show: bool = True) -> FolderView:
    return FolderView(Folder(folder_id=folder_id, path=f"/music/{folder_id}", show_in_collection=show))


def saved_flags(repository) -> list:
    batch = repository.update_folders.await_args.args[0]
    return sorted((f.folder_id, f.show_in_collection) for f in batch)


@pytest.fixture
def repository():
    repo = MagicMock()
    repo.update_folders = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def on_flushed():
    return MagicMock()


class TestDebounce:

    @pytest.mark.asyncio
    async def test_same_folder_marked_twice_saves_latest_once(self, repository, on_flushed):
        batcher = FolderMutationBatcher(repository, delay=0.05, on_flushed=on_flushed)
        view = make_view(1)

        await batcher.mark(view, False)
        await batcher.mark(view, True)
        assert batcher.pending_count == 1

        await asyncio.sleep(0.3)

        repository.update_folders.assert_awaited_once()
        assert saved_flags(repository) == [(1, True)]
        on_flushed.assert_called_once_with()
        assert batcher.pending_count == 0

    @pytest.mark.asyncio
    async def test_two_folders_flush_in_one_batch(self, repository, on_flushed):
        batcher = FolderMutationBatcher(repository, delay=0.05, on_flushed=on_flushed)

        await batcher.mark(make_view(1), False)
        await batcher.mark(make_view(2), False)
        await asyncio.sleep(0.3)

        repository.update_folders.assert_awaited_once()
        assert saved_flags(repository) == [(1, False), (2, False)]
        on_flushed.assert_called_once()

    @pytest.mark.asyncio
    async def test_new_mark_restarts_quiet_period(self, repository):
        batcher = FolderMutationBatcher(repository, delay=0.3)

        await batcher.mark(make_view(1), False)
        await asyncio.sleep(0.15)
        await batcher.mark(make_view(2), False)
        await asyncio.sleep(0.2)

        # 0.35s after the first mark but only 0.2s after the second
        repository.update_folders.assert_not_awaited()
        assert batcher.is_armed

        await asyncio.sleep(0.4)
        repository.update_folders.assert_awaited_once()
        assert saved_flags(repository) == [(1, False), (2, False)]
        assert not batcher.is_armed

    @pytest.mark.asyncio
    async def test_mark_without_flag_records_current_view_state(self, repository):
        batcher = FolderMutationBatcher(repository, delay=10)
        view = make_view(3, show=False)

        await batcher.mark(view)
        await batcher.flush()

        assert saved_flags(repository) == [(3, False)]

    @pytest.mark.asyncio
    async def test_captured_batch_is_a_snapshot(self, repository):
        batcher = FolderMutationBatcher(repository, delay=10)
        view = make_view(1)

        await batcher.mark(view, False)
        view.show_in_collection = True  # edited without marking
        await batcher.flush()

        assert saved_flags(repository) == [(1, False)]

    @pytest.mark.asyncio
    async def test_concurrent_marks_all_land_in_one_batch(self, repository):
        batcher = FolderMutationBatcher(repository, delay=0.05)
        views = [make_view(i) for i in range(1, 21)]

        await asyncio.gather(*(batcher.mark(v, i % 2 == 0) for i, v in enumerate(views)))
        assert batcher.pending_count == 20

        await asyncio.sleep(0.3)
        repository.update_folders.assert_awaited_once()
        assert len(repository.update_folders.await_args.args[0]) == 20


class TestFlush:

    @pytest.mark.asyncio
    async def test_empty_flush_does_nothing(self, repository, on_flushed):
        batcher = FolderMutationBatcher(repository, delay=0.05, on_flushed=on_flushed)

        assert await batcher.flush() is False

        repository.update_folders.assert_not_awaited()
        on_flushed.assert_not_called()

    @pytest.mark.asyncio
    async def test_persistence_failure_is_logged_and_batch_dropped(self, repository, on_flushed, caplog):
        repository.update_folders.side_effect = FolderStoreError("disk full")
        batcher = FolderMutationBatcher(repository, delay=10, on_flushed=on_flushed)

        await batcher.mark(make_view(1), False)
        assert await batcher.flush() is True

        assert "Error updating folders" in caplog.text
        assert batcher.pending_count == 0
        on_flushed.assert_called_once()

        # Not retried
        assert await batcher.flush() is False
        assert repository.update_folders.await_count == 1

    @pytest.mark.asyncio
    async def test_mark_during_save_goes_to_next_batch(self, repository):
        started = asyncio.Event()
        release = asyncio.Event()

        async def slow_update(folders):
            started.set()
            await release.wait()

        repository.update_folders.side_effect = slow_update
        batcher = FolderMutationBatcher(repository, delay=10)

        await batcher.mark(make_view(1), False)
        flush_task = asyncio.create_task(batcher.flush())
        await started.wait()

        await batcher.mark(make_view(2), False)
        assert batcher.pending_count == 1

        release.set()
        await flush_task
        await batcher.flush()

        first, second = [c.args[0] for c in repository.update_folders.await_args_list]
        assert [f.folder_id for f in first] == [1]
        assert [f.folder_id for f in second] == [2]
        await batcher.shutdown(flush=False)

    @pytest.mark.asyncio
    async def test_slow_save_is_not_overtaken_by_next_batch(self, repository):
        stored = {}
        calls = []

        async def slow_first_update(folders):
            calls.append(folders)
            if len(calls) == 1:
                await asyncio.sleep(0.3)
            for f in folders:
                stored[f.folder_id] = f.show_in_collection

        repository.update_folders.side_effect = slow_first_update
        batcher = FolderMutationBatcher(repository, delay=0.05)
        view = make_view(1)

        await batcher.mark(view, False)
        await asyncio.sleep(0.1)
        # First save is still running when the second quiet period ends
        await batcher.mark(view, True)
        await asyncio.sleep(0.6)

        assert len(calls) == 2
        assert stored == {1: True}
        await batcher.shutdown()

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_break_flush(self, repository, caplog):
        batcher = FolderMutationBatcher(repository, delay=10, on_flushed=MagicMock(side_effect=RuntimeError("boom")))

        await batcher.mark(make_view(1), False)

        assert await batcher.flush() is True
        assert "boom" in caplog.text


class TestShutdown:

    @pytest.mark.asyncio
    async def test_shutdown_saves_pending_edits(self, repository):
        batcher = FolderMutationBatcher(repository, delay=10)

        await batcher.mark(make_view(1), False)
        await batcher.shutdown()

        repository.update_folders.assert_awaited_once()
        assert not batcher.is_armed

    @pytest.mark.asyncio
    async def test_shutdown_without_flush_discards(self, repository):
        batcher = FolderMutationBatcher(repository, delay=10)

        await batcher.mark(make_view(1), False)
        await batcher.shutdown(flush=False)

        repository.update_folders.assert_not_awaited()
        assert batcher.pending_count == 0

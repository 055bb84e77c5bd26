"""
Watch Folders - Folder Mutation Batcher

Collects show-in-collection edits and saves them in one repository call
once no new edit has arrived for a quiet period.
"""
import asyncio
from typing import Callable, Dict, Optional, Set

from loguru import logger

from src.watchfolders.models import Folder, FolderView
from src.watchfolders.protocols import FolderRepository

DEFAULT_SAVE_DELAY = 2.0


class FolderMutationBatcher:
    """
    Debounced writer for folder inclusion flags.

    Every mark() restarts a single timer; when it expires the pending edits
    are captured, cleared and persisted together. Holds at most one pending
    edit per folder id, the latest one.

    The batcher is bound to the event loop it is used from. on_flushed is
    called on that loop after each non-empty flush; listeners that update UI
    state marshal the call to their own thread.
    """

    def __init__(
        self,
        repository: FolderRepository,
        delay: float = DEFAULT_SAVE_DELAY,
        on_flushed: Optional[Callable[[], None]] = None,
    ):
        self.repository = repository
        self.delay = delay
        self.on_flushed = on_flushed
        self._pending: Dict[int, Folder] = {}
        self._lock = asyncio.Lock()
        # Held across update_folders; mark() only takes _lock
        self._flush_lock = asyncio.Lock()
        self._timer: Optional[asyncio.TimerHandle] = None
        self._flush_tasks: Set[asyncio.Task] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def is_armed(self) -> bool:
        return self._timer is not None and not self._timer.cancelled()

    async def mark(self, folder: FolderView, show_in_collection: Optional[bool] = None) -> None:
        """
        Record the desired flag for folder and restart the quiet period.

        Without show_in_collection the view's current flag is recorded.
        """
        if show_in_collection is not None:
            folder.show_in_collection = show_in_collection

        async with self._lock:
            # Snapshot, so later edits to the view don't leak into a captured batch
            self._pending[folder.folder_id] = folder.folder.model_copy()

        self._restart_timer()

    async def flush(self) -> bool:
        """
        Persist all pending edits in one call.

        Returns True if there was anything to save. Persistence errors are
        logged and the batch is dropped. Flushes run one at a time, so a
        newer batch is never overwritten by an older one still in flight.
        """
        async with self._flush_lock:
            async with self._lock:
                batch = list(self._pending.values())
                self._pending.clear()

            if not batch:
                return False

            try:
                await self.repository.update_folders(batch)
                logger.debug(f"Saved {len(batch)} marked folder(s)")
            except Exception as e:
                logger.error(f"Error updating folders. Exception: {e}")

        if self.on_flushed is not None:
            try:
                self.on_flushed()
            except Exception as e:
                logger.error(f"Error notifying folder changes. Exception: {e}")
        return True

    async def shutdown(self, flush: bool = True) -> None:
        """Stop the timer, optionally save outstanding edits, wait for running flushes."""
        self._cancel_timer()
        if self._flush_tasks:
            await asyncio.gather(*list(self._flush_tasks), return_exceptions=True)
        if flush:
            await self.flush()
        else:
            async with self._lock:
                dropped = len(self._pending)
                self._pending.clear()
            if dropped:
                logger.warning(f"Discarded {dropped} unsaved folder edit(s)")

    # ==================== Timer ====================

    def _restart_timer(self):
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.delay, self._on_quiet_period_elapsed)

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_quiet_period_elapsed(self):
        self._timer = None
        task = asyncio.get_running_loop().create_task(self.flush())
        self._flush_tasks.add(task)
        task.add_done_callback(self._flush_tasks.discard)

"""
Watch Folders - JSON Folder Repository

Durable folder store kept in a single JSON document, validated with
Pydantic on load.
"""
import asyncio
import json
import os
from typing import List

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from src.watchfolders.errors import FolderStoreError
from src.watchfolders.models import AddFolderResult, Folder, RemoveFolderResult
from src.watchfolders.paths import canonical_path


class FolderDocument(BaseModel):
    next_id: int = 1
    folders: List[Folder] = Field(default_factory=list)


class JsonFolderRepository:
    """
    Folder store persisted to a JSON file.

    All operations are serialized by one lock; file IO runs in a worker
    thread so the event loop stays responsive.

    Usage:
        repo = JsonFolderRepository("./data/folders.json")
        result = await repo.add_folder("/music")
    """

    def __init__(self, filepath: str):
        self.filepath = filepath
        self._lock = asyncio.Lock()

    # ==================== Queries ====================

    async def get_folders(self) -> List[Folder]:
        async with self._lock:
            document = await asyncio.to_thread(self._read)
        return [folder.model_copy() for folder in document.folders]

    # ==================== Mutations ====================

    async def add_folder(self, path: str) -> AddFolderResult:
        if not path or not await asyncio.to_thread(os.path.isdir, path):
            logger.warning(f"Cannot add folder, not an accessible directory: '{path}'")
            return AddFolderResult.INVALID_PATH

        safe_path = canonical_path(path)
        async with self._lock:
            document = await asyncio.to_thread(self._read)
            if any(canonical_path(f.path) == safe_path for f in document.folders):
                logger.info(f"Folder already watched: {path}")
                return AddFolderResult.ALREADY_EXISTS

            folder = Folder(folder_id=document.next_id, path=os.path.abspath(path))
            document.folders.append(folder)
            document.next_id += 1
            try:
                await asyncio.to_thread(self._write, document)
            except OSError as e:
                logger.error(f"Could not add folder with path='{path}'. Exception: {e}")
                return AddFolderResult.ERROR

        logger.info(f"Folder added: {folder.path} (id={folder.folder_id})")
        return AddFolderResult.SUCCESS

    async def remove_folder(self, folder_id: int) -> RemoveFolderResult:
        async with self._lock:
            document = await asyncio.to_thread(self._read)
            remaining = [f for f in document.folders if f.folder_id != folder_id]
            if len(remaining) == len(document.folders):
                return RemoveFolderResult.NOT_FOUND

            document.folders = remaining
            try:
                await asyncio.to_thread(self._write, document)
            except OSError as e:
                logger.error(f"Could not remove folder with id={folder_id}. Exception: {e}")
                return RemoveFolderResult.ERROR

        logger.info(f"Folder removed: id={folder_id}")
        return RemoveFolderResult.SUCCESS

    async def update_folders(self, folders: List[Folder]) -> None:
        """Write show_in_collection of the given folders in one save."""
        updates = {f.folder_id: f.show_in_collection for f in folders}
        async with self._lock:
            document = await asyncio.to_thread(self._read)
            for stored in document.folders:
                if stored.folder_id in updates:
                    stored.show_in_collection = updates.pop(stored.folder_id)
            for missing_id in updates:
                logger.warning(f"Skipping update of unknown folder id={missing_id}")
            try:
                await asyncio.to_thread(self._write, document)
            except OSError as e:
                raise FolderStoreError(f"Failed to save folders to {self.filepath}: {e}") from e

    # ==================== Storage ====================

    def _read(self) -> FolderDocument:
        if not os.path.isfile(self.filepath):
            return FolderDocument()
        try:
            with open(self.filepath, "r", encoding="utf-8") as f:
                return FolderDocument.model_validate(json.load(f))
        except (OSError, ValueError, ValidationError) as e:
            logger.error(f"Failed to load folders from {self.filepath}: {e}")
            return FolderDocument()

    def _write(self, document: FolderDocument):
        dirname = os.path.dirname(self.filepath)
        if dirname:
            os.makedirs(dirname, exist_ok=True)
        tmp_path = self.filepath + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(document.model_dump(), f, indent=4)
        os.replace(tmp_path, self.filepath)

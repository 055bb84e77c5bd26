import os
import pytest
from dataclasses import dataclass
from typing import Dict, List, Optional
from loguru import logger

from src.core.config import ConfigManager
from src.core.locator import sl
from src.watchfolders.models import Folder, FolderView
from src.watchfolders.paths import canonical_path, parent_path


@pytest.fixture
def caplog(caplog):
    """Route loguru records into pytest's caplog."""
    handler_id = logger.add(caplog.handler, format="{message}", level=0)
    yield caplog
    logger.remove(handler_id)


class FakeFileSystem:
    """
    In-memory directory tree.

    tree maps a directory path to its child directory paths. Listing a
    directory that is not in the tree raises FileNotFoundError.
    """
    def __init__(self, tree: Dict[str, List[str]]):
        self.tree = {canonical_path(k): list(v) for k, v in tree.items()}
        self.listed: List[str] = []

    def list_subdirectories(self, path: str) -> List[str]:
        self.listed.append(path)
        key = canonical_path(path)
        if key not in self.tree:
            raise FileNotFoundError(path)
        return list(self.tree[key])

    def parent_of(self, path: str) -> Optional[str]:
        return parent_path(path)


@dataclass
class FakePlayback:
    current_track_path: Optional[str] = None
    is_playing: bool = False
    is_paused: bool = False
    is_stopped: bool = True

    @property
    def has_current_track(self) -> bool:
        return self.current_track_path is not None

    def play(self, path: str):
        self.current_track_path = path
        self.is_playing, self.is_paused, self.is_stopped = True, False, False

    def pause(self):
        self.is_playing, self.is_paused, self.is_stopped = False, True, False

    def stop(self):
        self.is_playing, self.is_paused, self.is_stopped = False, False, True


MUSIC_TREE = {
    "/music": ["/music/Albums", "/music/Singles"],
    "/music/Albums": ["/music/Albums/Blue", "/music/Albums/Red"],
    "/music/Albums/Blue": [],
    "/music/Albums/Red": [],
    "/music/Singles": [],
}


@pytest.fixture
def fake_fs():
    return FakeFileSystem(MUSIC_TREE)


@pytest.fixture
def music_root():
    return FolderView(Folder(folder_id=1, path="/music"))


@pytest.fixture
def playback():
    return FakePlayback()


@pytest.fixture
def config(tmp_path):
    return ConfigManager(os.path.join(str(tmp_path), "config.json"))


@pytest.fixture
def locator(config):
    """Fresh global ServiceLocator bound to a temporary config."""
    sl.reset()
    sl.init(config=config)
    yield sl
    sl.reset()

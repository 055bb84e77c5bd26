"""
Watch Folders - Models

Folder is the persisted record; the other types are transient projections
built per request.
"""
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel

from src.watchfolders.paths import canonical_path, display_name


class AddFolderResult(str, Enum):
    SUCCESS = "success"
    ALREADY_EXISTS = "already_exists"
    INVALID_PATH = "invalid_path"
    ERROR = "error"


class RemoveFolderResult(str, Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    IN_USE = "in_use"
    ERROR = "error"


class Folder(BaseModel):
    """A watched root folder as stored by the folder repository."""
    folder_id: int
    path: str
    show_in_collection: bool = True


class FolderView:
    """
    In-memory projection of a Folder with its canonical path.

    Two views are equal when they project the same folder id, so a view
    rebuilt by a later listing still matches a pending edit.
    """

    def __init__(self, folder: Folder):
        self.folder = folder
        self.safe_path = canonical_path(folder.path)

    @property
    def folder_id(self) -> int:
        return self.folder.folder_id

    @property
    def path(self) -> str:
        return self.folder.path

    @property
    def name(self) -> str:
        return display_name(self.folder.path)

    @property
    def show_in_collection(self) -> bool:
        return self.folder.show_in_collection

    @show_in_collection.setter
    def show_in_collection(self, value: bool):
        self.folder.show_in_collection = bool(value)

    def __eq__(self, other):
        if not isinstance(other, FolderView):
            return NotImplemented
        return self.folder_id == other.folder_id

    def __hash__(self):
        return hash(self.folder_id)

    def __repr__(self):
        return f"FolderView(id={self.folder_id}, path={self.path!r}, show={self.show_in_collection})"


@dataclass
class SubfolderEntry:
    """One row of a subfolder listing; is_go_to_parent marks the synthetic ".." row."""
    path: str
    is_go_to_parent: bool = False
    is_playing: bool = False
    is_paused: bool = False
    safe_path: str = field(init=False)

    def __post_init__(self):
        self.safe_path = canonical_path(self.path)

    @property
    def name(self) -> str:
        return ".." if self.is_go_to_parent else display_name(self.path)


@dataclass
class BreadcrumbEntry:
    path: str
    safe_path: str = field(init=False)

    def __post_init__(self):
        self.safe_path = canonical_path(self.path)

    @property
    def name(self) -> str:
        return display_name(self.path)


from src.watchfolders.models import Folder, FolderView, SubfolderEntry, BreadcrumbEntry


def test_folder_view_equality_by_id():
    a = FolderView(Folder(folder_id=7, path="/music"))
    b = FolderView(Folder(folder_id=7, path="/music", show_in_collection=False))
    c = FolderView(Folder(folder_id=8, path="/music"))

    assert a == b
    assert a != c
    assert len({a, b, c}) == 2


def test_folder_view_flag_writes_through():
    folder = Folder(folder_id=1, path="/Music/")
    view = FolderView(folder)

    view.show_in_collection = False

    assert folder.show_in_collection is False
    assert view.safe_path == "/music"
    assert view.name == "Music"


def test_subfolder_entry_names():
    entry = SubfolderEntry("/music/Albums")
    parent = SubfolderEntry("/music/Albums", is_go_to_parent=True)

    assert entry.name == "Albums"
    assert parent.name == ".."
    assert entry.safe_path == "/music/albums"
    assert not entry.is_playing and not entry.is_paused


def test_breadcrumb_entry():
    crumb = BreadcrumbEntry("/music/Albums/")
    assert crumb.name == "Albums"
    assert crumb.safe_path == "/music/albums"

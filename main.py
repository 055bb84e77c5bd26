"""
Console front end for the watched folders store.

    python main.py list
    python main.py add /media/music
    python main.py show 3 off
    python main.py browse /media/music/Albums
"""
import argparse
import sys

from loguru import logger

from src.core.bootstrap import ApplicationBuilder, run_app
from src.watchfolders.errors import BreadcrumbError
from src.watchfolders.models import AddFolderResult, RemoveFolderResult, SubfolderEntry
from src.watchfolders.service import FoldersService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="watchfolders", description="Manage watched media folders")
    parser.add_argument("--config", default="config.json", help="Path to config.json")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable console logging")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List watched folders")

    add = commands.add_parser("add", help="Watch a folder")
    add.add_argument("path")

    remove = commands.add_parser("remove", help="Stop watching a folder")
    remove.add_argument("folder_id", type=int)

    select = commands.add_parser("select", help="Remember a folder as the selected one")
    select.add_argument("folder_id", type=int)

    show = commands.add_parser("show", help="Include or exclude a folder from the collection")
    show.add_argument("folder_id", type=int)
    show.add_argument("state", choices=["on", "off"])

    browse = commands.add_parser("browse", help="List subfolders of the selected folder")
    browse.add_argument("path", nargs="?", help="Subfolder to open (default: the root itself)")
    return parser


async def execute(args, folders: FoldersService) -> int:
    if args.command == "list":
        selected = await folders.get_selected_folder()
        for folder in await folders.get_folders():
            marker = "*" if selected is not None and folder == selected else " "
            shown = "shown" if folder.show_in_collection else "hidden"
            print(f"{marker} {folder.folder_id:>4}  {shown:<6}  {folder.path}")
        return 0

    if args.command == "add":
        result = await folders.add_folder(args.path)
        print(result.value)
        return 0 if result == AddFolderResult.SUCCESS else 1

    if args.command == "remove":
        result = await folders.remove_folder(args.folder_id)
        print(result.value)
        return 0 if result == RemoveFolderResult.SUCCESS else 1

    target = None
    if args.command in ("select", "show"):
        target = next((f for f in await folders.get_folders() if f.folder_id == args.folder_id), None)
        if target is None:
            print(RemoveFolderResult.NOT_FOUND.value)
            return 1

    if args.command == "select":
        folders.set_selected_folder(target)
        print(target.path)
        return 0

    if args.command == "show":
        await folders.mark_folder(target, args.state == "on")
        await folders.save_marked_folders()
        print(f"{target.path}: {'shown' if target.show_in_collection else 'hidden'}")
        return 0

    # browse
    root = await folders.get_selected_folder()
    if root is None:
        print("No folders are watched")
        return 1
    selected = SubfolderEntry(args.path) if args.path else None
    try:
        crumbs = await folders.get_breadcrumbs(root, args.path or root.path)
        entries = await folders.get_subfolders(root, selected)
    except BreadcrumbError as e:
        print(e)
        return 1
    except OSError as e:
        print(f"Cannot list folder: {e}")
        return 1

    print(" > ".join(crumb.name for crumb in crumbs))
    for entry in entries:
        print(f"  {entry.name}")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if not args.verbose:
        logger.remove()

    builder = (ApplicationBuilder("Watch Folders", args.config)
               .with_logging(args.verbose)
               .add_system(FoldersService))

    async def run(locator) -> int:
        return await execute(args, locator.get_system(FoldersService))

    return run_app(run, builder)


if __name__ == "__main__":
    sys.exit(main())

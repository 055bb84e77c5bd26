"""
Watch Folders - Playback Highlighter

Marks the subfolder entries that contain the track being played.
"""
from typing import Iterable

from loguru import logger

from src.watchfolders.models import SubfolderEntry
from src.watchfolders.paths import is_same_or_descendant
from src.watchfolders.protocols import PlaybackState


class PlaybackHighlighter:

    def __init__(self, playback: PlaybackState):
        self.playback = playback

    def highlight(self, entries: Iterable[SubfolderEntry]) -> None:
        """
        Update is_playing/is_paused of entries in place.

        Nothing changes when no track is loaded. Otherwise every entry is
        reset to not playing (paused), and entries whose directory contains
        the current track are marked playing, unpaused while the player runs.
        ".." entries are never marked.
        """
        if not self.playback.has_current_track:
            return

        for entry in entries:
            try:
                entry.is_playing = False
                entry.is_paused = True

                if entry.is_go_to_parent or self.playback.is_stopped:
                    continue

                track_path = self.playback.current_track_path
                if track_path and is_same_or_descendant(track_path, entry.path):
                    entry.is_playing = True
                    if self.playback.is_playing:
                        entry.is_paused = False
            except Exception as e:
                logger.error(f"Could not set the playing subfolder for '{entry.path}'. Exception: {e}")

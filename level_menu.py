"""Level selection menu."""

import logging
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional, Union

import pygame

from game_constants import CHART_FILE, SELECT_KEYS, SONG_FILE

logger = logging.getLogger(__name__)


class Level(NamedTuple):
    name: str
    path: Path

    @property
    def chart_path(self) -> Path:
        return self.path / CHART_FILE

    @property
    def song_path(self) -> Path:
        return self.path / SONG_FILE


def find_levels(songs_dir: Union[str, Path]) -> List[Level]:
    """List every level directory under ``songs_dir``, sorted by name.

    A level is a directory holding a chart file.
    """
    root = Path(songs_dir)
    if not root.is_dir():
        logger.warning(f"Songs directory {root} does not exist")
        return []
    return [
        Level(entry.name, entry)
        for entry in sorted(root.iterdir())
        if entry.is_dir() and (entry / CHART_FILE).is_file()
    ]


class LevelMenu:
    """Keyboard-driven list of levels."""

    def __init__(self, songs_dir: Union[str, Path]) -> None:
        self.songs_dir = Path(songs_dir)
        self.levels: List[Level] = find_levels(self.songs_dir)
        self.selected: int = 0
        self.message: Optional[str] = None

    @property
    def level_names(self) -> List[str]:
        return [level.name for level in self.levels]

    def refresh(self) -> None:
        self.levels = find_levels(self.songs_dir)
        self.selected = min(self.selected, max(0, len(self.levels) - 1))

    def handle_events(self, events: Iterable[pygame.event.Event]) -> Optional[Level]:
        """Move the selection and return the chosen level, if any.

        Args:
            events: Events drained from the pygame queue this frame

        Returns:
            Level picked with Enter/Space this frame, or None
        """
        for event in events:
            if event.type != pygame.KEYDOWN or not self.levels:
                continue
            if event.key in (pygame.K_UP, pygame.K_w):
                self.selected = (self.selected - 1) % len(self.levels)
            elif event.key in (pygame.K_DOWN, pygame.K_s):
                self.selected = (self.selected + 1) % len(self.levels)
            elif event.key in SELECT_KEYS:
                level = self.levels[self.selected]
                logger.info(f"Selected level {level.name}")
                return level
        return None

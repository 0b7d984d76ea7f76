"""
Storage Module - Saved game records and the recent-days archive.

Each (date, size) pair is stored as one JSON file named
game-{Y-M-D}-{side}.json inside the store directory.
"""

import datetime
import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from pathgame.game_session import GameSession
from pathgame.solver import GridSize, date_string

logger = logging.getLogger(__name__)

ARCHIVE_DAYS = 7


class ArchiveStatus(Enum):
    """Progress on an archived day, best result first."""
    NEW = "new"
    IN_PROGRESS = "in_progress"
    COMPLETED_SMALL = "completed_5x5"
    COMPLETED_LARGE = "completed_7x7"


@dataclass(frozen=True)
class ArchiveEntry:
    """
    One day in the archive listing.

    Attributes:
        date: Puzzle date
        display_date: Short label such as "Thu, Mar 7"
        status: Best progress made on that day
    """
    date: datetime.date
    display_date: str
    status: ArchiveStatus


class GameStore:
    """
    Directory of saved game records.

    Read failures are logged and treated as "no saved game" so a corrupt
    file never blocks starting the puzzle again.
    """

    def __init__(self, directory: Union[str, Path] = "saves"):
        """
        Args:
            directory: Folder holding the record files (created on first save)
        """
        self.directory = Path(directory)

    @staticmethod
    def storage_key(date: datetime.date, grid_size: GridSize) -> str:
        return f"game-{date_string(date)}-{grid_size.size}"

    def path_for(self, date: datetime.date, grid_size: GridSize) -> Path:
        return self.directory / f"{self.storage_key(date, grid_size)}.json"

    def save(self, session: GameSession) -> bool:
        """
        Write a session's record.

        Args:
            session: Session to save

        Returns:
            True if the file was written
        """
        path = self.path_for(session.puzzle.date, session.grid_size)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(session.to_record(), f, indent=2)
            logger.debug(f"Game saved: {path}")
            return True
        except OSError as e:
            logger.error(f"Failed to save game {path}: {e}")
            return False

    def load(self, date: datetime.date, grid_size: GridSize) -> Optional[GameSession]:
        """
        Read the saved session for a day and size.

        Returns:
            Restored GameSession, or None if missing or unreadable
        """
        path = self.path_for(date, grid_size)
        if not path.exists():
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                record = json.load(f)
            return GameSession.from_record(record)
        except (json.JSONDecodeError, OSError, ValueError) as e:
            logger.warning(f"Failed to load game {path}: {e}")
            return None

    def delete(self, date: datetime.date, grid_size: GridSize) -> None:
        path = self.path_for(date, grid_size)
        if path.exists():
            path.unlink()

    def archive(self, today: datetime.date, days: int = ARCHIVE_DAYS) -> List[ArchiveEntry]:
        """
        List the previous days, most recent first.

        Args:
            today: Current date (not included)
            days: Number of past days to list

        Returns:
            ArchiveEntry per day
        """
        entries = []
        for offset in range(1, days + 1):
            day = today - datetime.timedelta(days=offset)
            small = self.load(day, GridSize.SMALL)
            large = self.load(day, GridSize.LARGE)

            if large is not None and large.is_over:
                status = ArchiveStatus.COMPLETED_LARGE
            elif small is not None and small.is_over:
                status = ArchiveStatus.COMPLETED_SMALL
            elif small is not None or large is not None:
                status = ArchiveStatus.IN_PROGRESS
            else:
                status = ArchiveStatus.NEW

            entries.append(ArchiveEntry(
                date=day,
                display_date=f"{day.strftime('%a, %b')} {day.day}",
                status=status,
            ))
        return entries

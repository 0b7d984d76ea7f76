"""
Game Session Module - Gameplay state machine for one daily puzzle.

The session owns the player's path and applies the move rules from
pathgame.solver. The solver's par score arrives separately (usually from
a background SolverWorker) through apply_solution().

State Flow:
    PLAYING --no moves left--> COMPLETE
       |
       +--give_up()----------> GAVE_UP

    restart() returns COMPLETE to PLAYING; GAVE_UP is final.

Undo limits:
    5x5: one undo in a row
    7x7: two undos in a row once per attempt (the bonus), then one
"""

import datetime
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from pathgame.solver import (
    GridSize, Position, Puzzle, Solution,
    generate_puzzle, get_valid_moves, is_valid_move, validate_path,
)

logger = logging.getLogger(__name__)


__all__ = [
    "GameStatus",
    "GameSession",
]


class GameStatus(Enum):
    """
    Session states.

    States:
        PLAYING: Player is building a path
        COMPLETE: No legal moves remain from the path's tail
        GAVE_UP: Player revealed the optimal path
    """
    PLAYING = "playing"
    COMPLETE = "complete"
    GAVE_UP = "gave_up"


# Score messages, keyed by exact path length on 5x5
RESPONSES_SMALL: Dict[int, str] = {
    13: "Novice Navigator!",
    14: "Path Finder!",
    15: "Route Ranger!",
    16: "Trail Blazer!",
    17: "Way Maker!",
    18: "Journey Master!",
    19: "Expedition Expert!",
    20: "Odyssey Oracle!",
    21: "Path Perfection!",
}

# Score messages, keyed by minimum path length on 7x7
RESPONSES_LARGE: Dict[int, str] = {
    25: "Beginner Pathfinder!",
    30: "Master Trailblazer!",
    35: "Cosmic Navigator!",
    40: "Omnipotent Pathfinder!",
    45: "Absolute Perfection!",
}


class GameSession:
    """
    Player state for one puzzle.

    Attributes:
        puzzle: The puzzle being played
        path: Player path, start cell first
        status: Current GameStatus
        optimal_length: Par score (1 until the solver reports)
        optimal_path: Path achieving the par score
        attempts: Number of attempts, counting restarts
    """

    def __init__(self, puzzle: Puzzle, optimal_length: Optional[int] = None,
                 optimal_path: Optional[Sequence[Position]] = None):
        """
        Start a fresh session at the puzzle's start cell.

        Args:
            puzzle: Puzzle to play
            optimal_length: Known par score, if already computed
            optimal_path: Known optimal path, if already computed
        """
        self.puzzle = puzzle
        self.path: List[Position] = [puzzle.start]
        self.status = GameStatus.PLAYING
        self.optimal_length = optimal_length if optimal_length is not None else 1
        self.optimal_path: List[Position] = list(optimal_path) if optimal_path else []
        self.attempts = 1
        self.consecutive_undos = 0
        self.used_bonus_undo = False

    @classmethod
    def for_date(cls, date: datetime.date, grid_size: GridSize = GridSize.SMALL) -> 'GameSession':
        """Create a session for the puzzle of a date."""
        return cls(generate_puzzle(date, grid_size))

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def grid_size(self) -> GridSize:
        return self.puzzle.grid_size

    @property
    def current_position(self) -> Position:
        return self.path[-1]

    @property
    def path_length(self) -> int:
        return len(self.path)

    @property
    def is_over(self) -> bool:
        return self.status != GameStatus.PLAYING

    @property
    def gave_up(self) -> bool:
        return self.status == GameStatus.GAVE_UP

    @property
    def percentage(self) -> int:
        """Path length as a whole percentage of the par score."""
        if self.optimal_length <= 0:
            return 0
        return (self.path_length * 100) // self.optimal_length

    @property
    def is_perfect(self) -> bool:
        return self.path_length >= self.optimal_length and self.optimal_length > 0 and not self.gave_up

    @property
    def tiered_response(self) -> str:
        """Short message for the current path length."""
        length = self.path_length
        if self.grid_size == GridSize.SMALL:
            if length in RESPONSES_SMALL:
                return RESPONSES_SMALL[length]
            return "Impossible Achievement!" if length > 21 else "Keep exploring!"

        for threshold in sorted(RESPONSES_LARGE, reverse=True):
            if length >= threshold:
                return RESPONSES_LARGE[threshold]
        return "Keep pushing!"

    def get_valid_moves(self) -> List[Position]:
        """Legal moves from the current tail (empty once the game is over)."""
        if self.is_over:
            return []
        return get_valid_moves(self.puzzle.board, self.path)

    def is_valid_move(self, position: Position) -> bool:
        if self.is_over:
            return False
        return is_valid_move(self.puzzle.board, self.path, position)

    def is_in_path(self, position: Position) -> bool:
        return position in self.path

    def path_index(self, position: Position) -> int:
        """Index of position on the path, or -1."""
        try:
            return self.path.index(position)
        except ValueError:
            return -1

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def make_move(self, position: Position) -> bool:
        """
        Extend the path to position.

        Tapping the current tail acts as undo.

        Args:
            position: Target cell

        Returns:
            True if the path changed
        """
        if self.is_over:
            return False
        if position == self.current_position and self.path_length > 1:
            return self.undo()
        if not self.is_valid_move(position):
            logger.debug(f"Rejected move to {position} from {self.current_position}")
            return False

        self.path.append(position)
        self.consecutive_undos = 0

        if not get_valid_moves(self.puzzle.board, self.path):
            self._finish()
        return True

    def max_consecutive_undos(self) -> int:
        if self.grid_size == GridSize.SMALL:
            return 1
        return 1 if self.used_bonus_undo else 2

    def can_undo(self) -> bool:
        if self.path_length <= 1 or self.is_over:
            return False
        return self.consecutive_undos < self.max_consecutive_undos()

    def undo(self) -> bool:
        """
        Remove the last cell from the path, within the undo limits.

        Returns:
            True if a cell was removed
        """
        if not self.can_undo():
            return False

        if self.grid_size == GridSize.LARGE and self.consecutive_undos == 1:
            self.used_bonus_undo = True

        self.consecutive_undos += 1
        removed = self.path.pop()
        logger.debug(f"Undo: removed {removed}, {self.consecutive_undos} in a row")
        return True

    def restart(self) -> bool:
        """
        Start a new attempt from the start cell.

        Returns:
            False if the player already gave up
        """
        if self.gave_up:
            return False

        self.attempts += 1
        self.path = [self.puzzle.start]
        self.status = GameStatus.PLAYING
        self.consecutive_undos = 0
        self.used_bonus_undo = False
        logger.info(f"Restarted {self.puzzle.date_string} {self.grid_size.display_name}, attempt {self.attempts}")
        return True

    def give_up(self) -> None:
        """Reveal the optimal path and end the session."""
        self.status = GameStatus.GAVE_UP
        if self.optimal_path:
            self.path = list(self.optimal_path)
        logger.info(f"Gave up on {self.puzzle.date_string} {self.grid_size.display_name}")

    def apply_solution(self, solution: Solution) -> None:
        """
        Record the solver's par score.

        A cancelled (partial) result only raises the par, never lowers it.

        Args:
            solution: Result from solve_optimal_path or a SolverWorker
        """
        if solution.was_cancelled and solution.optimal_length <= self.optimal_length:
            return
        self.optimal_length = solution.optimal_length
        self.optimal_path = list(solution.optimal_path)
        logger.info(f"Par for {self.puzzle.date_string} {self.grid_size.display_name}: {self.optimal_length}")

    def _finish(self) -> None:
        """Handle the transition to COMPLETE."""
        self.status = GameStatus.COMPLETE

        if self.path_length > self.optimal_length:
            self.optimal_length = self.path_length
            self.optimal_path = list(self.path)

        logger.info(
            f"Complete: {self.path_length}/{self.optimal_length} ({self.percentage}%)"
            f"{' - perfect' if self.is_perfect else ''}"
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_record(self) -> Dict[str, Any]:
        """
        Serialize to a JSON-compatible record.

        Returns:
            Dict of plain integers, strings and [row, col] pairs
        """
        return {
            "date": self.puzzle.date.isoformat(),
            "grid_size": self.grid_size.size,
            "grid": self.puzzle.board.to_list(),
            "path": [p.to_list() for p in self.path],
            "status": self.status.value,
            "optimal_length": self.optimal_length,
            "optimal_path": [p.to_list() for p in self.optimal_path],
            "attempts": self.attempts,
            "consecutive_undos": self.consecutive_undos,
            "used_bonus_undo": self.used_bonus_undo,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'GameSession':
        """
        Restore a session saved with to_record().

        The puzzle is regenerated from date and size and must match the
        stored grid. Both stored paths must follow the move rules.

        Raises:
            ValueError: If the record is incomplete or does not match its puzzle
        """
        try:
            date = datetime.date.fromisoformat(record["date"])
            puzzle = generate_puzzle(date, int(record["grid_size"]))
            path = [Position.from_list(p) for p in record["path"]]
            optimal_path = [Position.from_list(p) for p in record.get("optimal_path", [])]
            status = GameStatus(record.get("status", GameStatus.PLAYING.value))
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed game record: {e}") from e

        stored_grid = record.get("grid")
        if stored_grid is not None and stored_grid != puzzle.board.to_list():
            raise ValueError(f"Stored grid does not match puzzle for {puzzle.date_string}")
        validate_path(puzzle.board, path, puzzle.start)
        if optimal_path:
            validate_path(puzzle.board, optimal_path, puzzle.start)

        session = cls(puzzle, optimal_length=int(record.get("optimal_length", 1)), optimal_path=optimal_path)
        session.path = path
        session.status = status
        session.attempts = int(record.get("attempts", 1))
        session.consecutive_undos = int(record.get("consecutive_undos", 0))
        session.used_bonus_undo = bool(record.get("used_bonus_undo", False))
        return session

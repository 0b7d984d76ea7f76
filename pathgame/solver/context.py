"""
Solution Context Module - Shared context for strategy execution.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .board import BoardState, Position


@dataclass
class SolutionContext:
    """
    Context passed to strategies containing the board, the start cell,
    cancellation and progress reporting.

    The search has no timeout; a caller that wants to stop early sets
    cancel_flag and receives the best path found so far.

    Attributes:
        board: Board to solve
        start: Fixed start cell of the puzzle
        cancel_flag: Threading event for cancellation
        start_time: When computation started
        progress_callback: Optional callback, called with each new best length
    """
    board: BoardState
    start: Position
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    start_time: float = field(default_factory=time.time)
    progress_callback: Optional[Callable[[int], None]] = None

    def __post_init__(self):
        if not self.board.in_bounds(self.start):
            raise ValueError(
                f"Start {self.start} is outside the {self.board.rows}x{self.board.cols} board"
            )

    def is_cancelled(self) -> bool:
        """
        Check if cancellation was requested.

        Returns:
            True if strategy should stop execution
        """
        return self.cancel_flag.is_set()

    def report_progress(self, best_length: int) -> None:
        """
        Report an improved best length.

        Args:
            best_length: Length of the new best path
        """
        if self.progress_callback:
            self.progress_callback(best_length)

    def elapsed_time(self) -> float:
        """
        Get seconds elapsed since computation started.

        Returns:
            Elapsed time in seconds
        """
        return time.time() - self.start_time

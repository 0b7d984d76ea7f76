"""
Solver Worker Module for PathGame

Provides a background QThread worker that computes a puzzle's par score
off the interactive thread. Results reach the UI via Qt signals, which
Qt queues onto the receiver's thread.
"""

import logging
import threading
import time
from typing import Optional

from PyQt5.QtCore import QThread, pyqtSignal

from pathgame.solver import BoardState, Position, Puzzle, get_default_strategy_name, solve_optimal_path


# Configure module logger
logger = logging.getLogger(__name__)


class SolverWorker(QThread):
    """
    Background worker thread for one optimal path computation.

    Each worker owns its own cancellation flag and the solver keeps all
    search state local to the call, so several workers (one per puzzle
    size, say) can run at the same time.

    Signals:
        solution_ready(object): Emitted with the Solution when the search ends
        progress_changed(int): Emitted with each improved best length
        error_occurred(str): Emitted if the search raises

    Example:
        worker = SolverWorker(puzzle.board, puzzle.start)
        worker.solution_ready.connect(session.apply_solution)
        worker.start()
        # ...
        worker.wait()
    """

    solution_ready = pyqtSignal(object)
    progress_changed = pyqtSignal(int)
    error_occurred = pyqtSignal(str)

    def __init__(self, board: BoardState, start: Position, strategy_name: Optional[str] = None):
        """
        Initialize the solver worker.

        Args:
            board: Board to solve
            start: Fixed start cell
            strategy_name: Solver strategy (default "ordered")
        """
        super().__init__()
        self.board = board
        self.start_position = start
        self.strategy_name = strategy_name or get_default_strategy_name()
        self._cancel_flag = threading.Event()
        self._solution = None

    @classmethod
    def for_puzzle(cls, puzzle: Puzzle, strategy_name: Optional[str] = None) -> 'SolverWorker':
        return cls(puzzle.board, puzzle.start, strategy_name)

    @property
    def solution(self):
        """Last Solution computed by this worker, or None."""
        return self._solution

    def run(self):
        """
        Worker body. Called on the worker thread by start().

        May also be called directly to solve synchronously; signals are
        then delivered on the calling thread.
        """
        logger.info(f"Solver worker started ({self.strategy_name})")
        started = time.perf_counter()

        try:
            self._solution = solve_optimal_path(
                self.board,
                self.start_position,
                strategy_name=self.strategy_name,
                cancel_flag=self._cancel_flag,
                progress_callback=self.progress_changed.emit,
            )
        except Exception as e:
            logger.exception("Error in solver worker")
            self.error_occurred.emit(str(e))
            return

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"Solver worker finished: par={self._solution.optimal_length} ({elapsed_ms:.1f}ms)")
        self.solution_ready.emit(self._solution)

    def request_stop(self):
        """
        Request the search to stop early.

        The worker emits solution_ready with the best path so far and
        was_cancelled set. Use wait() after calling this to block until stopped.
        """
        logger.info("Stop requested")
        self._cancel_flag.set()

    def is_cancelled(self) -> bool:
        return self._cancel_flag.is_set()

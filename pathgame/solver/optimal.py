"""
Optimal Path Module - Entry point for computing a puzzle's par score.
"""

import logging
import threading
from typing import Callable, Optional

from .board import BoardState, Position
from .context import SolutionContext
from .factory import create_strategy
from .solution import Solution

logger = logging.getLogger(__name__)


def solve_optimal_path(
    board: BoardState,
    start: Position,
    strategy_name: Optional[str] = None,
    cancel_flag: Optional[threading.Event] = None,
    progress_callback: Optional[Callable[[int], None]] = None,
) -> Solution:
    """
    Find the longest legal path from start.

    Pure and reentrant: every call builds its own search state, so calls
    for different puzzles may run on different threads at once.

    Args:
        board: Puzzle board
        start: Fixed start cell
        strategy_name: Registered strategy (default "ordered")
        cancel_flag: Optional event; setting it stops the search early
        progress_callback: Optional callback receiving each new best length

    Returns:
        Solution with optimal_length and optimal_path

    Raises:
        ValueError: If start is off the board or the strategy is unknown
    """
    strategy = create_strategy(strategy_name)

    context = SolutionContext(board=board, start=start, progress_callback=progress_callback)
    if cancel_flag is not None:
        context.cancel_flag = cancel_flag

    logger.info(f"Solving {board.rows}x{board.cols} board from {start} with '{strategy.name}'")
    solution = strategy.solve(context)
    logger.info(
        f"Optimal length {solution.optimal_length}/{board.total_cells} "
        f"({solution.metrics.states_explored} states, {solution.metrics.computation_time_ms:.1f}ms)"
    )
    return solution

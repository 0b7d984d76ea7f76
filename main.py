"""
PathGame - Entry Point

Generates the daily puzzle, computes its par score on a background
solver worker and prints the result.

Example:
    python main.py
    python main.py --date 2024-03-07 --size 7 --image path.png --share
"""

import sys
import logging
import argparse
import datetime
from pathlib import Path
from typing import Optional

from PyQt5.QtCore import QCoreApplication

from pathgame.game_session import GameSession, GameStatus
from pathgame.render import save_debug_image, save_puzzle_image
from pathgame.settings import load_settings
from pathgame.share import generate_share_text
from pathgame.solver import (
    GridSize, Puzzle, Solution, generate_puzzle,
    get_default_strategy_name, get_strategy_info, get_strategy_names, resolve_strategy_name,
)
from pathgame.solver_worker import SolverWorker
from pathgame.storage import GameStore


# Configure logging - output to both console and file
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
    handlers=[
        logging.StreamHandler(),  # Console output
        logging.FileHandler("pathgame.log", mode='w', encoding='utf-8')  # File output
    ]
)
logger = logging.getLogger(__name__)


class Application:
    """
    Main application controller.

    Owns the puzzle session and the solver worker, connecting the
    worker's signals to the session.
    """

    def __init__(self, date: datetime.date, grid_size: GridSize, strategy_name: str,
                 debug_mode: bool = False, data_dir: str = "saves"):
        """
        Initialize the application.

        Args:
            date: Puzzle date
            grid_size: Puzzle size
            strategy_name: Solver strategy
            debug_mode: Save a debug render after solving
            data_dir: Directory of saved games
        """
        self.puzzle: Puzzle = generate_puzzle(date, grid_size)
        self.strategy_name = strategy_name
        self.debug_mode = debug_mode
        self.store = GameStore(data_dir)
        self.session: GameSession = self.store.load(date, grid_size) or GameSession(self.puzzle)
        self.worker: Optional[SolverWorker] = None
        self.solution: Optional[Solution] = None
        self.error: Optional[str] = None

        logger.info(
            f"Puzzle {self.puzzle.date_string} {grid_size.display_name} "
            f"(seed {self.puzzle.seed}), strategy: {strategy_name}"
        )

    def start_solver(self, app: QCoreApplication):
        """Start the background solve and quit the event loop when it ends."""
        self.worker = SolverWorker.for_puzzle(self.puzzle, self.strategy_name)
        self.worker.solution_ready.connect(self._on_solution)
        self.worker.progress_changed.connect(self._on_progress)
        self.worker.error_occurred.connect(self._on_error)
        self.worker.finished.connect(app.quit)
        self.worker.start()

    def _on_solution(self, solution: Solution):
        """Handle solution from worker."""
        self.solution = solution
        self.session.apply_solution(solution)
        self.store.save(self.session)

        if self.debug_mode:
            path = save_debug_image(self.puzzle.board, solution.optimal_path)
            logger.info(f"Debug image saved: {path}")

    def _on_progress(self, best_length: int):
        logger.debug(f"Best so far: {best_length}")

    def _on_error(self, error_msg: str):
        """Handle worker error."""
        logger.error(f"Worker error: {error_msg}")
        self.error = error_msg


def format_grid(puzzle: Puzzle) -> str:
    """Render the grid as text, marking the start cell."""
    lines = []
    for r, row in enumerate(puzzle.board.grid):
        cells = []
        for c, value in enumerate(row):
            if (r, c) == (puzzle.start.row, puzzle.start.col):
                cells.append(f"[{value}]")
            else:
                cells.append(f" {value} ")
        lines.append("".join(cells))
    return "\n".join(lines)


def parse_date(text: str) -> datetime.date:
    try:
        return datetime.date.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{text}', expected YYYY-MM-DD")


def default_strategy(settings) -> str:
    """Strategy named in settings, or the built-in default if it is unknown."""
    try:
        return resolve_strategy_name(settings.get("strategy_name"))
    except ValueError as e:
        logger.warning(f"{e}; using {get_default_strategy_name()}")
        return get_default_strategy_name()


def parse_args(settings):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="PathGame - Daily puzzle generator and par solver"
    )
    parser.add_argument(
        "--date",
        type=parse_date,
        default=datetime.date.today(),
        help="Puzzle date, YYYY-MM-DD (default: today)"
    )
    parser.add_argument(
        "--size", "-s",
        type=int,
        choices=[g.size for g in GridSize],
        default=settings.get("grid_size", 5),
        help="Grid side length (default from settings)"
    )
    parser.add_argument(
        "--strategy",
        choices=get_strategy_names(),
        default=default_strategy(settings),
        help="Solver strategy (default from settings): " + "; ".join(
            f"{info['name']} - {info['description']}" for info in get_strategy_info()
        )
    )
    parser.add_argument(
        "--image",
        type=Path,
        help="Write the puzzle with its optimal path to this PNG file"
    )
    parser.add_argument(
        "--share",
        action="store_true",
        help="Print share text for the optimal path"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging and save a debug render"
    )
    return parser.parse_args()


def main():
    """Generate and solve the selected puzzle."""
    settings = load_settings()
    args = parse_args(settings)

    debug_mode = args.debug or settings.get("debug_enabled", False)
    if debug_mode:
        logging.getLogger().setLevel(logging.DEBUG)

    app = QCoreApplication(sys.argv)

    application = Application(
        date=args.date,
        grid_size=GridSize.from_side(args.size),
        strategy_name=args.strategy,
        debug_mode=debug_mode,
        data_dir=settings.get("data_dir", "saves"),
    )
    print(format_grid(application.puzzle))

    application.start_solver(app)
    app.exec_()

    if application.solution is None:
        print(f"Solver failed: {application.error}")
        return 1

    solution = application.solution
    print(f"\nPar: {solution.optimal_length}/{application.puzzle.grid_size.total_cells}")
    print("Path: " + " -> ".join(f"({p.row},{p.col})" for p in solution.optimal_path))

    if args.image:
        save_puzzle_image(application.puzzle.board, args.image, solution.optimal_path)

    if args.share:
        # Share the par path as a finished run, not a give-up
        preview = GameSession(application.puzzle, solution.optimal_length, solution.optimal_path)
        preview.path = list(solution.optimal_path)
        preview.status = GameStatus.COMPLETE
        print()
        print(generate_share_text(preview))

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Solver Package - Daily puzzle generation and optimal path search.

This package holds the whole puzzle core: the date-seeded generator, the
move rules and the par-score solver. Solving strategies are pluggable and
selected by name.

Public API:
    - Position, GridSize, BoardState: Value types
    - Puzzle, generate_puzzle(): Deterministic daily puzzle
    - is_valid_move(), get_valid_moves(): Move rules
    - solve_optimal_path(): Longest path from the start cell
    - Solution, SolutionMetrics: Solver result
    - SolutionContext, SolverStrategy: Strategy framework
    - create_strategy(), get_strategy_names(), get_strategy_info()

Usage:
    from pathgame.solver import generate_puzzle, solve_optimal_path, GridSize

    puzzle = generate_puzzle(date.today(), GridSize.SMALL)
    solution = solve_optimal_path(puzzle.board, puzzle.start)
    print(f"Par: {solution.optimal_length}")
"""

# Core data structures
from .board import BoardState, GridSize, Position
from .generator import Puzzle, SeededRandom, date_seed, date_string, generate_puzzle, puzzle_seed
from .rules import get_valid_moves, is_valid_move, validate_path
from .solution import Solution, SolutionMetrics
from .context import SolutionContext

# Strategy framework
from .base import SolverStrategy
from .factory import (
    create_strategy,
    get_strategy_names,
    get_strategy_info,
    get_default_strategy_name,
    register_strategy,
    resolve_strategy_name,
)

# Import strategies to register them
from . import strategies

from .optimal import solve_optimal_path

__all__ = [
    # Data structures
    "BoardState",
    "GridSize",
    "Position",
    "Puzzle",
    "Solution",
    "SolutionMetrics",
    "SolutionContext",
    # Generation and rules
    "SeededRandom",
    "date_seed",
    "date_string",
    "generate_puzzle",
    "puzzle_seed",
    "is_valid_move",
    "get_valid_moves",
    "validate_path",
    "solve_optimal_path",
    # Strategy framework
    "SolverStrategy",
    "create_strategy",
    "get_strategy_names",
    "get_strategy_info",
    "get_default_strategy_name",
    "register_strategy",
    "resolve_strategy_name",
]

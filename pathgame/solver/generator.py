"""
Generator Module - Deterministic date-seeded puzzle generation.

Every client must produce the same grid for the same calendar date and
grid size, so the hash and the linear congruential generator below are
fixed down to the bit:

    date string   "2024-3-7" (month/day not zero-padded)
    base seed     abs(rolling 32-bit hash of the string)
    puzzle seed   base seed + center * 1000
    stream        state = (state * 1103515245 + 12345) & 0x7FFFFFFF
"""

import datetime
from dataclasses import dataclass
from typing import Union

from .board import BoardState, GridSize, Position


HASH_MASK = 0xFFFFFFFF
LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345
LCG_MODULUS_MASK = 0x7FFFFFFF
SEED_OFFSET_STEP = 1000

MIN_CELL_VALUE = 1
MAX_CELL_VALUE = 5


def date_string(date: datetime.date) -> str:
    """
    Format a date as "Y-M-D" without zero padding.

    Only the calendar fields are used, so a datetime's time and
    timezone never affect the result.
    """
    return f"{date.year}-{date.month}-{date.day}"


def date_seed(date: datetime.date) -> int:
    """
    Compute the base seed for a date.

    Args:
        date: Calendar date

    Returns:
        Absolute value of the 32-bit rolling hash of the date string
    """
    value = 0
    for char in date_string(date):
        value = ((value << 5) - value + ord(char)) & HASH_MASK
    return abs(value)


def puzzle_seed(date: datetime.date, grid_size: GridSize) -> int:
    """Seed for a (date, size) pair; each size gets its own offset."""
    return date_seed(date) + grid_size.center * SEED_OFFSET_STEP


class SeededRandom:
    """
    Linear congruential generator shared by every client.

    Create one per puzzle; never share an instance between puzzles.
    """

    def __init__(self, seed: int):
        self.state = seed

    def next(self) -> float:
        """Advance the stream and return a float in [0, 1]."""
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) & LCG_MODULUS_MASK
        return self.state / LCG_MODULUS_MASK

    def next_int(self, min_value: int, max_value: int) -> int:
        """
        Draw an integer in [min_value, max_value], both inclusive.

        next() reaches exactly 1.0 when the state hits 0x7FFFFFFF, so the
        result is clamped to max_value.

        A client computing int(next() * (max - min + 1)) + min without the
        clamp draws max_value + 1 there. This clamp is the one place where
        the cell stream can differ between clients.
        """
        value = int(self.next() * (max_value - min_value + 1)) + min_value
        return min(value, max_value)


@dataclass(frozen=True)
class Puzzle:
    """
    A daily puzzle, fully determined by (date, grid_size).

    Attributes:
        date: Calendar date the puzzle belongs to
        grid_size: Size of the square grid
        board: Generated cell values
        start: Fixed start cell (the center)
    """
    date: datetime.date
    grid_size: GridSize
    board: BoardState
    start: Position

    @property
    def seed(self) -> int:
        return puzzle_seed(self.date, self.grid_size)

    @property
    def date_string(self) -> str:
        return date_string(self.date)


def _coerce_grid_size(grid_size: Union[GridSize, int]) -> GridSize:
    if isinstance(grid_size, GridSize):
        return grid_size
    if isinstance(grid_size, int) and not isinstance(grid_size, bool):
        return GridSize.from_side(grid_size)
    raise ValueError(f"Unsupported grid size: {grid_size!r}")


def _coerce_date(date: datetime.date) -> datetime.date:
    if isinstance(date, datetime.datetime):
        return date.date()
    if isinstance(date, datetime.date):
        return date
    raise ValueError(f"Expected a date, got {type(date).__name__}")


def generate_puzzle(date: datetime.date, grid_size: Union[GridSize, int] = GridSize.SMALL) -> Puzzle:
    """
    Generate the puzzle for a calendar date.

    Cells are drawn in row-major order from a single generator stream.

    Args:
        date: Calendar date (datetime values use their date part)
        grid_size: GridSize or side length (5 or 7)

    Returns:
        Puzzle with board and center start position

    Raises:
        ValueError: If the grid size or date is not supported
    """
    grid_size = _coerce_grid_size(grid_size)
    date = _coerce_date(date)

    rng = SeededRandom(puzzle_seed(date, grid_size))
    side = grid_size.size
    grid = tuple(
        tuple(rng.next_int(MIN_CELL_VALUE, MAX_CELL_VALUE) for _ in range(side))
        for _ in range(side)
    )

    center = grid_size.center
    return Puzzle(
        date=date,
        grid_size=grid_size,
        board=BoardState(grid=grid),
        start=Position(center, center),
    )

"""
Board Module - Immutable grid, position and grid size types for the Path puzzle.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Sequence, Tuple


@dataclass(frozen=True)
class Position:
    """
    Zero-indexed cell coordinate on the board.

    Attributes:
        row: Row index (top to bottom)
        col: Column index (left to right)
    """
    row: int
    col: int

    def is_adjacent_to(self, other: 'Position') -> bool:
        """
        Check king-move adjacency (8 directions, never the same cell).

        Args:
            other: Position to compare against

        Returns:
            True if the positions touch by edge or corner

        Raises:
            TypeError: If other is not a Position
        """
        if not isinstance(other, Position):
            raise TypeError(f"Cannot compare Position with {type(other).__name__}")
        d_row = abs(self.row - other.row)
        d_col = abs(self.col - other.col)
        return d_row <= 1 and d_col <= 1 and not (d_row == 0 and d_col == 0)

    def offset(self, d_row: int, d_col: int) -> 'Position':
        """Return the position shifted by (d_row, d_col)."""
        return Position(self.row + d_row, self.col + d_col)

    def to_list(self) -> List[int]:
        """Serialize as a [row, col] pair."""
        return [self.row, self.col]

    @classmethod
    def from_list(cls, pair: Sequence[int]) -> 'Position':
        """Build a Position from a [row, col] pair."""
        if len(pair) != 2:
            raise ValueError(f"Position pair must have 2 items, got {list(pair)}")
        return cls(int(pair[0]), int(pair[1]))


class GridSize(Enum):
    """
    Supported puzzle sizes.

    The value is the side length. The center offset doubles as the
    seed offset used by the generator.
    """
    SMALL = 5
    LARGE = 7

    @property
    def size(self) -> int:
        """Side length of the square grid."""
        return self.value

    @property
    def center(self) -> int:
        """Index of the center row/column (also the start cell)."""
        return self.value // 2

    @property
    def total_cells(self) -> int:
        return self.value * self.value

    @property
    def display_name(self) -> str:
        return f"{self.value}×{self.value}"

    @classmethod
    def from_side(cls, side: int) -> 'GridSize':
        """
        Look up a GridSize by its side length.

        Raises:
            ValueError: If the side length is not supported
        """
        for grid_size in cls:
            if grid_size.value == side:
                return grid_size
        supported = ", ".join(str(g.value) for g in cls)
        raise ValueError(f"Unsupported grid size: {side}. Supported: {supported}")


@dataclass(frozen=True)
class BoardState:
    """
    Immutable square grid of cell values.

    Uses tuple-of-tuples for hashability and immutability.
    Generated boards hold integers 1-5.

    Attributes:
        grid: Tuple of row tuples
    """
    grid: Tuple[Tuple[int, ...], ...]

    def __post_init__(self):
        if not self.grid:
            raise ValueError("Board must have at least one row")
        side = len(self.grid)
        for row in self.grid:
            if len(row) != side:
                raise ValueError(f"Board must be square, got row of length {len(row)} in {side}-row grid")

    @classmethod
    def from_2d_list(cls, grid: Sequence[Sequence[int]]) -> 'BoardState':
        """
        Create BoardState from a 2D list.

        Args:
            grid: 2D sequence of integers

        Returns:
            BoardState instance with immutable grid
        """
        return cls(grid=tuple(tuple(int(v) for v in row) for row in grid))

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0])

    @property
    def size(self) -> int:
        """Side length (boards are always square)."""
        return self.rows

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    def in_bounds(self, position: Position) -> bool:
        return 0 <= position.row < self.rows and 0 <= position.col < self.cols

    def get_cell(self, row: int, col: int) -> int:
        """
        Get value at a cell.

        Raises:
            ValueError: If the cell is outside the board
        """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise ValueError(f"Cell ({row}, {col}) is outside the {self.rows}x{self.cols} board")
        return self.grid[row][col]

    def value_at(self, position: Position) -> int:
        return self.get_cell(position.row, position.col)

    def positions(self) -> Iterator[Position]:
        """Iterate all positions in row-major order."""
        for r in range(self.rows):
            for c in range(self.cols):
                yield Position(r, c)

    def to_list(self) -> List[List[int]]:
        """
        Convert to mutable 2D list representation.

        Returns:
            2D list representation of the board
        """
        return [list(row) for row in self.grid]

"""
Rules Module - Legal move checks for building a path.

A move from the path's tail is legal when the candidate is on the board,
not yet on the path, touches the tail (8 directions) and differs from the
tail's value by at most 1.
"""

from typing import List, Sequence, Tuple

from .board import BoardState, Position


# Fixed neighbour order: drives hint lists and the solver's tie-break.
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)

MAX_VALUE_STEP = 1


def values_compatible(a: int, b: int) -> bool:
    """True if two cell values are close enough to step between."""
    return abs(a - b) <= MAX_VALUE_STEP


def is_valid_move(board: BoardState, path: Sequence[Position], candidate: Position) -> bool:
    """
    Check whether candidate can be appended to path.

    Args:
        board: Puzzle board
        path: Current path, tail last
        candidate: Cell the player wants to move to

    Returns:
        True if all four move conditions hold

    Raises:
        ValueError: If the path's tail is itself off the board
    """
    if not path:
        return False
    tail = path[-1]
    if not board.in_bounds(tail):
        raise ValueError(f"Path tail {tail} is outside the {board.rows}x{board.cols} board")

    if not board.in_bounds(candidate):
        return False
    if candidate in path:
        return False
    if not tail.is_adjacent_to(candidate):
        return False

    return values_compatible(board.value_at(tail), board.value_at(candidate))


def get_valid_moves(board: BoardState, path: Sequence[Position]) -> List[Position]:
    """
    List legal next moves from the path's tail in neighbour order.

    Args:
        board: Puzzle board
        path: Current path, tail last

    Returns:
        Legal candidate positions (empty if the path is empty)
    """
    if not path:
        return []
    tail = path[-1]
    return [
        tail.offset(d_row, d_col)
        for d_row, d_col in NEIGHBOR_OFFSETS
        if is_valid_move(board, path, tail.offset(d_row, d_col))
    ]


def validate_path(board: BoardState, path: Sequence[Position], start: Position) -> None:
    """
    Check a complete path against the rules.

    Raises:
        ValueError: Describing the first rule the path breaks
    """
    if not path:
        raise ValueError("Path is empty")
    if not board.in_bounds(start):
        raise ValueError(f"Start {start} is outside the board")
    if path[0] != start:
        raise ValueError(f"Path must begin at {start}, begins at {path[0]}")

    for index in range(1, len(path)):
        if not is_valid_move(board, path[:index], path[index]):
            raise ValueError(f"Illegal step {index}: {path[index - 1]} -> {path[index]}")

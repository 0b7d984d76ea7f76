"""
Test script for puzzle generation and solver validation

Covers:
1. Date seeding and the golden 2024-3-7 grids
2. Move rules
3. Optimal path strategies (ordered and unordered)
4. Solver result validity and cancellation

Usage:
    python test_solver.py
    pytest tests/test_solver.py
"""

import sys
import datetime
import threading
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pathgame.solver import (
    BoardState,
    GridSize,
    Position,
    SeededRandom,
    SolutionContext,
    create_strategy,
    date_seed,
    date_string,
    generate_puzzle,
    get_default_strategy_name,
    get_strategy_names,
    get_valid_moves,
    is_valid_move,
    puzzle_seed,
    register_strategy,
    resolve_strategy_name,
    solve_optimal_path,
    validate_path,
)


GOLDEN_DATE = datetime.date(2024, 3, 7)

GOLDEN_SMALL = [
    [5, 1, 4, 5, 4],
    [3, 2, 1, 4, 2],
    [2, 3, 1, 4, 4],
    [4, 2, 3, 2, 1],
    [1, 3, 2, 5, 5],
]

GOLDEN_LARGE = [
    [4, 4, 3, 3, 3, 4, 5],
    [1, 3, 2, 1, 4, 4, 1],
    [4, 3, 2, 3, 2, 2, 3],
    [3, 5, 2, 2, 4, 5, 3],
    [4, 4, 3, 4, 1, 4, 5],
    [1, 3, 1, 2, 4, 2, 3],
    [2, 3, 4, 4, 3, 1, 5],
]

GOLDEN_SMALL_PAR = 19

# First optimal path reached by the ordered strategy on GOLDEN_SMALL
GOLDEN_SMALL_PATH = [
    (2, 2), (1, 2), (0, 1), (1, 1), (1, 0), (2, 0), (2, 1), (3, 0), (4, 1), (3, 1),
    (4, 2), (3, 3), (3, 2), (2, 3), (2, 4), (1, 3), (0, 2), (0, 3), (0, 4),
]

GOLDEN_LARGE_PAR = 44

# First optimal path reached by the ordered strategy on GOLDEN_LARGE
GOLDEN_LARGE_PATH = [
    (3, 3), (4, 4), (5, 3), (6, 4), (5, 5), (5, 6), (4, 5), (4, 6), (3, 5), (3, 4),
    (4, 3), (5, 4), (6, 3), (6, 2), (6, 1), (6, 0), (5, 1), (4, 2), (3, 2), (2, 3),
    (2, 4), (1, 3), (2, 2), (1, 2), (2, 1), (3, 0), (4, 0), (4, 1), (3, 1), (2, 0),
    (1, 1), (0, 0), (0, 1), (0, 2), (0, 3), (0, 4), (1, 4), (0, 5), (0, 6), (1, 5),
    (2, 6), (3, 6), (2, 5), (1, 6),
]


def uniform_board(size: int, value: int = 2) -> BoardState:
    return BoardState.from_2d_list([[value] * size for _ in range(size)])


def center_of(board: BoardState) -> Position:
    return Position(board.size // 2, board.size // 2)


def assert_valid_solution(board: BoardState, start: Position, solution) -> None:
    """Solver output must be a legal simple path of the reported length."""
    path = list(solution.optimal_path)
    assert len(path) == solution.optimal_length
    assert len(set(path)) == len(path)
    validate_path(board, path, start)


# ----------------------------------------------------------------------
# Generator
# ----------------------------------------------------------------------

def test_date_string_not_padded():
    """Month and day are written without zero padding."""
    print("\n" + "=" * 60)
    print("TEST: Date string")
    print("=" * 60)

    assert date_string(GOLDEN_DATE) == "2024-3-7"
    assert date_string(datetime.date(2025, 12, 31)) == "2025-12-31"
    print("  [PASS] Date string tests")


def test_date_seed_golden():
    """Rolling hash of "2024-3-7" and per-size offsets."""
    assert date_seed(GOLDEN_DATE) == 2372546256
    assert puzzle_seed(GOLDEN_DATE, GridSize.SMALL) == 2372548256
    assert puzzle_seed(GOLDEN_DATE, GridSize.LARGE) == 2372549256


def test_seeds_differ_by_center_offset():
    """Sizes on the same date are offset by 1000 per center step."""
    for day in range(1, 29):
        date = datetime.date(2024, 2, day)
        small = puzzle_seed(date, GridSize.SMALL)
        large = puzzle_seed(date, GridSize.LARGE)
        assert large - small == (GridSize.LARGE.center - GridSize.SMALL.center) * 1000


def test_seeded_random_stream():
    """First draws of the LCG from a known seed."""
    rng = SeededRandom(0)
    assert rng.next() == 12345 / 0x7FFFFFFF
    assert rng.state == 12345

    rng = SeededRandom(2372548256)
    values = [rng.next_int(1, 5) for _ in range(5)]
    assert values == GOLDEN_SMALL[0]


def test_next_int_never_exceeds_max():
    """A state of exactly 0x7FFFFFFF still yields a value in range."""
    # 230538014 * 1103515245 + 12345 == 0x7FFFFFFF (mod 2**31)
    rng = SeededRandom(230538014)
    assert rng.next_int(1, 5) == 5
    assert rng.state == 0x7FFFFFFF

    rng = SeededRandom(230538014)
    assert rng.next() == 1.0


def test_generate_golden_small():
    """2024-3-7 5x5 reproduces the golden grid."""
    print("\n" + "=" * 60)
    print("TEST: Golden 5x5 grid")
    print("=" * 60)

    puzzle = generate_puzzle(GOLDEN_DATE, GridSize.SMALL)
    for row in puzzle.board.grid:
        print("  " + " ".join(str(v) for v in row))

    assert puzzle.board.to_list() == GOLDEN_SMALL
    assert puzzle.start == Position(2, 2)
    assert puzzle.seed == 2372548256
    print("  [PASS] Golden 5x5 grid")


def test_generate_golden_large():
    """2024-3-7 7x7 reproduces the golden grid."""
    puzzle = generate_puzzle(GOLDEN_DATE, GridSize.LARGE)
    assert puzzle.board.to_list() == GOLDEN_LARGE
    assert puzzle.start == Position(3, 3)


def test_generate_is_deterministic():
    """Repeated calls give identical puzzles."""
    for size in GridSize:
        first = generate_puzzle(GOLDEN_DATE, size)
        second = generate_puzzle(GOLDEN_DATE, size)
        assert first == second
        assert first.board.grid == second.board.grid


def test_generate_accepts_side_and_datetime():
    """Side lengths and datetimes map onto the same puzzle."""
    by_enum = generate_puzzle(GOLDEN_DATE, GridSize.LARGE)
    by_side = generate_puzzle(datetime.datetime(2024, 3, 7, 23, 59), 7)
    assert by_enum == by_side


def test_generate_rejects_unsupported_size():
    with pytest.raises(ValueError):
        generate_puzzle(GOLDEN_DATE, 6)
    with pytest.raises(ValueError):
        GridSize.from_side(9)


def test_values_in_range():
    """Every cell over a year of puzzles is in [1, 5]."""
    date = datetime.date(2024, 1, 1)
    for offset in range(366):
        day = date + datetime.timedelta(days=offset)
        for size in GridSize:
            puzzle = generate_puzzle(day, size)
            assert puzzle.board.size == size.size
            for row in puzzle.board.grid:
                assert all(1 <= v <= 5 for v in row)


def test_sizes_not_trivially_related():
    """The 5x5 grid is not simply the top-left of the 7x7 grid."""
    small = generate_puzzle(GOLDEN_DATE, GridSize.SMALL).board.grid
    large = generate_puzzle(GOLDEN_DATE, GridSize.LARGE).board.grid
    assert [list(row[:5]) for row in large[:5]] != [list(row) for row in small]


# ----------------------------------------------------------------------
# Rules
# ----------------------------------------------------------------------

def test_adjacency():
    center = Position(2, 2)
    assert center.is_adjacent_to(Position(1, 1))
    assert center.is_adjacent_to(Position(3, 2))
    assert not center.is_adjacent_to(center)
    assert not center.is_adjacent_to(Position(0, 2))
    with pytest.raises(TypeError):
        center.is_adjacent_to((1, 1))


def test_is_valid_move_conditions():
    """Each of the four conditions can reject a move on its own."""
    print("\n" + "=" * 60)
    print("TEST: Move rules")
    print("=" * 60)

    board = BoardState.from_2d_list(GOLDEN_SMALL)
    path = [Position(2, 2)]  # value 1

    assert is_valid_move(board, path, Position(1, 2))       # value 1, adjacent
    assert is_valid_move(board, path, Position(1, 1))       # value 2, diagonal
    assert not is_valid_move(board, path, Position(2, 1))   # value 3, step too big
    assert not is_valid_move(board, path, Position(0, 2))   # not adjacent
    assert not is_valid_move(board, path, Position(2, 2))   # already on path
    assert not is_valid_move(board, path, Position(-1, 2))  # off board
    assert not is_valid_move(board, [], Position(1, 2))     # no tail

    longer = path + [Position(1, 2)]
    assert not is_valid_move(board, longer, Position(2, 2))
    print("  [PASS] Move rule tests")


def test_is_valid_move_rejects_off_board_tail():
    board = uniform_board(5)
    with pytest.raises(ValueError):
        is_valid_move(board, [Position(7, 7)], Position(6, 6))


def test_valid_moves_fixed_order():
    """Moves come back in neighbour order."""
    board = uniform_board(3)
    moves = get_valid_moves(board, [Position(1, 1)])
    assert moves == [
        Position(0, 0), Position(0, 1), Position(0, 2),
        Position(1, 0), Position(1, 2),
        Position(2, 0), Position(2, 1), Position(2, 2),
    ]

    board = BoardState.from_2d_list(GOLDEN_SMALL)
    assert get_valid_moves(board, [Position(2, 2)]) == [
        Position(1, 1), Position(1, 2), Position(3, 1), Position(3, 3),
    ]


def test_board_rejects_non_square():
    with pytest.raises(ValueError):
        BoardState.from_2d_list([[1, 2], [3]])
    with pytest.raises(ValueError):
        BoardState.from_2d_list([])


# ----------------------------------------------------------------------
# Solver
# ----------------------------------------------------------------------

def test_strategy_registry():
    names = get_strategy_names()
    assert "ordered" in names
    assert "unordered" in names
    assert get_default_strategy_name() == "ordered"
    with pytest.raises(ValueError):
        create_strategy("nonexistent")
    assert resolve_strategy_name(None) == "ordered"
    assert resolve_strategy_name("unordered") == "unordered"
    with pytest.raises(ValueError):
        resolve_strategy_name("nonexistent")

    ordered_cls = type(create_strategy("ordered"))
    with pytest.raises(ValueError):
        register_strategy(type("Impostor", (ordered_cls,), {}))
    assert register_strategy(ordered_cls) is ordered_cls


@pytest.mark.parametrize("size", [3, 5, 7])
def test_uniform_board_full_coverage(size):
    """All-equal boards allow every move, so par is N*N."""
    board = uniform_board(size)
    start = center_of(board)
    solution = solve_optimal_path(board, start)

    assert solution.optimal_length == size * size
    assert solution.covers_board(board.total_cells)
    assert_valid_solution(board, start, solution)


def test_unordered_full_coverage():
    board = uniform_board(5)
    solution = solve_optimal_path(board, center_of(board), strategy_name="unordered")
    assert solution.optimal_length == 25


def test_isolated_start():
    """A start cell with no compatible neighbour has par 1."""
    board = BoardState.from_2d_list([[5, 5, 5], [5, 1, 5], [5, 5, 5]])
    solution = solve_optimal_path(board, Position(1, 1))
    assert solution.optimal_length == 1
    assert solution.optimal_path == (Position(1, 1),)


def test_small_component():
    """Only the 1-valued corner block is reachable."""
    board = BoardState.from_2d_list([[1, 1, 5], [1, 1, 5], [5, 5, 5]])
    solution = solve_optimal_path(board, Position(1, 1))
    assert solution.optimal_length == 4
    assert_valid_solution(board, Position(1, 1), solution)


def test_tie_break_first_found():
    """Among equal-length optima the first in exploration order wins."""
    board = BoardState.from_2d_list([[1, 2, 3], [4, 3, 2], [5, 4, 1]])
    start = Position(1, 1)

    ordered = solve_optimal_path(board, start, strategy_name="ordered")
    unordered = solve_optimal_path(board, start, strategy_name="unordered")

    assert ordered.optimal_length == unordered.optimal_length == 5
    assert ordered.optimal_path == tuple(Position(r, c) for r, c in [(1, 1), (0, 2), (0, 1), (1, 2), (2, 2)])
    assert unordered.optimal_path == tuple(Position(r, c) for r, c in [(1, 1), (0, 1), (0, 2), (1, 2), (2, 2)])


def test_golden_par():
    """Par score of the 2024-3-7 5x5 puzzle."""
    print("\n" + "=" * 60)
    print("TEST: Golden 5x5 par")
    print("=" * 60)

    puzzle = generate_puzzle(GOLDEN_DATE, GridSize.SMALL)
    solution = solve_optimal_path(puzzle.board, puzzle.start)

    print(f"  Par: {solution.optimal_length}")
    print(f"  States: {solution.metrics.states_explored}")
    print(f"  Time: {solution.metrics.computation_time_ms:.1f}ms")

    assert solution.optimal_length == GOLDEN_SMALL_PAR
    assert solution.optimal_path == tuple(Position(r, c) for r, c in GOLDEN_SMALL_PATH)
    assert solution.metrics.strategy_name == "ordered"
    assert not solution.was_cancelled
    assert_valid_solution(puzzle.board, puzzle.start, solution)
    print("  [PASS] Golden par")


def test_golden_large_par():
    """The 2024-3-7 7x7 puzzle is solved to completion."""
    puzzle = generate_puzzle(GOLDEN_DATE, GridSize.LARGE)
    solution = solve_optimal_path(puzzle.board, puzzle.start)

    assert solution.optimal_length == GOLDEN_LARGE_PAR
    assert solution.optimal_path == tuple(Position(r, c) for r, c in GOLDEN_LARGE_PATH)
    assert not solution.was_cancelled
    assert solution.metrics.pruned_branches > 0
    assert_valid_solution(puzzle.board, puzzle.start, solution)


@pytest.mark.parametrize("date,par", [
    (GOLDEN_DATE, GOLDEN_LARGE_PAR),
    (datetime.date(2025, 1, 2), 39),
    (datetime.date(2025, 1, 4), 37),
])
def test_large_ordering_does_not_change_length(date, par):
    """Both strategies agree on 7x7 boards too."""
    puzzle = generate_puzzle(date, GridSize.LARGE)
    ordered = solve_optimal_path(puzzle.board, puzzle.start, strategy_name="ordered")
    unordered = solve_optimal_path(puzzle.board, puzzle.start, strategy_name="unordered")

    assert ordered.optimal_length == unordered.optimal_length == par
    assert not ordered.was_cancelled
    assert not unordered.was_cancelled
    assert_valid_solution(puzzle.board, puzzle.start, ordered)
    assert_valid_solution(puzzle.board, puzzle.start, unordered)


def test_ordering_does_not_change_length():
    """Branch ordering affects speed only, never the optimum."""
    for day in range(1, 6):
        puzzle = generate_puzzle(datetime.date(2025, 1, day), GridSize.SMALL)
        ordered = solve_optimal_path(puzzle.board, puzzle.start, strategy_name="ordered")
        unordered = solve_optimal_path(puzzle.board, puzzle.start, strategy_name="unordered")

        assert ordered.optimal_length == unordered.optimal_length
        assert_valid_solution(puzzle.board, puzzle.start, ordered)
        assert_valid_solution(puzzle.board, puzzle.start, unordered)


def test_solver_idempotent():
    puzzle = generate_puzzle(datetime.date(2025, 1, 1), GridSize.SMALL)
    first = solve_optimal_path(puzzle.board, puzzle.start)
    second = solve_optimal_path(puzzle.board, puzzle.start)

    assert first.optimal_length == second.optimal_length == 20
    assert first.optimal_path == second.optimal_path


def test_solver_rejects_off_board_start():
    board = uniform_board(5)
    with pytest.raises(ValueError):
        solve_optimal_path(board, Position(5, 0))


def test_cancellation_returns_partial_result():
    """A pre-set cancel flag stops the search before the first move."""
    puzzle = generate_puzzle(GOLDEN_DATE, GridSize.LARGE)
    cancel = threading.Event()
    cancel.set()

    solution = solve_optimal_path(puzzle.board, puzzle.start, cancel_flag=cancel)

    assert solution.was_cancelled
    assert not solution.is_complete
    assert solution.optimal_length == 1
    assert solution.optimal_path == (puzzle.start,)


def test_cancellation_mid_search():
    """Cancelling while the search runs keeps the best path found so far."""
    puzzle = generate_puzzle(datetime.date(2025, 1, 1), GridSize.LARGE)
    cancel = threading.Event()

    solution = solve_optimal_path(
        puzzle.board, puzzle.start,
        cancel_flag=cancel,
        progress_callback=lambda length: cancel.set(),
    )

    assert solution.was_cancelled
    assert 1 < solution.optimal_length <= 40
    assert_valid_solution(puzzle.board, puzzle.start, solution)


def test_progress_reports_increasing_lengths():
    board = uniform_board(5)
    reported = []
    solve_optimal_path(board, center_of(board), progress_callback=reported.append)

    assert reported == sorted(reported)
    assert reported[-1] == 25


def test_context_direct_use():
    """Strategies can be driven directly through a context."""
    board = uniform_board(3)
    strategy = create_strategy("unordered")
    solution = strategy.solve(SolutionContext(board=board, start=Position(1, 1)))
    assert solution.optimal_length == 9
    assert solution.metrics.strategy_name == "unordered"
    assert solution.to_dict()["optimal_path"][0] == [1, 1]


def test_concurrent_solves():
    """Solver calls share no state and can run on several threads."""
    boards = [generate_puzzle(datetime.date(2025, 1, d), GridSize.SMALL) for d in (1, 2, 3)]
    results = {}

    def run(index, puzzle):
        results[index] = solve_optimal_path(puzzle.board, puzzle.start).optimal_length

    threads = [threading.Thread(target=run, args=(i, p)) for i, p in enumerate(boards)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    for index, puzzle in enumerate(boards):
        assert results[index] == solve_optimal_path(puzzle.board, puzzle.start).optimal_length


def main():
    """Run all tests."""
    print("\n" + "#" * 60)
    print("# SOLVER VALIDATION TESTS")
    print("#" * 60)

    sys.exit(pytest.main([__file__, "-v"]))


if __name__ == "__main__":
    main()

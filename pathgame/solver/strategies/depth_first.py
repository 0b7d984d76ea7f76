"""
Depth-First Strategy - Exhaustive longest simple path search.

Explores every path from the start cell in fixed neighbour order. The
search keeps one visited matrix and one path buffer for the whole call and
walks an explicit frame stack instead of recursing, so 49-deep searches
never touch the interpreter's recursion limit.

Two exact cuts keep 7x7 boards interactive. A child is skipped when the
block-cut bound (SolverStrategy.extension_bound) shows it cannot lead past
the best length. A child is also skipped when the same tail with the same
visited cells was already searched: its subtree holds the same paths, and
the best has only grown since. Neither cut removes a path longer than the
best at the time, so the result and its tie-break match a plain search.

Subclasses change the order in which children are explored by overriding
order_candidates(); the result length never depends on it.
"""

import logging
import time
from typing import Iterator, List, Set

from ..base import Cell, NeighborTable, SolverStrategy, VisitedMatrix
from ..context import SolutionContext
from ..solution import Solution, SolutionMetrics
from ..factory import register_strategy

logger = logging.getLogger(__name__)


@register_strategy
class DepthFirstStrategy(SolverStrategy):
    """
    Exhaustive depth-first search without branch ordering.

    Algorithm:
        1. Mark the start visited; the one-cell path is the first best
        2. Enter a cell: record the path if it beats the best
        3. Stop everything once the best covers the whole board
        4. Skip a child whose (tail, visited) state was already searched
        5. Skip a child if the longest block chain reachable from it
           could not beat the best
        6. Unmark and pop on the way back up

    Tie-break: the best is only replaced by a strictly longer path, so
    among equally long optimal paths the first one reached in
    exploration order wins.
    """
    name = "unordered"
    description = "Exhaustive DFS in fixed neighbour order"

    # How many expanded states between cancellation checks
    CANCEL_CHECK_INTERVAL = 256

    def order_candidates(self, table: NeighborTable, visited: VisitedMatrix,
                         candidates: List[Cell]) -> List[Cell]:
        """
        Order the children of a search node.

        Args:
            table: Neighbour table of the board
            visited: Visited matrix (current cell already marked)
            candidates: Legal children in neighbour order

        Returns:
            Children in the order to explore them
        """
        return candidates

    def solve(self, context: SolutionContext) -> Solution:
        """
        Compute the longest path from the start cell.

        Args:
            context: Solution context with board, start and cancellation

        Returns:
            Solution with optimal length, path and metrics
        """
        start_time = time.perf_counter()

        board = context.board
        cols = board.cols
        total_cells = board.total_cells
        table = self.build_neighbor_table(board)

        start = (context.start.row, context.start.col)
        visited: VisitedMatrix = [[False] * cols for _ in range(board.rows)]
        visited[start[0]][start[1]] = True
        path: List[Cell] = [start]

        # Visited cells as a bit mask, so a search state hashes cheaply
        mask = 1 << (start[0] * cols + start[1])
        searched: Set[int] = set()

        best_length = 1
        best_path: List[Cell] = [start]
        states_explored = 1
        pruned_branches = 0
        repeated_states = 0
        was_cancelled = False

        logger.debug(f"Search started: {board.rows}x{board.cols} from {context.start}, strategy={self.name}")

        # One frame per path cell: the children still to try from that cell
        stack: List[Iterator[Cell]] = []
        if self._check_cancelled(context):
            was_cancelled = True
        elif best_length < total_cells:
            stack.append(iter(self._children(table, visited, start)))

        while stack:
            child = next(stack[-1], None)

            if child is None:
                stack.pop()
                if len(path) > 1:
                    r, c = path.pop()
                    visited[r][c] = False
                    mask &= ~(1 << (r * cols + c))
                continue

            index = child[0] * cols + child[1]
            child_mask = mask | (1 << index)
            state = child_mask * total_cells + index
            if state in searched:
                repeated_states += 1
                continue
            searched.add(state)

            if len(path) + 1 + self.extension_bound(table, visited, child) <= best_length:
                pruned_branches += 1
                continue

            visited[child[0]][child[1]] = True
            mask = child_mask
            path.append(child)
            states_explored += 1

            if len(path) > best_length:
                best_length = len(path)
                best_path = list(path)
                context.report_progress(best_length)
                if best_length == total_cells:
                    break

            if states_explored % self.CANCEL_CHECK_INTERVAL == 0 and self._check_cancelled(context):
                was_cancelled = True
                break

            stack.append(iter(self._children(table, visited, child)))

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            f"Search finished: best={best_length}/{total_cells}, states={states_explored}, "
            f"pruned={pruned_branches}, repeated={repeated_states}, cancelled={was_cancelled} ({elapsed_ms:.1f}ms)"
        )

        return Solution(
            optimal_length=best_length,
            optimal_path=self._to_positions(best_path),
            was_cancelled=was_cancelled,
            metrics=SolutionMetrics(
                computation_time_ms=elapsed_ms,
                states_explored=states_explored,
                pruned_branches=pruned_branches,
                repeated_states=repeated_states,
                strategy_name=self.name,
            ),
        )

    def _children(self, table: NeighborTable, visited: VisitedMatrix, cell: Cell) -> List[Cell]:
        candidates = self.find_valid_moves(table, visited, cell)
        if len(candidates) < 2:
            return candidates
        return self.order_candidates(table, visited, candidates)

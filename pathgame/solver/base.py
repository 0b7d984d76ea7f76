"""
Base Strategy Module - Abstract base class for solving strategies.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple

from .board import BoardState, Position
from .context import SolutionContext
from .rules import NEIGHBOR_OFFSETS, values_compatible
from .solution import Solution


Cell = Tuple[int, int]
NeighborTable = List[List[List[Cell]]]
VisitedMatrix = List[List[bool]]


class SolverStrategy(ABC):
    """
    Abstract base class for all solving strategies.

    Subclasses must implement the solve() method and define
    name and description class attributes.

    Strategies keep no state between calls; all mutable search state
    lives inside solve(), so one instance can serve several threads.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description
    """
    name: str = "base"
    description: str = "Base strategy"

    @abstractmethod
    def solve(self, context: SolutionContext) -> Solution:
        """
        Compute the longest path from context.start.

        Must periodically check context.is_cancelled() and return
        the best path so far if True.

        Args:
            context: Solution context with board, start, cancellation, progress

        Returns:
            Solution with optimal length, path and metrics
        """
        pass

    def build_neighbor_table(self, board: BoardState) -> NeighborTable:
        """
        Precompute, for every cell, the neighbours a move may go to.

        Bounds, adjacency and the value step never change during a
        search, so only the visited check is left for the hot loop.
        Each list keeps NEIGHBOR_OFFSETS order.

        Args:
            board: Board to analyse

        Returns:
            table[row][col] -> list of (row, col) neighbours
        """
        grid = board.grid
        rows = board.rows
        cols = board.cols
        table: NeighborTable = []

        for r in range(rows):
            row_table = []
            for c in range(cols):
                value = grid[r][c]
                cells = []
                for d_row, d_col in NEIGHBOR_OFFSETS:
                    nr = r + d_row
                    nc = c + d_col
                    if 0 <= nr < rows and 0 <= nc < cols and values_compatible(value, grid[nr][nc]):
                        cells.append((nr, nc))
                row_table.append(cells)
            table.append(row_table)

        return table

    def find_valid_moves(self, table: NeighborTable, visited: VisitedMatrix, cell: Cell) -> List[Cell]:
        """
        Legal next moves from cell, using the visited matrix for the path check.

        Args:
            table: Neighbour table from build_neighbor_table()
            visited: Visited matrix of the running search
            cell: Current tail (row, col)

        Returns:
            Unvisited compatible neighbours in neighbour order
        """
        return [n for n in table[cell[0]][cell[1]] if not visited[n[0]][n[1]]]

    def count_onward_moves(self, table: NeighborTable, visited: VisitedMatrix, cell: Cell) -> int:
        """Number of legal moves that would follow a step onto cell."""
        count = 0
        for nr, nc in table[cell[0]][cell[1]]:
            if not visited[nr][nc]:
                count += 1
        return count

    def extension_bound(self, table: NeighborTable, visited: VisitedMatrix, root: Cell) -> int:
        """
        Upper bound on how many cells a path can still add after stepping onto root.

        Only unvisited cells reachable from root count. Within that region,
        a path that leaves a biconnected block through a cut cell can never
        come back, so it runs down a single chain of the block-cut tree
        rooted at root. The bound is the largest chain total, found with
        one Tarjan pass.

        Args:
            table: Neighbour table from build_neighbor_table()
            visited: Visited matrix of the running search (root unmarked)
            root: Cell the path would move to next

        Returns:
            Number of additional cells, not counting root itself
        """
        rows = len(visited)
        cols = len(visited[0])
        disc = [[-1] * cols for _ in range(rows)]
        low = [[0] * cols for _ in range(rows)]
        # Longest block chain hanging below each cell
        down = [[0] * cols for _ in range(rows)]
        pending: List[Cell] = []
        counter = [0]

        def visit(r: int, c: int) -> None:
            disc[r][c] = low[r][c] = counter[0]
            counter[0] += 1
            for nr, nc in table[r][c]:
                if visited[nr][nc]:
                    continue
                if disc[nr][nc] < 0:
                    pending.append((nr, nc))
                    visit(nr, nc)
                    if low[nr][nc] < low[r][c]:
                        low[r][c] = low[nr][nc]
                    if low[nr][nc] >= disc[r][c]:
                        # (r, c) separates this block from the rest
                        size = 0
                        exit_gain = 0
                        while True:
                            br, bc = pending.pop()
                            size += 1
                            if down[br][bc] > exit_gain:
                                exit_gain = down[br][bc]
                            if br == nr and bc == nc:
                                break
                        if size + exit_gain > down[r][c]:
                            down[r][c] = size + exit_gain
                elif disc[nr][nc] < low[r][c]:
                    low[r][c] = disc[nr][nc]

        visit(root[0], root[1])
        return down[root[0]][root[1]]

    def _check_cancelled(self, context: SolutionContext) -> bool:
        """
        Convenience method to check cancellation.

        Args:
            context: Solution context

        Returns:
            True if strategy should stop
        """
        return context.is_cancelled()

    @staticmethod
    def _to_positions(cells: List[Cell]) -> Tuple[Position, ...]:
        return tuple(Position(r, c) for r, c in cells)

"""
Solution Module - Result of an optimal path computation.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .board import Position


@dataclass
class SolutionMetrics:
    """
    Performance metrics for solution computation.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Number of path states visited by the search
        pruned_branches: Number of candidate branches skipped by the bound
        repeated_states: Number of candidates skipped because the same
            (tail, visited cells) state was already searched
        strategy_name: Name of strategy that computed this solution
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    pruned_branches: int = 0
    repeated_states: int = 0
    strategy_name: str = ""


@dataclass
class Solution:
    """
    Longest path found from the start cell.

    Attributes:
        optimal_length: Number of cells on the best path (the par score)
        optimal_path: The best path, start cell first
        was_cancelled: True if stopped before the search finished
        metrics: Performance statistics
    """
    optimal_length: int = 0
    optimal_path: Tuple[Position, ...] = ()
    was_cancelled: bool = False
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def start(self) -> Position:
        """Start cell of the optimal path."""
        return self.optimal_path[0]

    @property
    def end(self) -> Position:
        """Last cell of the optimal path."""
        return self.optimal_path[-1]

    @property
    def is_complete(self) -> bool:
        """True if the search ran to the end, so the length is the true optimum."""
        return not self.was_cancelled

    def covers_board(self, total_cells: int) -> bool:
        """True if the path visits every cell."""
        return self.optimal_length == total_cells

    def to_dict(self) -> Dict[str, Any]:
        """Plain integers and [row, col] pairs for serialization."""
        return {
            "optimal_length": self.optimal_length,
            "optimal_path": [p.to_list() for p in self.optimal_path],
        }

    def path_as_list(self) -> List[Position]:
        return list(self.optimal_path)

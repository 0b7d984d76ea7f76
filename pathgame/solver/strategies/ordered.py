"""
Ordered Strategy - Exhaustive search exploring the most constrained cells first.

Same search and same result as the unordered strategy; only the order of
children changes. Each legal child is scored by how many legal moves it
would have next, and children are explored in ascending score order.
Cells with few exits tend to be dead ends, so long paths turn up earlier
and the length bound prunes more.
"""

from typing import List

from ..base import Cell, NeighborTable, VisitedMatrix
from ..factory import register_strategy
from .depth_first import DepthFirstStrategy


@register_strategy
class OrderedStrategy(DepthFirstStrategy):
    """
    Depth-first search with fewest-onward-moves-first branch ordering.

    Sorting is stable, so children with equal scores keep neighbour
    order and the result stays deterministic.
    """
    name = "ordered"
    description = "Exhaustive DFS, most constrained branch first (default)"

    def order_candidates(self, table: NeighborTable, visited: VisitedMatrix,
                         candidates: List[Cell]) -> List[Cell]:
        return sorted(candidates, key=lambda cell: self.count_onward_moves(table, visited, cell))

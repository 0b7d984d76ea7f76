"""
Strategies Package - Concrete strategy implementations.

Import this module to register all built-in strategies.
"""

from .depth_first import DepthFirstStrategy
from .ordered import OrderedStrategy

__all__ = [
    "DepthFirstStrategy",
    "OrderedStrategy",
]

"""Services layer - Application orchestration.

Available services:
- PathfindingService: Loads the graph, answers path and tree queries,
  exports tree edges
"""

from .pathfinding import PathfindingService

__all__ = ["PathfindingService"]

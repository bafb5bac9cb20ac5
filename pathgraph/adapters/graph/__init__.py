"""Graph adapters - Implementations of graph-related ports.

Available implementations:
- CSVGraphRepository: Loads nodes and edges from two CSV tables
- MixedFileGraphRepository: Loads node and edge records from one file
- CSVEdgeWriter: Writes and re-reads edge lists
"""

from .csv_repository import CSVGraphRepository
from .edge_writer import CSVEdgeWriter
from .mixed_repository import MixedFileGraphRepository

__all__ = ["CSVGraphRepository", "MixedFileGraphRepository", "CSVEdgeWriter"]

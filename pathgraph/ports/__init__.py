"""Ports layer - Abstract interfaces (Protocols) for the package.

Ports define the contracts between the engine and external adapters.
They enable dependency injection and make the system testable.
"""

from .graph import EdgeWriterPort, GraphRepositoryPort

__all__ = [
    "GraphRepositoryPort",
    "EdgeWriterPort",
]

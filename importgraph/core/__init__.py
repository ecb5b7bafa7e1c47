"""
Core module containing configuration and the exception hierarchy.
"""

from importgraph.core.config import Config, GraphOptions, ImportGraphConfig
from importgraph.core.exceptions import (
    ImportGraphError,
    EntryInvalidError,
    BuildError,
    ReadFailureError,
    UnresolvedReferenceError,
    NodeNotFoundError,
    CyclicDependencyError,
)

__all__ = [
    "Config",
    "GraphOptions",
    "ImportGraphConfig",
    "ImportGraphError",
    "EntryInvalidError",
    "BuildError",
    "ReadFailureError",
    "UnresolvedReferenceError",
    "NodeNotFoundError",
    "CyclicDependencyError",
]

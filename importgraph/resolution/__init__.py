"""
Resolution of raw references to files on disk.
"""

from importgraph.resolution.resolver import PathResolver

__all__ = [
    "PathResolver",
]

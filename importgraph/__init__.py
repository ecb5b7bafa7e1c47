"""
Import Graph.

Builds a directed dependency graph over source files by statically
extracting import-like references, resolving them to paths on disk,
and exposing ancestor and descendant traversal over the result.
"""

__version__ = "1.0.0"
__author__ = "Import Graph"

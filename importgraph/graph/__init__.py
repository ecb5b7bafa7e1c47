"""
Dependency graph construction and traversal.

Provides the node store, the asynchronous builder that populates it,
and ancestor/descendant traversal over the finished graph.
"""

from importgraph.graph.node import Node
from importgraph.graph.dependency_graph import DependencyGraph
from importgraph.graph.builder import GraphBuilder

__all__ = [
    "Node",
    "DependencyGraph",
    "GraphBuilder",
]

"""
Dependency graph data structures.

Holds the node store of one graph build and the traversal engine
that walks it. Analysis queries (cycles, build order, entry points)
go through a NetworkX view of the child edges.
"""

import logging
import os
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Set

import networkx as nx

from importgraph.core.config import GraphOptions
from importgraph.core.exceptions import CyclicDependencyError, NodeNotFoundError
from importgraph.graph.node import Node

logger = logging.getLogger(__name__)

EdgeSelector = Callable[[Node], Iterable[str]]
Observer = Callable[[str], None]


def select_children(node: Node) -> Iterable[str]:
    return node.children


def select_parents(node: Node) -> Iterable[str]:
    return node.parents


class DependencyGraph:
    """
    File dependency graph.

    Maps absolute file paths to :class:`Node` records. Nodes are only
    ever added, and lookup-or-create never suspends, so concurrent
    discoveries of one path always share a single node.
    """

    def __init__(self, options: Optional[GraphOptions] = None):
        self.options = options or GraphOptions()
        self.nodes: Dict[str, Node] = {}

    def __contains__(self, path: str) -> bool:
        return self.get_node(path) is not None

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes.values())

    @property
    def load_paths(self) -> List[str]:
        return self.options.load_paths

    def get_or_create(self, path: str) -> Node:
        node = self.nodes.get(path)
        if node is None:
            node = self.nodes[path] = Node(path=path)
        return node

    def get_node(self, path: str) -> Optional[Node]:
        """
        Find a node by absolute path or by a path relative to a load path.

        Relative paths are tried against each load path in order, then
        against the current working directory.
        """
        node = self.nodes.get(path)
        if node is not None:
            return node

        if not os.path.isabs(path):
            for load_path in self.load_paths:
                node = self.nodes.get(os.path.join(load_path, path))
                if node is not None:
                    return node

        return self.nodes.get(os.path.realpath(path))

    def normalize_parent(self, path: str) -> str:
        """
        Display form of a parent path.

        Strips the first load path that is a directory prefix of ``path``.
        Only used for reporting: stored parent edges stay absolute, since
        files under different load paths may share a relative path.
        """
        if not self.options.relative_parents:
            return path
        for load_path in self.load_paths:
            prefix = load_path.rstrip(os.sep) + os.sep
            if path.startswith(prefix):
                return path[len(prefix):]
        return path

    def link(self, parent_path: str, child_path: str) -> bool:
        """
        Record the edge pair ``parent -> child``.

        Returns:
            True if the child edge is new.
        """
        parent = self.get_or_create(parent_path)
        child = self.get_or_create(child_path)
        added = parent.add_child(child.path)
        child.add_parent(parent.path)
        return added

    def visit(
        self,
        path: str,
        observer: Observer,
        edge_selector: EdgeSelector,
        visited: Optional[Set[str]] = None,
    ) -> None:
        """
        Depth-first, pre-order walk from ``path``.

        Every reachable neighbor is reported to ``observer`` exactly once,
        before the walk descends into it. The visited set is shared by the
        whole walk, so diamonds and cycles are reported once and terminate.

        Raises:
            NodeNotFoundError: If ``path`` was never processed in this graph.
        """
        start = self.get_node(path)
        if start is None or not start.processed:
            raise NodeNotFoundError(path)

        if visited is None:
            visited = set()

        # Explicit stack of edge iterators keeps deep chains off the call stack
        stack = [iter(list(edge_selector(start)))]
        while stack:
            for neighbor in stack[-1]:
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                observer(neighbor)
                node = self.get_node(neighbor)
                if node is None:
                    logger.debug(f"No node for edge target {neighbor}")
                    stack.append(iter(()))
                else:
                    stack.append(iter(list(edge_selector(node))))
                break
            else:
                stack.pop()

    def visit_ancestors(self, path: str, observer: Observer) -> None:
        """
        Visit all files that transitively reference ``path``.

        Ancestors are reported in their normalized form, see
        :meth:`normalize_parent`.
        """
        self.visit(
            path,
            lambda ancestor: observer(self.normalize_parent(ancestor)),
            select_parents,
        )

    def visit_descendants(self, path: str, observer: Observer) -> None:
        """Visit all files ``path`` transitively references."""
        self.visit(path, observer, select_children)

    def ancestors(self, path: str) -> List[str]:
        found = []
        self.visit_ancestors(path, found.append)
        return found

    def descendants(self, path: str) -> List[str]:
        found = []
        self.visit_descendants(path, found.append)
        return found

    def to_networkx(self) -> nx.DiGraph:
        """Build a NetworkX view of the child edges."""
        graph = nx.DiGraph()
        for node in self.nodes.values():
            graph.add_node(node.path, processed=node.processed, included=node.included)
        for node in self.nodes.values():
            for child in node.children:
                graph.add_edge(node.path, child)
        return graph

    def find_cycles(self) -> List[List[str]]:
        """
        Find every elementary import cycle.

        Each cycle starts at its smallest path; the list is sorted.
        """
        cycles = []
        for cycle in nx.simple_cycles(self.to_networkx()):
            start = cycle.index(min(cycle))
            cycles.append(cycle[start:] + cycle[:start])
        return sorted(cycles)

    def build_order(self) -> List[str]:
        """
        Order files so that every file comes after the files it references.

        Raises:
            CyclicDependencyError: If the graph contains a cycle.
        """
        graph = self.to_networkx()
        try:
            return list(nx.lexicographical_topological_sort(graph.reverse(copy=False)))
        except nx.NetworkXUnfeasible:
            cycle = [source for source, _ in nx.find_cycle(graph)]
            raise CyclicDependencyError(cycle)

    def entry_points(self) -> List[str]:
        """Processed, included files that no other file references."""
        return sorted(
            node.path for node in self.nodes.values()
            if node.processed and node.included and not node.parents
        )

    def get_statistics(self) -> Dict[str, Any]:
        """Get graph statistics."""
        graph = self.to_networkx()
        if len(self.nodes) == 0:
            return {
                "node_count": 0,
                "edge_count": 0,
                "processed_count": 0,
                "excluded_count": 0,
            }

        return {
            "node_count": len(self.nodes),
            "edge_count": graph.number_of_edges(),
            "processed_count": sum(1 for n in self.nodes.values() if n.processed),
            "excluded_count": sum(1 for n in self.nodes.values() if n.included is False),
            "entry_point_count": len(self.entry_points()),
            "density": nx.density(graph),
            "connected_components": nx.number_weakly_connected_components(graph),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert graph to dictionary for serialization."""
        return {
            "load_paths": list(self.load_paths),
            "nodes": [node.to_dict() for node in self.nodes.values()],
            "statistics": self.get_statistics(),
        }

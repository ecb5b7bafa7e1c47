"""
Main engine for the import graph.

Provides a high-level interface for validating an entry point and
building the complete dependency graph behind it.
"""

import asyncio
import glob
import logging
import os
from typing import List, Optional, Sequence, Union

from importgraph.core.config import Config, GraphOptions, ImportGraphConfig
from importgraph.core.exceptions import EntryInvalidError
from importgraph.graph.builder import GraphBuilder
from importgraph.graph.dependency_graph import DependencyGraph
from importgraph.utils.validation import validate_entry

logger = logging.getLogger(__name__)

Entry = Union[str, os.PathLike, Sequence[Union[str, os.PathLike]]]


class ImportGraphEngine:
    """
    Builds dependency graphs for files, directories and glob patterns.

    Directory entries are scanned and also searched when resolving
    references. Files and patterns become seeds directly.
    """

    def __init__(self, config: ImportGraphConfig = None):
        self.config = config or Config.get()

    @property
    def options(self) -> GraphOptions:
        return self.config.graph

    def _validate(self, entries: List[str]) -> List[tuple]:
        classified = []
        for entry in entries:
            entry_type, is_valid, error = validate_entry(entry)
            if not is_valid:
                raise EntryInvalidError(entry, error)
            classified.append((entry_type, entry))
        return classified

    async def build_async(self, entry: Entry) -> DependencyGraph:
        """
        Build the dependency graph for an entry point.

        Args:
            entry: A file, a directory, a glob pattern, or a list of those.

        Returns:
            The completed DependencyGraph.

        Raises:
            EntryInvalidError: Before any file is read, if an entry is invalid.
            ReadFailureError: If a discovered file cannot be read.
        """
        if isinstance(entry, (str, os.PathLike)):
            entries = [os.fspath(entry)]
        else:
            entries = [os.fspath(e) for e in entry]

        classified = self._validate(entries)
        logger.info(f"Building import graph for {', '.join(entries)}")

        graph = DependencyGraph(self.options)
        builder = GraphBuilder(graph)

        if all(entry_type == "directory" for entry_type, _ in classified):
            return await builder.scan(*(path for _, path in classified))

        seeds = []
        for entry_type, path in classified:
            if entry_type == "directory":
                seeds.extend(await builder.discover(builder.add_scan_dir(path)))
            elif entry_type == "pattern":
                seeds.extend(sorted(glob.glob(path, recursive=True)))
            else:
                seeds.append(path)

        return await builder.build(seeds)

    def build(self, entry: Entry) -> DependencyGraph:
        """Synchronous wrapper around :meth:`build_async`."""
        return asyncio.run(self.build_async(entry))


async def build_graph(entry: Entry, options: Optional[GraphOptions] = None) -> DependencyGraph:
    """Build a graph with explicit options instead of the global configuration."""
    config = ImportGraphConfig(graph=options or GraphOptions())
    return await ImportGraphEngine(config).build_async(entry)


def create_graph(entry: Entry, options: Optional[GraphOptions] = None) -> DependencyGraph:
    """Blocking form of :func:`build_graph`."""
    return asyncio.run(build_graph(entry, options))

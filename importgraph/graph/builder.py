"""
Graph builder for constructing dependency graphs from files on disk.

Reads each discovered file, extracts its references, resolves them to
paths and recursively expands every newly found file. Work fans out
without a static task list; completion is detected by a counted
barrier that reaches zero once no file pipeline is outstanding.
"""

import asyncio
import logging
import os
import stat
from datetime import datetime
from typing import Iterable, List, Optional

from importgraph.core.exceptions import ReadFailureError, UnresolvedReferenceError
from importgraph.graph.dependency_graph import DependencyGraph
from importgraph.parsing.extractor import ReferenceExtractor
from importgraph.resolution.resolver import PathResolver
from importgraph.utils.concurrency import WaitGroup
from importgraph.utils.fs import AsyncFileSystem

logger = logging.getLogger(__name__)


class GraphBuilder:
    """
    Populates a :class:`DependencyGraph`.

    Each file goes through verify, classify, read, extract/resolve/recurse.
    Graph mutations happen between filesystem awaits, never across one,
    so they are atomic with respect to other in-flight files.
    """

    def __init__(
        self,
        graph: DependencyGraph,
        extractor: Optional[ReferenceExtractor] = None,
        resolver: Optional[PathResolver] = None,
        fs: Optional[AsyncFileSystem] = None,
        scan_dirs: Optional[Iterable[str]] = None,
    ):
        self.graph = graph
        self.options = graph.options
        self.fs = fs or AsyncFileSystem()
        self.extractor = extractor or ReferenceExtractor(self.options.dependency_pattern)
        self.resolver = resolver or PathResolver(self.options.extensions, fs=self.fs)
        self.scan_dirs: List[str] = list(scan_dirs or [])
        self._pending = WaitGroup()
        self._tasks = set()
        self._errors: List[BaseException] = []

    @property
    def pending(self) -> int:
        """Number of file pipelines not yet settled."""
        return self._pending.count

    def schedule(self, path: str, parent_path: Optional[str] = None) -> None:
        """Queue ``path`` for processing without waiting for it."""
        self._pending.add()
        task = asyncio.create_task(self._run(path, parent_path))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def wait(self) -> DependencyGraph:
        """
        Wait until no file pipeline is outstanding.

        Raises:
            ReadFailureError: The first failure recorded by any pipeline.
        """
        await self._pending.wait()
        if self._errors:
            error = self._errors[0]
            self._errors.clear()
            raise error
        return self.graph

    async def add_file(self, path: str, parent_path: Optional[str] = None) -> DependencyGraph:
        """
        Add one file and everything it transitively references.

        A file that is already processed is not read again, but the
        edge from ``parent_path`` is still recorded.
        """
        self.schedule(os.path.realpath(path), parent_path)
        return await self.wait()

    async def build(self, seeds: Iterable[str]) -> DependencyGraph:
        """Build the graph from explicit seed files."""
        seeds = [os.path.realpath(seed) for seed in seeds]
        logger.info(f"Building graph from {len(seeds)} seed file(s)")
        for seed in seeds:
            self.schedule(seed)
        graph = await self.wait()
        logger.info(f"Graph built: {len(graph)} nodes")
        return graph

    async def discover(self, directory: str) -> List[str]:
        """
        List files under ``directory`` matching the accepted extensions.

        When extension prefixes are configured, only names ending in
        ``<prefix>.<extension>`` are kept.
        """
        prefixes = self.options.extension_prefixes or [""]
        suffixes = tuple(
            f"{prefix}.{ext}"
            for prefix in prefixes
            for ext in self.options.extensions
        )
        files = await self.fs.list_files(directory)
        return [
            os.path.realpath(path) for path in files
            if os.path.basename(path).endswith(suffixes)
        ]

    def add_scan_dir(self, directory: str) -> str:
        """Register ``directory`` as a search directory; returns its real path."""
        directory = os.path.realpath(directory)
        if directory not in self.scan_dirs:
            self.scan_dirs.append(directory)
        return directory

    async def scan(self, *directories: str) -> DependencyGraph:
        """
        Build the graph from every matching file under ``directories``.

        Each directory is also searched when resolving references.
        """
        seeds = []
        for directory in directories:
            directory = self.add_scan_dir(directory)
            found = await self.discover(directory)
            logger.info(f"Discovered {len(found)} file(s) under {directory}")
            seeds.extend(found)
        return await self.build(seeds)

    def search_dirs(self, path: str) -> List[str]:
        """Directories to resolve references of ``path`` against, in order."""
        dirs = []
        for directory in [os.path.dirname(path), *self.scan_dirs, *self.options.load_paths]:
            if directory and directory not in dirs:
                dirs.append(directory)
        return dirs

    def is_included(self, path: str) -> bool:
        """Apply the include filters, then let exclusions override."""
        included = not self.options.include or any(
            pattern in path for pattern in self.options.include
        )
        if included and any(pattern in path for pattern in self.options.exclude):
            included = False
        return included

    async def _run(self, path: str, parent_path: Optional[str]) -> None:
        try:
            await self._process(path, parent_path)
        except Exception as e:
            self._errors.append(e)
        finally:
            self._pending.done()

    async def _process(self, path: str, parent_path: Optional[str]) -> None:
        node = self.graph.get_or_create(path)
        if parent_path:
            self.graph.link(parent_path, path)

        if node.is_file is None:
            try:
                st = await self.fs.stat(path)
            except OSError as e:
                logger.debug(f"Cannot stat {path}: {e}")
                node.is_file = False
            else:
                node.is_file = stat.S_ISREG(st.st_mode)
                node.modified = datetime.fromtimestamp(st.st_mtime)

        if not node.is_file:
            logger.debug(f"Skipping {path}: not a regular file")
            return

        if node.included is None:
            node.included = self.is_included(path)
        if not node.included:
            logger.debug(f"Skipping {path}: excluded")
            return

        if node.processed:
            return
        # Set before the read suspends so a rediscovery never reads twice
        node.processed = True

        try:
            content = await self.fs.read_text(path)
        except OSError as e:
            logger.error(f"Failed to read {path}: {e}")
            raise ReadFailureError(path, str(e)) from e

        search_dirs = self.search_dirs(path)
        for reference in self.extractor.parse(content):
            try:
                child = await self.resolver.resolve(reference, search_dirs, path)
            except UnresolvedReferenceError as e:
                logger.debug(str(e))
                continue
            if self.graph.link(path, child):
                self.schedule(child, path)

"""
Path resolution for raw references.

Maps a reference such as ``./foo`` or ``styles/button`` to an existing
file by searching an ordered list of directories with an ordered list
of candidate extensions. Resolution is deterministic: directory order
outranks extension order, and the first existing candidate wins.
"""

import logging
import os
import re
from typing import List, Optional, Sequence

from importgraph.core.exceptions import UnresolvedReferenceError
from importgraph.utils.fs import AsyncFileSystem

logger = logging.getLogger(__name__)

INDEX_NAME = "index"
PARTIAL_PREFIX = "_"


def _extension_of(path: str) -> str:
    return os.path.splitext(path)[1].lstrip(".")


class PathResolver:
    """
    Resolves references against search directories and extensions.

    Within one search directory candidates are tried in this order:
    ``name.ext`` for each extension, then ``name/index.ext`` when
    ``name`` is a directory, then the underscore partial ``_name.ext``.
    """

    def __init__(self, extensions: Sequence[str], fs: Optional[AsyncFileSystem] = None):
        self.extensions = [ext.lstrip(".") for ext in extensions]
        self.fs = fs or AsyncFileSystem()

    def candidate_extensions(
        self, reference: str, referencing_path: Optional[str] = None
    ) -> List[str]:
        """
        Order the extensions to try for a reference.

        An explicit supported extension on the reference is used alone.
        Otherwise the referencing file's own extension, if supported,
        is moved to the front.
        """
        extension = _extension_of(reference)
        if extension and extension in self.extensions:
            return [extension]

        extensions = list(self.extensions)
        if referencing_path:
            preferred = _extension_of(referencing_path)
            if preferred in extensions and extensions.index(preferred) > 0:
                extensions.remove(preferred)
                extensions.insert(0, preferred)
        return extensions

    @staticmethod
    def strip_extension(reference: str, extensions: Sequence[str]) -> str:
        if not extensions:
            return reference
        trailing = re.compile(
            r"\.(" + "|".join(re.escape(ext) for ext in extensions) + r")$",
            re.IGNORECASE,
        )
        return trailing.sub("", reference)

    async def resolve(
        self,
        reference: str,
        search_dirs: Sequence[str],
        referencing_path: Optional[str] = None,
    ) -> str:
        """
        Resolve a reference to the real path of an existing file.

        Args:
            reference: Raw reference string as extracted from content.
            search_dirs: Directories to search, in order.
            referencing_path: File the reference was found in.

        Returns:
            Real absolute path of the matching file.

        Raises:
            UnresolvedReferenceError: If no candidate exists.
        """
        extensions = self.candidate_extensions(reference, referencing_path)
        name = self.strip_extension(reference, extensions)

        for search_dir in search_dirs:
            base = os.path.normpath(os.path.join(search_dir, name))

            found = await self._first_file([f"{base}.{ext}" for ext in extensions])

            if found is None and await self.fs.is_dir(base):
                index = os.path.join(base, INDEX_NAME)
                found = await self._first_file([f"{index}.{ext}" for ext in extensions])

            if found is None:
                found = await self._first_file(
                    [self._partial(f"{base}.{ext}") for ext in extensions]
                )

            if found is not None:
                resolved = await self.fs.realpath(found)
                logger.debug(f"Resolved '{reference}' -> {resolved}")
                return resolved

        raise UnresolvedReferenceError(reference, referencing_path)

    async def _first_file(self, candidates: List[str]) -> Optional[str]:
        for candidate in candidates:
            if await self.fs.is_file(candidate):
                return candidate
        return None

    @staticmethod
    def _partial(path: str) -> str:
        directory, filename = os.path.split(path)
        return os.path.join(directory, PARTIAL_PREFIX + filename)

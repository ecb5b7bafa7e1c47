"""
Non-blocking filesystem primitives.

Every blocking call is pushed to a worker thread so that the
event loop can interleave the I/O of many files. These coroutines
are the only suspension points of a graph build.
"""

import asyncio
import os
from typing import List


class AsyncFileSystem:
    """Coroutine wrappers around the stat, read and walk primitives."""

    encoding = "utf-8"

    async def is_file(self, path: str) -> bool:
        return await asyncio.to_thread(os.path.isfile, path)

    async def is_dir(self, path: str) -> bool:
        return await asyncio.to_thread(os.path.isdir, path)

    async def stat(self, path: str) -> os.stat_result:
        return await asyncio.to_thread(os.stat, path)

    async def realpath(self, path: str) -> str:
        return await asyncio.to_thread(os.path.realpath, path)

    async def read_text(self, path: str) -> str:
        """Read a whole file, replacing undecodable bytes."""
        return await asyncio.to_thread(self._read, path)

    async def list_files(self, directory: str) -> List[str]:
        """List every file below ``directory``, hidden ones included, sorted."""
        return await asyncio.to_thread(self._walk, directory)

    def _read(self, path: str) -> str:
        with open(path, "r", encoding=self.encoding, errors="replace") as f:
            return f.read()

    @staticmethod
    def _walk(directory: str) -> List[str]:
        files = []
        for root, dirs, names in os.walk(directory):
            dirs.sort()
            for name in sorted(names):
                files.append(os.path.join(root, name))
        return files

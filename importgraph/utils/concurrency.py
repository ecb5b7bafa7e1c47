"""
Counted completion barrier for fan-out work on the event loop.
"""

import asyncio


class WaitGroup:
    """
    Counts outstanding units of work and signals when none remain.

    Work is registered with :meth:`add` before it is scheduled and
    released with :meth:`done` once it settles, whatever the outcome.
    :meth:`wait` returns as soon as the counter is back at zero.
    """

    def __init__(self):
        self._count = 0
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def count(self) -> int:
        return self._count

    def add(self, n: int = 1) -> None:
        self._count += n
        if self._count > 0:
            self._idle.clear()

    def done(self) -> None:
        if self._count <= 0:
            raise RuntimeError("WaitGroup counter would drop below zero")
        self._count -= 1
        if self._count == 0:
            self._idle.set()

    async def wait(self) -> None:
        await self._idle.wait()

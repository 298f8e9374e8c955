# asyncfsm/runtime/concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio


class AdmissionLock:
    """
    Per-machine serialization point for ``fire`` and ``reset``. Waiters are
    admitted in arrival order, and a new arrival never overtakes a queued waiter.

    Must be used from a single event loop.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._waiting = 0

    @property
    def in_flight(self) -> bool:
        """True while an admitted operation holds the lock."""
        return self._lock.locked()

    @property
    def waiting(self) -> int:
        """Number of operations queued behind the current holder."""
        return self._waiting

    async def acquire(self) -> None:
        self._waiting += 1
        try:
            await self._lock.acquire()
        finally:
            self._waiting -= 1

    def release(self) -> None:
        self._lock.release()

    async def __aenter__(self) -> "AdmissionLock":
        await self.acquire()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()

"""In-process deduplication of concurrent calls that share a key."""

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass, field
from typing import TypeVar

T = TypeVar("T")


@dataclass
class SingleFlight:
    """Run at most one call per key; concurrent callers share its outcome."""

    _calls: dict[Hashable, "asyncio.Task[object]"] = field(default_factory=dict)

    async def do(self, key: Hashable, func: Callable[[], Awaitable[T]]) -> T:
        """Await ``func`` or join the call already in flight for ``key``."""
        task = self._calls.get(key)
        if task is None:
            task = asyncio.ensure_future(func())
            self._calls[key] = task
            task.add_done_callback(lambda done: self._forget(key, done))
        # Shielded so a cancelled caller does not cancel the shared call.
        return await asyncio.shield(task)

    def in_flight(self, key: Hashable) -> bool:
        """Return true while a call for the key is running."""
        return key in self._calls

    def _forget(self, key: Hashable, task: "asyncio.Task[object]") -> None:
        if self._calls.get(key) is task:
            del self._calls[key]
        if not task.cancelled():
            # Marks the error as retrieved when every caller has gone away.
            task.exception()

"""Registry of live connections.

Learn: This is the only shared mutable structure in the live subsystem.
Every mutation and every iteration goes through one lock, but the lock
only covers the set operation or the copy of the member list — never a
send. Fan-out iterates a snapshot, so a slow client can't block register
or unregister for anyone else.
"""

import asyncio
import threading
from typing import Awaitable, Callable, Protocol, TypeVar

T = TypeVar("T")


class Connection(Protocol):
    """A live client the server can push text messages to."""

    @property
    def ready(self) -> bool: ...

    async def send(self, message: str) -> None: ...

    async def close(self) -> None: ...


class ConnectionRegistry:
    """Set of currently connected live clients."""

    def __init__(self):
        self._lock = threading.Lock()
        self._connections: dict[int, Connection] = {}

    def register(self, connection: Connection) -> None:
        with self._lock:
            self._connections[id(connection)] = connection

    def unregister(self, connection: Connection) -> bool:
        """Remove a connection. Returns False if it was already gone."""
        with self._lock:
            return self._connections.pop(id(connection), None) is not None

    def snapshot(self) -> list[Connection]:
        """Copy of the current members, in registration order."""
        with self._lock:
            return list(self._connections.values())

    async def for_each(
        self, action: Callable[[Connection], Awaitable[T]]
    ) -> list[T]:
        """Run an async action against every current member concurrently."""
        return list(await asyncio.gather(*(action(c) for c in self.snapshot())))

    def __len__(self) -> int:
        with self._lock:
            return len(self._connections)

    def __contains__(self, connection: object) -> bool:
        with self._lock:
            return self._connections.get(id(connection)) is connection

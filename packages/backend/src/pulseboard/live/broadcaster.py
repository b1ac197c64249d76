"""Stats broadcaster — recompute and fan out after every workspace write.

Learn: The broadcaster is an ordinary object built by the app factory with
the repository it reads from. Tests construct their own with a fake
repository and fake connections; there is no module-level state.

Delivery per connection is best-effort:
  SEND → success
       → not ready / raised / timed out → unregister, close, carry on
No retries, no queue. The next broadcast carries a full snapshot anyway.

Broadcasts are serialized by an asyncio.Lock, so every connection sees
snapshots in the order the writes completed. New connections are greeted
under the same lock, so the greeting always comes before any broadcast.
"""

import asyncio
from typing import Optional

import structlog

from pulseboard.live.messages import encode_info, encode_stats
from pulseboard.live.registry import Connection, ConnectionRegistry
from pulseboard.live.stats import StatsSnapshot, StatsSource, compute_stats

logger = structlog.get_logger()


class StatsBroadcaster:
    """Pushes workspace statistics to every live connection."""

    def __init__(
        self,
        repository: StatsSource,
        registry: Optional[ConnectionRegistry] = None,
        send_timeout: Optional[float] = None,
    ):
        self.repository = repository
        self.registry = registry if registry is not None else ConnectionRegistry()
        self.send_timeout = send_timeout or None
        self._lock = asyncio.Lock()

    async def compute_stats(self) -> StatsSnapshot:
        return await compute_stats(self.repository)

    async def on_workspace_changed(self) -> int:
        """Broadcast a fresh snapshot. Returns how many connections got it.

        Repository errors propagate; transport errors never do.
        """
        async with self._lock:
            snapshot = await self.compute_stats()
            message = encode_stats(snapshot)
            results = await self.registry.for_each(
                lambda connection: self._deliver(connection, message)
            )

        delivered = sum(1 for ok in results if ok)
        logger.info(
            "live.broadcast",
            recipients=len(results),
            delivered=delivered,
            total_projects=snapshot.total_projects,
            total_tasks=snapshot.total_tasks,
        )
        return delivered

    async def attach(self, connection: Connection) -> bool:
        """Greet a newly accepted connection and start broadcasting to it.

        Sends an info message and the current snapshot, then registers.
        Returns False if the greeting couldn't be delivered.
        """
        async with self._lock:
            snapshot = await self.compute_stats()
            for message in (encode_info(), encode_stats(snapshot)):
                if not await self._send(connection, message):
                    return False
            self.registry.register(connection)

        logger.info("live.connected", connection=repr(connection), live=len(self.registry))
        return True

    def detach(self, connection: Connection) -> None:
        """Forget a connection whose transport closed or errored."""
        if self.registry.unregister(connection):
            logger.info(
                "live.disconnected", connection=repr(connection), live=len(self.registry)
            )

    async def _deliver(self, connection: Connection, message: str) -> bool:
        if await self._send(connection, message):
            return True
        self.registry.unregister(connection)
        # Closing tells the client to reconnect instead of waiting on a dead feed.
        await connection.close()
        return False

    async def _send(self, connection: Connection, message: str) -> bool:
        if not connection.ready:
            logger.info("live.connection_not_ready", connection=repr(connection))
            return False
        try:
            if self.send_timeout:
                await asyncio.wait_for(connection.send(message), self.send_timeout)
            else:
                await connection.send(message)
        except Exception as e:
            logger.warning(
                "live.send_failed",
                connection=repr(connection),
                error=repr(e),
            )
            return False
        return True

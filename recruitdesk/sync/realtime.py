"""
Live collection subscriptions over MongoDB.

Each subscription pushes the whole collection, newest first, to its callback:
once when it starts and again after every change. Change streams need a
replica set; ``poll`` mode re-reads the collection on an interval instead and
pushes only when the result differs from the last push.

Errors inside a subscription are logged and end that subscription; they are
never raised to the subscriber.
"""

import asyncio
import inspect
import itertools
from typing import Any, Awaitable, Callable, Optional, Union

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from recruitdesk.data.database import get_async_db
from recruitdesk.utils.config import get_settings
from recruitdesk.utils.logger import LoggerMixin

Snapshot = list[dict[str, Any]]
SnapshotCallback = Callable[[Snapshot], Union[None, Awaitable[None]]]


def normalize_document(document: dict[str, Any]) -> dict[str, Any]:
    """Flatten a stored document to ``{"id": ..., **fields}``."""
    fields = {k: v for k, v in document.items() if k != "_id"}
    return {"id": str(document["_id"]), **fields}


class Subscription:
    """Handle for one live query; ``cancel()`` stops it."""

    def __init__(
        self,
        key: str,
        collection: str,
        task: "asyncio.Task[None]",
        on_cancel: Callable[[str], None],
    ) -> None:
        self.key = key
        self.collection = collection
        self._task = task
        self._on_cancel = on_cancel

    @property
    def active(self) -> bool:
        return not self._task.done()

    def cancel(self) -> None:
        self._task.cancel()
        self._on_cancel(self.key)

    async def wait(self) -> None:
        """Wait until the subscription ends."""
        await asyncio.gather(self._task, return_exceptions=True)


class RealtimeSync(LoggerMixin):
    """
    Tracks live subscriptions for a session.

    Usage:
        async with RealtimeSync() as sync:
            sync.subscribe("jobs", on_jobs)
            ...
    """

    def __init__(
        self,
        db: Optional[AsyncIOMotorDatabase] = None,
        mode: Optional[str] = None,
        poll_interval: Optional[float] = None,
    ) -> None:
        settings = get_settings().sync
        self._db = db
        self.mode = mode or settings.mode
        self.poll_interval = poll_interval if poll_interval is not None else settings.poll_interval_seconds
        self._subscriptions: dict[str, Subscription] = {}
        self._counter = itertools.count(1)

    @property
    def db(self) -> AsyncIOMotorDatabase:
        if self._db is None:
            self._db = get_async_db()
        return self._db

    @property
    def subscriptions(self) -> dict[str, Subscription]:
        return dict(self._subscriptions)

    async def __aenter__(self) -> "RealtimeSync":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # -------------------------------------------------------------------------
    # Subscribe / Unsubscribe
    # -------------------------------------------------------------------------

    def subscribe(
        self,
        collection_name: str,
        callback: SnapshotCallback,
        sort_field: str = "created_at",
    ) -> Subscription:
        """
        Start a live query on ``collection_name``.

        Must be called from a running event loop.

        Args:
            collection_name: Collection to watch
            callback: Receives the full normalized result set; may be async
            sort_field: Field the result set is ordered by, descending

        Returns:
            Subscription handle
        """
        key = f"{collection_name}_{next(self._counter)}"
        task = asyncio.get_running_loop().create_task(
            self._run(collection_name, callback, sort_field),
            name=f"realtime:{key}",
        )
        subscription = Subscription(key, collection_name, task, self._forget)
        self._subscriptions[key] = subscription
        self.logger.debug(f"Subscribed to {collection_name} ({self.mode})")
        return subscription

    def _forget(self, key: str) -> None:
        self._subscriptions.pop(key, None)

    def unsubscribe_all(self) -> None:
        """Cancel every active subscription."""
        for subscription in list(self._subscriptions.values()):
            subscription.cancel()
        self._subscriptions.clear()
        self.logger.info("All realtime subscriptions cleaned up")

    async def aclose(self) -> None:
        """Cancel every subscription and wait for them to finish."""
        subscriptions = list(self._subscriptions.values())
        self.unsubscribe_all()
        for subscription in subscriptions:
            await subscription.wait()

    # -------------------------------------------------------------------------
    # Live Queries
    # -------------------------------------------------------------------------

    async def fetch_snapshot(self, collection_name: str, sort_field: str = "created_at") -> Snapshot:
        """Read the whole collection once, newest first."""
        cursor = self.db[collection_name].find({}).sort(sort_field, DESCENDING)
        documents = await cursor.to_list(length=None)
        return [normalize_document(d) for d in documents]

    async def _push(self, collection_name: str, callback: SnapshotCallback, snapshot: Snapshot) -> None:
        self.logger.debug(f"Realtime update from {collection_name}: {len(snapshot)} items")
        result = callback(snapshot)
        if inspect.isawaitable(result):
            await result

    async def _run(self, collection_name: str, callback: SnapshotCallback, sort_field: str) -> None:
        try:
            if self.mode == "poll":
                await self._poll(collection_name, callback, sort_field)
            else:
                await self._watch(collection_name, callback, sort_field)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.logger.error(f"Error in {collection_name} subscription: {e}")

    async def _watch(self, collection_name: str, callback: SnapshotCallback, sort_field: str) -> None:
        async with self.db[collection_name].watch() as stream:
            await self._push(collection_name, callback, await self.fetch_snapshot(collection_name, sort_field))
            async for _change in stream:
                await self._push(collection_name, callback, await self.fetch_snapshot(collection_name, sort_field))

    async def _poll(self, collection_name: str, callback: SnapshotCallback, sort_field: str) -> None:
        last: Optional[Snapshot] = None
        while True:
            snapshot = await self.fetch_snapshot(collection_name, sort_field)
            if snapshot != last:
                await self._push(collection_name, callback, snapshot)
                last = snapshot
            await asyncio.sleep(self.poll_interval)

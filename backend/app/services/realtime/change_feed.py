# app/services/realtime/change_feed.py
"""
In-process change feed: services publish row changes per table, SSE endpoints
subscribe and turn bursts of changes into throttled refresh signals.
"""
from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

logger = logging.getLogger("realtime.feed")

TABLES = ("jobs", "messages", "notifications")


@dataclass
class ChangeEvent:
    table: str
    event: str  # INSERT | UPDATE | DELETE
    row: dict[str, Any] = field(default_factory=dict)


RowFilter = Callable[[dict[str, Any]], bool]


class Subscription:
    def __init__(self, feed: "ChangeFeed", table: str, row_filter: Optional[RowFilter], loop: asyncio.AbstractEventLoop):
        self.feed = feed
        self.table = table
        self.row_filter = row_filter
        self.loop = loop
        self.queue: asyncio.Queue[ChangeEvent] = asyncio.Queue()

    def matches(self, evt: ChangeEvent) -> bool:
        if self.row_filter is None:
            return True
        try:
            return bool(self.row_filter(evt.row))
        except Exception:
            logger.exception("Row filter failed for %s subscription", self.table)
            return False

    def deliver(self, evt: ChangeEvent) -> None:
        # Publishers run in worker threads; hand the event to the subscriber's loop
        self.loop.call_soon_threadsafe(self.queue.put_nowait, evt)

    async def get(self) -> ChangeEvent:
        return await self.queue.get()

    def close(self) -> None:
        self.feed.unsubscribe(self)


class ChangeFeed:
    def __init__(self) -> None:
        self._subs: dict[str, list[Subscription]] = {t: [] for t in TABLES}
        self._lock = threading.Lock()

    def subscribe(self, table: str, row_filter: Optional[RowFilter] = None) -> Subscription:
        """Must be called from inside a running event loop."""
        if table not in self._subs:
            raise ValueError(f"Unknown table: {table}")
        sub = Subscription(self, table, row_filter, asyncio.get_running_loop())
        with self._lock:
            self._subs[table].append(sub)
        logger.debug("Subscribed to %s (%d listeners)", table, len(self._subs[table]))
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            listeners = self._subs.get(sub.table, [])
            if sub in listeners:
                listeners.remove(sub)

    def subscriber_count(self, table: str) -> int:
        return len(self._subs.get(table, []))

    def publish(self, table: str, event: str, row: dict[str, Any]) -> int:
        """Fan the change out to matching subscribers; returns how many received it."""
        evt = ChangeEvent(table=table, event=event, row=row)
        with self._lock:
            listeners = list(self._subs.get(table, []))
        delivered = 0
        for sub in listeners:
            if not sub.matches(evt):
                continue
            try:
                sub.deliver(evt)
                delivered += 1
            except RuntimeError:
                # Subscriber loop already closed
                self.unsubscribe(sub)
        return delivered


class ThrottledSignal:
    """
    Collapse bursts of change events into one refresh.

    The first event arms a timer of `window` seconds; events arriving before it
    fires are absorbed into the same refresh.
    """

    def __init__(self, subscription: Subscription, window: float):
        self.subscription = subscription
        self.window = window

    async def next_refresh(self, timeout: Optional[float] = None) -> list[ChangeEvent]:
        """Wait for the next burst and return all events it contained.
        Raises asyncio.TimeoutError if nothing arrives within `timeout`."""
        queue = self.subscription.queue
        first = await asyncio.wait_for(queue.get(), timeout)
        await asyncio.sleep(self.window)
        batch = [first]
        while not queue.empty():
            batch.append(queue.get_nowait())
        return batch


change_feed = ChangeFeed()


def publish_change(table: str, event: str, row: dict[str, Any]) -> None:
    """Publish without ever failing the caller's write."""
    try:
        change_feed.publish(table, event, row)
    except Exception:
        logger.exception("Failed to publish %s %s change", table, event)
